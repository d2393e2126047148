from conftest import names

from strata.graph import Graph, Item
from strata.layout.distribute import distribute_layers
from strata.layout.ordering import coffman_graham_order


def distribute(g: Graph, max_width: int) -> list[list[int]]:
    return distribute_layers(g, coffman_graham_order(g), max_width)


class TestDistributeLayers:
    def test_diamond(self):
        g = Graph([Item("A"), Item("B", ("A",)), Item("C", ("A",)), Item("D", ("B", "C"))])
        assert names(g, distribute(g, 2)) == [["A"], ["B", "C"], ["D"]]

    def test_width_overflow_without_edges(self):
        g = Graph([Item(name) for name in "abcdefg"])
        layers = distribute(g, 3)
        assert [len(layer) for layer in layers] == [3, 3, 1]
        assert names(g, layers) == [["a", "b", "c"], ["d", "e", "f"], ["g"]]

    def test_chain_width_one(self):
        g = Graph([Item("a"), Item("b", ("a",)), Item("c", ("b",))])
        assert names(g, distribute(g, 1)) == [["a"], ["b"], ["c"]]

    def test_isolated_vertex_promoted(self):
        g = Graph([Item("x"), Item("y", ("x",)), Item("z")])
        assert names(g, distribute(g, 10)) == [["x", "z"], ["y"]]

    def test_promotion_respects_width(self):
        g = Graph([Item("x"), Item("y", ("x",)), Item("z")])
        assert names(g, distribute(g, 1)) == [["x"], ["z"], ["y"]]

    def test_vertex_layers_updated(self):
        g = Graph([Item("A"), Item("B", ("A",)), Item("C", ("B",))])
        layers = distribute(g, 5)
        for i, layer in enumerate(layers):
            for idx in layer:
                assert g[idx].layer == i

    def test_empty(self):
        assert distribute(Graph([]), 3) == []


class TestDistributeProperties:
    def test_width_bound(self, random_graphs):
        for g in random_graphs:
            for max_width in (1, 2, 3, 5):
                layers = distribute(g, max_width)
                assert all(0 < len(layer) <= max_width for layer in layers)

    def test_every_vertex_placed_once(self, random_graphs):
        for g in random_graphs:
            layers = distribute(g, 3)
            placed = sorted(idx for layer in layers for idx in layer)
            assert placed == list(range(len(g)))

    def test_children_in_later_layers(self, random_graphs):
        for g in random_graphs:
            for max_width in (1, 2, 4):
                distribute(g, max_width)
                for parent, child in g.edges():
                    assert g[parent].layer < g[child].layer
