import pytest

from strata.errors import (
    CyclicGraphError,
    DanglingReferenceError,
    GraphInputError,
)
from strata.graph import DUMMY_PREFIX, Graph, Item, Layout


class TestGraphConstruction:
    def test_adjacency_is_mutual(self):
        g = Graph([Item("a"), Item("b", ("a",)), Item("c", ("a", "b"))])
        a, b, c = (g.name2idx[n] for n in "abc")
        assert g[a].children == [b, c]
        assert g[b].parents == [a]
        assert g[b].children == [c]
        assert g[c].parents == [a, b]

    def test_vertices_follow_input_order(self):
        g = Graph([Item("z"), Item("y"), Item("x")])
        assert [v.name for v in g.vertices] == ["z", "y", "x"]
        assert all(not v.is_dummy for v in g.vertices)

    def test_absent_prerequisites_mean_none(self):
        g = Graph([Item("a", None), Item("b", ())])
        assert g[0].parents == []
        assert g[1].parents == []

    def test_duplicate_prerequisites_collapse(self):
        g = Graph([Item("a"), Item("b", ("a", "a"))])
        assert g[0].children == [1]
        assert g[1].parents == [0]

    def test_rank_is_kept(self):
        g = Graph([Item("a", rank=3)])
        assert g[0].rank == 3

    def test_from_node_names(self):
        g = Graph.from_node_names(
            node_names=["foo", "bim", "bar"],
            edges=[("foo", "bim"), ("bim", "bar")],
            ranks={"foo": 2},
        )
        assert g[g.name2idx["bar"]].parents == [g.name2idx["bim"]]
        assert g[g.name2idx["foo"]].rank == 2
        assert g[g.name2idx["bar"]].rank == 0


class TestGraphValidation:
    def test_duplicate_id_rejected(self):
        with pytest.raises(GraphInputError):
            Graph([Item("a"), Item("a")])

    def test_dangling_reference_rejected(self):
        with pytest.raises(DanglingReferenceError, match="ghost"):
            Graph([Item("a", ("ghost",))])

    def test_dangling_reference_is_value_error(self):
        with pytest.raises(ValueError):
            Graph([Item("a", ("ghost",))])

    def test_two_cycle_rejected(self):
        with pytest.raises(CyclicGraphError):
            Graph([Item("A", ("B",)), Item("B", ("A",))])

    def test_self_prerequisite_rejected(self):
        with pytest.raises(CyclicGraphError):
            Graph([Item("A", ("A",))])

    def test_cycle_message_names_members(self):
        items = [Item("root"), Item("x", ("root", "z")), Item("y", ("x",)), Item("z", ("y",))]
        with pytest.raises(CyclicGraphError) as excinfo:
            Graph(items)
        message = str(excinfo.value)
        assert "x" in message and "y" in message and "z" in message
        assert "root" not in message

    def test_empty_graph(self):
        g = Graph([])
        assert len(g) == 0
        assert g.edges() == []


class TestGraphMutation:
    def test_add_dummy(self):
        g = Graph([Item("a"), Item("b", ("a",))])
        dummy = g.add_dummy()
        assert dummy.index == 2
        assert dummy.is_dummy
        assert dummy.name == f"{DUMMY_PREFIX}2"
        assert g.dummy_vertices() == [dummy]
        assert len(g.real_vertices()) == 2

    def test_reroute(self):
        g = Graph([Item("a"), Item("b", ("a",))])
        dummy = g.add_dummy()
        g.link(0, dummy.index)
        g.reroute(0, 1, via=dummy.index)
        assert g[0].children == [dummy.index]
        assert g[1].parents == [dummy.index]
        assert dummy.parents == [0]
        assert dummy.children == [1]

    def test_copy_is_fresh(self):
        g = Graph([Item("a"), Item("b", ("a",))])
        dummy = g.add_dummy()
        g.link(0, dummy.index)
        g[0].layer = 5
        fresh = g.copy()
        assert len(fresh) == 2
        assert fresh[0].children == [1]
        assert fresh[0].layer is None
        assert fresh.items == g.items


class TestLayout:
    def test_accessors(self):
        g = Graph([Item("a"), Item("b", ("a",))])
        for v, (layer, x, y) in zip(g.vertices, [(0, 0.0, 0.0), (1, 2.0, 0.5)]):
            v.layer, v.x, v.y = layer, x, y
        layout = Layout(g, [[0], [1]], layer_spacing=2.0)
        assert layout.layer_count == 2
        assert layout.get_node_position("b") == (2.0, 0.5)
        assert layout.get_node_layer("b") == 1
        assert layout.max_x == 4.0
        assert layout.layer_names() == [["a"], ["b"]]
        assert layout.tight_edges() == [("a", "b")]
        placements = layout.placements()
        assert placements["a"].layer == 0
        assert placements["b"].y == 0.5

    def test_max_x_is_one_step_past_last_layer(self):
        g = Graph([Item("a")])
        g[0].layer, g[0].x, g[0].y = 0, 0.0, 0.0
        assert Layout(g, [[0]], layer_spacing=3.0).max_x == 3.0
        assert Layout(g, []).max_x == 0.0
