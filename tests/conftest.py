import random

import pytest

from strata.graph import Graph, Item


def make_random_items(n_nodes: int, edge_density: float, rng: random.Random) -> list[Item]:
    """Random DAG over n0..n{n-1}; edges only go from lower to higher index."""
    prereqs: dict[int, list[str]] = {j: [] for j in range(n_nodes)}
    for i in range(n_nodes):
        for j in range(i + 1, n_nodes):
            if rng.random() < edge_density:
                prereqs[j].append(f"n{i}")
    names = list(range(n_nodes))
    rng.shuffle(names)
    return [Item(f"n{j}", tuple(prereqs[j]), rng.randint(0, 3)) for j in names]


@pytest.fixture
def random_graphs() -> list[Graph]:
    """Seeded random DAGs of various sizes and densities."""
    rng = random.Random(42)
    graphs = []
    for n_nodes in [2, 4, 6, 8, 10, 12, 15]:
        for _ in range(3):
            density = rng.uniform(0.1, 0.4)
            graphs.append(Graph(make_random_items(n_nodes, density, rng)))
    return graphs


def assign_layers(g: Graph, layers: list[list[int]]) -> None:
    for i, layer in enumerate(layers):
        for idx in layer:
            g[idx].layer = i


def by_name(g: Graph, layers: list[list[str]]) -> list[list[int]]:
    return [[g.name2idx[name] for name in layer] for layer in layers]


def names(g: Graph, layers: list[list[int]]) -> list[list[str]]:
    return [[g[idx].name for idx in layer] for layer in layers]
