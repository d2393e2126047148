"""Edge crossing counts between adjacent layers.

Based on "Counting edge crossings in a 2-layered drawing" by Nagamochi.
"""

import numpy as np

from strata import graph


def edge_matrix(g: graph.Graph, upper: list[int], lower: list[int]) -> np.ndarray:
    """Adjacency between two layers: entry (i, j) is 1 if upper[i] -> lower[j]."""
    matrix = np.zeros((len(upper), len(lower)), dtype=np.int64)
    column = {idx: j for j, idx in enumerate(lower)}
    for i, idx in enumerate(upper):
        for child in g[idx].children:
            j = column.get(child)
            if j is not None:
                matrix[i, j] = 1
    return matrix


def count_crossings(g: graph.Graph, upper: list[int], lower: list[int]) -> int:
    """
    Count pairwise crossings of the edges between two adjacent layers.

    With the lower layer reversed, an edge (i, j) crosses exactly the edges
    inside the rectangle [0, i-1] x [0, j-1]. Edge counts of all such
    rectangles follow the inclusion-exclusion relation

        R(i, j) = R(i, j-1) + R(i-1, j) - R(i-1, j-1) + E(i, j)

    which is a 2D prefix sum of the edge matrix E.

    Args:
        g: Graph holding the adjacency.
        upper: Fixed layer (parents side).
        lower: Permutable layer (children side).

    Returns:
        Number of crossing edge pairs.
    """
    if len(upper) < 2 or len(lower) < 2:
        return 0

    edges = edge_matrix(g, upper, lower)[:, ::-1]
    table = edges.cumsum(axis=0).cumsum(axis=1)
    return int(np.sum(edges[1:, 1:] * table[:-1, :-1]))


def total_crossings(g: graph.Graph, layers: list[list[int]]) -> int:
    """Sum of crossings over every pair of adjacent layers."""
    return sum(
        count_crossings(g, layers[i], layers[i + 1]) for i in range(len(layers) - 1)
    )


def crossings_per_layer(g: graph.Graph, layers: list[list[int]]) -> list[int]:
    """Crossings between layer i and layer i+1, for every i."""
    return [count_crossings(g, layers[i], layers[i + 1]) for i in range(len(layers) - 1)]
