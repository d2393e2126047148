"""Coffman-Graham topological ordering.

Based on "Hierarchical Drawing Algorithms" by Healy and Nikolov.
"""

import logging
from functools import cmp_to_key

from strata import graph
from strata.errors import CyclicGraphError

logger = logging.getLogger(__name__)


def coffman_graham_order(g: graph.Graph) -> list[int]:
    """
    Order all vertices so that every vertex follows its parents.

    Each step selects the least remaining vertex:
      - parentless vertices precede all others; among them lower rank wins;
      - a vertex is eligible once all of its parents are ordered;
      - among eligible vertices, the descending-sorted positions of their
        parents are compared lexicographically and the smaller list wins;
        when one list is a prefix of the other, the longer one wins.
    Ties keep input order.

    Args:
        g: Graph whose vertices are ordered. Relay vertices are ignored.

    Returns:
        Vertex indices in Coffman-Graham order.

    Raises:
        CyclicGraphError: If no remaining vertex is eligible.
    """
    remaining = [v.index for v in g.real_vertices()]
    position: dict[int, int] = {}
    order: list[int] = []

    def parent_positions(idx: int) -> list[int]:
        return sorted((position[p] for p in g[idx].parents), reverse=True)

    def compare(a: int, b: int) -> int:
        a_roots, b_roots = not g[a].parents, not g[b].parents
        if a_roots and b_roots:
            return (g[a].rank > g[b].rank) - (g[a].rank < g[b].rank)
        if a_roots != b_roots:
            return -1 if a_roots else 1
        pa, pb = parent_positions(a), parent_positions(b)
        for x, y in zip(pa, pb):
            if x != y:
                return -1 if x < y else 1
        return len(pb) - len(pa)

    while remaining:
        eligible = [
            idx for idx in remaining
            if all(p in position for p in g[idx].parents)
        ]
        if not eligible:
            names = ", ".join(g[idx].name for idx in remaining)
            raise CyclicGraphError(f"No vertex can be ordered among: {names}")

        selected = min(eligible, key=cmp_to_key(compare))
        position[selected] = len(order)
        order.append(selected)
        remaining.remove(selected)

    logger.debug("Coffman-Graham order: %s", [g[idx].name for idx in order])
    return order
