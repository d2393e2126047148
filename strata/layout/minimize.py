"""Vertex ordering within layers.

Based on "A Technique for Drawing Directed Graphs" by Gansner et al.:
a weighted median sweep followed by a transposition pass, keeping the
layering with the fewest crossings seen so far.
"""

import logging
from dataclasses import dataclass, field

from tqdm import tqdm

from strata import graph
from strata.layout.crossings import count_crossings, total_crossings

logger = logging.getLogger(__name__)


def median_value(positions: list[float]) -> float | None:
    """
    Weighted median of sorted neighbor positions.

    Returns None for a vertex without neighbors, which keeps it in place.
    For more than two positions the two middle values are interpolated,
    leaning towards the side where neighbors are packed more tightly.
    """
    n = len(positions)
    m = n // 2
    if n == 0:
        return None
    if n % 2 == 1:
        return positions[m]
    if n == 2:
        return (positions[0] + positions[1]) / 2
    left = positions[m - 1] - positions[0]
    right = positions[n - 1] - positions[m]
    return (positions[m - 1] * right + positions[m] * left) / (left + right)


def neighbor_positions(g: graph.Graph, idx: int, adjacent: list[int], upstream: bool) -> list[int]:
    """Sorted positions in ``adjacent`` of the parents (upstream) or children of a vertex."""
    position = {other: i for i, other in enumerate(adjacent)}
    neighbors = g[idx].parents if upstream else g[idx].children
    return sorted(position[n] for n in neighbors if n in position)


def sort_layer(layer: list[int], medians: list[float | None]) -> bool:
    """
    Stable-sort a layer in place by median, leaving fixed vertices in their slots.

    Returns:
        True if the order of the layer changed.
    """
    movable = sorted(
        (m, i) for i, m in enumerate(medians) if m is not None
    )
    ordered = iter(layer[i] for _, i in movable)
    new_order = [idx if m is None else next(ordered) for idx, m in zip(layer, medians)]
    changed = new_order != layer
    layer[:] = new_order
    return changed


def weighted_median(g: graph.Graph, layers: list[list[int]], sweep: int) -> bool:
    """
    Reorder every layer by the weighted median of its neighbors.

    Even sweeps go left to right against the parents in the previous layer;
    odd sweeps go right to left against the children in the next layer.

    Returns:
        True if any layer changed order.
    """
    moved = False
    if sweep % 2 == 0:
        indices = range(1, len(layers))
        step = -1
    else:
        indices = range(len(layers) - 2, -1, -1)
        step = 1
    for i in indices:
        adjacent = layers[i + step]
        medians = [
            median_value(neighbor_positions(g, idx, adjacent, upstream=step < 0))
            for idx in layers[i]
        ]
        if sort_layer(layers[i], medians):
            moved = True
    return moved


def transpose(g: graph.Graph, layers: list[list[int]]) -> bool:
    """
    Swap adjacent vertices while it strictly reduces crossings with the previous layer.

    Returns:
        True if any swap was kept.
    """
    improved = False
    changed = True
    while changed:
        changed = False
        for r in range(1, len(layers)):
            upper, lower = layers[r - 1], layers[r]
            for i in range(len(lower) - 1):
                before = count_crossings(g, upper, lower)
                lower[i], lower[i + 1] = lower[i + 1], lower[i]
                if count_crossings(g, upper, lower) < before:
                    changed = improved = True
                else:
                    lower[i], lower[i + 1] = lower[i + 1], lower[i]
    return improved


def snapshot(layers: list[list[int]]) -> list[list[int]]:
    return [list(layer) for layer in layers]


@dataclass
class MinimizeResult:
    layers: list[list[int]]
    rounds: int
    crossings: int
    initial_crossings: int
    history: list[dict] = field(default_factory=list)


class CrossingMinimizer:
    """Bounded local search over vertex orders within layers."""

    def __init__(
        self,
        max_rounds: int = 20,
        transpose_after: int = 3,
        progress: bool = False
    ):
        self.max_rounds = max_rounds
        self.transpose_after = transpose_after
        self.progress = progress

    def run(self, g: graph.Graph, layers: list[list[int]]) -> MinimizeResult:
        """
        Improve the order of vertices within layers.

        Rounds stop early once neither heuristic moves anything and the
        total crossing count does not improve on the best seen.

        Args:
            g: Graph with tight edges only.
            layers: Layering to improve, modified in place.

        Returns:
            A MinimizeResult holding the best layering seen, which is not
            necessarily the state of the last round.
        """
        best = snapshot(layers)
        initial = best_crossings = total_crossings(g, layers)
        history: list[dict] = []

        pbar = tqdm(total=self.max_rounds, desc="Ordering") if self.progress else None
        rounds = 0
        try:
            for rnd in range(self.max_rounds):
                rounds = rnd + 1
                median_moved = weighted_median(g, layers, rnd)
                transposed = False
                if rnd > self.transpose_after:
                    transposed = transpose(g, layers)

                crossings = total_crossings(g, layers)
                improved = crossings < best_crossings
                if improved:
                    best = snapshot(layers)
                    best_crossings = crossings

                history.append({
                    "round": rnd,
                    "crossings": crossings,
                    "best": best_crossings,
                    "median_moved": median_moved,
                    "transposed": transposed,
                })
                if pbar:
                    pbar.update(1)
                    pbar.set_postfix(crossings=crossings, best=best_crossings)

                if not (median_moved or transposed or improved):
                    break
        finally:
            if pbar:
                pbar.close()

        logger.debug(
            "Crossing minimization: %d -> %d crossings in %d rounds",
            initial, best_crossings, rounds
        )
        return MinimizeResult(
            layers=best,
            rounds=rounds,
            crossings=best_crossings,
            initial_crossings=initial,
            history=history,
        )
