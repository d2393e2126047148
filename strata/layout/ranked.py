"""Sugiyama-style layered (ranked) layout engine.

Based on "Methods for Visual Understanding of Hierarchical System
Structures" by Sugiyama et al.
"""

import logging

from strata import graph
from strata.layout import LayoutEngine, Result
from strata.layout.coordinates import assign_coordinates
from strata.layout.distribute import distribute_layers
from strata.layout.dummies import DummyInserter
from strata.layout.minimize import CrossingMinimizer
from strata.layout.ordering import coffman_graham_order

logger = logging.getLogger(__name__)

# Spacing constants
LAYER_SPACING = 1.0   # distance between layers along x
VERTEX_SPACING = 1.0  # distance between vertices of a layer along y


class Ranked(LayoutEngine):
    """Sugiyama-style layered layout engine."""

    def __init__(
        self,
        max_width: int = 10,
        max_rounds: int = 20,
        transpose_after: int = 3,
        layer_spacing: float = LAYER_SPACING,
        vertex_spacing: float = VERTEX_SPACING,
        refine: bool = True,
        progress: bool = False
    ):
        """
        Initialize the ranked layout engine.

        Args:
            max_width: Maximum number of vertices, relays included, per layer.
                A layer is widened past it only when no vertex can be demoted
                out of it; see ``Result.metadata["widened_layers"]``.
            max_rounds: Cap on crossing minimization rounds.
            transpose_after: Rounds with a higher index also run the transpose pass.
            layer_spacing: Distance between layers along x.
            vertex_spacing: Distance between vertices of a layer along y.
            refine: Nudge vertices towards the median of their children.
            progress: Show a progress bar over minimization rounds.
        """
        if max_width < 1:
            raise ValueError(f"Invalid max_width: {max_width}. Must be at least 1")
        if max_rounds < 1:
            raise ValueError(f"Invalid max_rounds: {max_rounds}. Must be at least 1")
        self.max_width = max_width
        self.max_rounds = max_rounds
        self.transpose_after = transpose_after
        self.layer_spacing = layer_spacing
        self.vertex_spacing = vertex_spacing
        self.refine = refine
        self.progress = progress

    def fit(self, g: graph.Graph) -> Result:
        """
        Generate a layered layout for the given graph.

        The input graph is left untouched; the pipeline runs on a fresh copy
        that also holds the relay vertices of the final layering.

        Args:
            g: Graph object containing items and prerequisites.

        Returns:
            A Result object with layer and coordinates for each vertex.
        """
        g = g.copy()

        # Phase 1: Coffman-Graham ordering
        order = coffman_graham_order(g)

        # Phase 2: Distribute into layers
        layers = distribute_layers(g, order, self.max_width)

        # Phase 3: Insert dummy vertices
        inserter = DummyInserter(g, layers, self.max_width)
        layers = inserter.run()

        # Phase 4: Minimize crossings
        minimizer = CrossingMinimizer(
            max_rounds=self.max_rounds,
            transpose_after=self.transpose_after,
            progress=self.progress,
        )
        minimized = minimizer.run(g, layers)
        layers = minimized.layers

        # Phase 5: Assign coordinates
        assign_coordinates(
            g, layers,
            layer_spacing=self.layer_spacing,
            vertex_spacing=self.vertex_spacing,
            refine=self.refine,
        )

        logger.info(
            "Laid out %d items in %d layers with %d dummies; "
            "crossings %d -> %d after %d rounds",
            len(g.items), len(layers), inserter.dummies,
            minimized.initial_crossings, minimized.crossings, minimized.rounds
        )

        layout = graph.Layout(g, layers, layer_spacing=self.layer_spacing)
        return Result(layout, metadata={
            "layer_count": len(layers),
            "rounds": minimized.rounds,
            "crossings": minimized.crossings,
            "initial_crossings": minimized.initial_crossings,
            "dummies": inserter.dummies,
            "demotions": inserter.demotions,
            "widened_layers": sorted(inserter.widened),
            "history": minimized.history,
        })
