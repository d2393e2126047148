from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

from strata import graph

if TYPE_CHECKING:
    from strata.config import LayoutConfig


class LayoutEngine:
    """Base class for layout engines."""

    @abstractmethod
    def fit(self, g: graph.Graph) -> "Result":
        """Compute layout for the given graph."""
        pass


class Result:
    """Layout result container."""

    def __init__(
        self,
        layout: graph.Layout,
        metadata: dict | None = None
    ):
        self.layout = layout
        self.metadata = metadata or {}

    @property
    def layer_count(self) -> int:
        return self.layout.layer_count

    @property
    def rounds(self) -> int:
        """Number of crossing minimization rounds actually executed."""
        return self.metadata.get("rounds", 0)

    @property
    def crossings(self) -> int:
        return self.metadata.get("crossings", 0)

    @property
    def widened_layers(self) -> list[int]:
        """Layers holding more than max_width vertices."""
        return self.metadata.get("widened_layers", [])

    def placements(self) -> dict[str, graph.Placement]:
        return self.layout.placements()


def compute_layout(
    items: Iterable[graph.Item] | graph.Graph,
    config: "LayoutConfig | None" = None,
    progress: bool = False
) -> Result:
    """
    Lay out a dependency DAG.

    Args:
        items: Items with prerequisites, or an already built Graph.
        config: Layout parameters; defaults when None.
        progress: Show a progress bar over minimization rounds.

    Returns:
        A Result with a layer and coordinates for every item.

    Raises:
        CyclicGraphError: If prerequisites form a cycle.
        DanglingReferenceError: If a prerequisite names an unknown item.
        LayoutInvariantError: If the layering pipeline breaks an invariant.
    """
    from strata.config import LayoutConfig

    g = items if isinstance(items, graph.Graph) else graph.Graph(items)
    return (config or LayoutConfig()).bind(progress=progress).fit(g)


__all__ = [
    "LayoutEngine",
    "Result",
    "compute_layout",
]
