from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from strata.graph import Graph
    from strata.layout.ranked import Ranked


class LayoutConfig(BaseModel):
    """Configuration for the Ranked layout engine."""

    max_width: int = Field(10, ge=1)
    max_rounds: int = Field(20, ge=1)
    transpose_after: int = 3
    layer_spacing: float = 1.0
    vertex_spacing: float = 1.0
    refine: bool = True

    def override(self, **changes) -> LayoutConfig:
        """Copy with some fields replaced, validated like a fresh config."""
        return LayoutConfig.model_validate({**self.model_dump(), **changes})

    def bind(self, progress: bool = False) -> Ranked:
        from strata.layout.ranked import Ranked

        return Ranked(progress=progress, **self.model_dump())


class ItemConfig(BaseModel):
    """A single item of the dependency graph."""

    id: str
    prerequisites: list[str] | None = None
    rank: float = 0


class GraphInputConfig(BaseModel):
    """Top-level configuration for graph input."""

    items: list[ItemConfig]
    layout: LayoutConfig = LayoutConfig()

    def build_graph(self) -> Graph:
        """Build a Graph instance from this configuration."""
        from strata.graph import Graph, Item

        return Graph(
            Item(item.id, tuple(item.prerequisites or ()), item.rank)
            for item in self.items
        )


def load_config(path: str | Path) -> GraphInputConfig:
    """Load a GraphInputConfig from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return GraphInputConfig.model_validate(data)
