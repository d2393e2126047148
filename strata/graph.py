import dataclasses
from collections import deque
from collections.abc import Iterable

from strata.errors import CyclicGraphError, DanglingReferenceError, GraphInputError

DUMMY_PREFIX = "__dummy_"


@dataclasses.dataclass(frozen=True)
class Item:
    id: str
    prerequisites: tuple[str, ...] = ()
    rank: float = 0


@dataclasses.dataclass(frozen=True)
class Placement:
    layer: int
    x: float
    y: float


class Vertex:
    def __init__(self, index: int, item: Item | None = None):
        self.index = index
        self.item = item
        self.is_dummy = item is None
        self.layer: int | None = None
        self.x: float | None = None
        self.y: float | None = None
        self.parents: list[int] = []
        self.children: list[int] = []
        # relay continuing this vertex's long edges, at most one
        self.relay: int | None = None

    @property
    def name(self) -> str:
        if self.item is None:
            return f"{DUMMY_PREFIX}{self.index}"
        return self.item.id

    @property
    def rank(self) -> float:
        return self.item.rank if self.item is not None else 0

    def __repr__(self) -> str:
        return f"Vertex({self.name!r}, layer={self.layer})"


class Graph:
    """Dependency DAG stored as an arena of vertices.

    Real vertices occupy the first ``len(items)`` slots, in input order;
    relay (dummy) vertices are appended behind them during layering.
    Adjacency is kept as index lists into ``vertices``.
    """

    def __init__(self, items: Iterable[Item]):
        self.items = list(items)
        self.vertices: list[Vertex] = []
        self.name2idx: dict[str, int] = {}
        for item in self.items:
            if item.id in self.name2idx:
                raise GraphInputError(f"Duplicate item id: {item.id!r}")
            self.name2idx[item.id] = len(self.vertices)
            self.vertices.append(Vertex(len(self.vertices), item))

        for item in self.items:
            child = self.name2idx[item.id]
            for prereq in dict.fromkeys(item.prerequisites or ()):
                if prereq not in self.name2idx:
                    raise DanglingReferenceError(
                        f"Item {item.id!r} requires unknown item {prereq!r}"
                    )
                self.link(self.name2idx[prereq], child)

        self._check_acyclic()

    @classmethod
    def from_node_names(
        cls,
        node_names: list[str],
        edges: list[tuple[str, str]],
        ranks: dict[str, float] | None = None,
    ) -> "Graph":
        """Build a graph from names and (prerequisite, dependent) pairs."""
        ranks = ranks or {}
        prereqs: dict[str, list[str]] = {name: [] for name in node_names}
        for src, dst in edges:
            if dst not in prereqs:
                raise DanglingReferenceError(f"Edge target {dst!r} is not a node")
            prereqs[dst].append(src)
        return cls(
            Item(name, tuple(prereqs[name]), ranks.get(name, 0))
            for name in node_names
        )

    def _check_acyclic(self) -> None:
        in_degree = [len(v.parents) for v in self.vertices]
        queue = deque(i for i, d in enumerate(in_degree) if d == 0)
        seen = 0
        while queue:
            idx = queue.popleft()
            seen += 1
            for child in self.vertices[idx].children:
                in_degree[child] -= 1
                if in_degree[child] == 0:
                    queue.append(child)
        if seen < len(self.vertices):
            stuck = [v.name for v, d in zip(self.vertices, in_degree) if d > 0]
            raise CyclicGraphError(f"Prerequisite cycle among: {', '.join(stuck)}")

    def __len__(self) -> int:
        return len(self.vertices)

    def __getitem__(self, idx: int) -> Vertex:
        return self.vertices[idx]

    def copy(self) -> "Graph":
        """Fresh graph over the same items, without relays or layout state."""
        return Graph(self.items)

    def real_vertices(self) -> list[Vertex]:
        return [v for v in self.vertices if not v.is_dummy]

    def dummy_vertices(self) -> list[Vertex]:
        return [v for v in self.vertices if v.is_dummy]

    def edges(self) -> list[tuple[int, int]]:
        return [(v.index, c) for v in self.vertices for c in v.children]

    def add_dummy(self) -> Vertex:
        vertex = Vertex(len(self.vertices))
        self.vertices.append(vertex)
        return vertex

    def link(self, parent: int, child: int) -> None:
        self.vertices[parent].children.append(child)
        self.vertices[child].parents.append(parent)

    def unlink(self, parent: int, child: int) -> None:
        self.vertices[parent].children.remove(child)
        self.vertices[child].parents.remove(parent)

    def reroute(self, parent: int, child: int, via: int) -> None:
        """Replace the edge parent->child with via->child."""
        self.unlink(parent, child)
        if child not in self.vertices[via].children:
            self.link(via, child)


class Layout:
    def __init__(self, graph: Graph, layers: list[list[int]], layer_spacing: float = 1.0):
        self.graph = graph
        self.layers = layers
        self.layer_spacing = layer_spacing

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def max_x(self) -> float:
        """Extent along x: one layer step past the last layer."""
        return self.layer_count * self.layer_spacing

    def get_node_position(self, node_name: str) -> tuple[float, float]:
        v = self.graph.vertices[self.graph.name2idx[node_name]]
        return (v.x, v.y)

    def get_node_layer(self, node_name: str) -> int:
        return self.graph.vertices[self.graph.name2idx[node_name]].layer

    def placements(self) -> dict[str, Placement]:
        return {
            v.name: Placement(v.layer, v.x, v.y) for v in self.graph.real_vertices()
        }

    def layer_names(self) -> list[list[str]]:
        return [[self.graph.vertices[i].name for i in layer] for layer in self.layers]

    def tight_edges(self) -> list[tuple[str, str]]:
        return [
            (self.graph.vertices[p].name, self.graph.vertices[c].name)
            for p, c in self.graph.edges()
        ]
