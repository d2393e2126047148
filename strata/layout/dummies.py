import logging

from strata import graph
from strata.errors import LayoutInvariantError

logger = logging.getLogger(__name__)


class DummyInserter:
    """Make every edge tight by routing long edges through relay vertices.

    A vertex gets at most one relay in the following layer; every long edge
    leaving it is rerouted through that relay, which may therefore fan out
    to several children. When the following layer is full, a real vertex is
    demoted out of it to make room. When no vertex can be demoted, the layer
    is widened past max_width instead, and its index is recorded in
    ``widened``.
    """

    def __init__(self, g: graph.Graph, layers: list[list[int]], max_width: int):
        self.g = g
        self.layers = layers
        self.max_width = max_width
        # demotions may not push the layering past one layer per real vertex
        self.max_layers = max(len(layers), len(g.real_vertices()))
        self.dummies = 0
        self.demotions = 0
        self.widened: set[int] = set()

    def run(self) -> list[list[int]]:
        i = 0
        while i < len(self.layers) - 1:
            self._tighten_layer(i)
            i += 1
        self._drop_empty_layers()
        self._check_tight()
        logger.debug(
            "Inserted %d dummy vertices with %d demotions, %d layers",
            self.dummies, self.demotions, len(self.layers)
        )
        if self.widened:
            logger.info(
                "Widened layers %s past max width %d",
                sorted(self.widened), self.max_width
            )
        return self.layers

    def _tighten_layer(self, i: int) -> None:
        changed = True
        while changed:
            changed = False
            for idx in list(self.layers[i]):
                v = self.g[idx]
                for child in list(v.children):
                    if self.g[child].layer < i + 2:
                        continue
                    changed = True
                    if v.relay is None:
                        v.relay = self._add_relay(idx, i + 1)
                    self.g.reroute(idx, child, via=v.relay)

    def _add_relay(self, owner: int, layer_index: int) -> int:
        if len(self.layers[layer_index]) >= self.max_width:
            if self.demote(layer_index) is None:
                self.widened.add(layer_index)
        relay = self.g.add_dummy()
        relay.layer = layer_index
        self.layers[layer_index].append(relay.index)
        self.g.link(owner, relay.index)
        self.dummies += 1
        return relay.index

    def _drop_empty_layers(self) -> None:
        # no tight edge spans an empty layer, so removing it keeps edges tight
        kept = [i for i, layer in enumerate(self.layers) if layer]
        if len(kept) == len(self.layers):
            return
        shift = {old: new for new, old in enumerate(kept)}
        self.layers[:] = [self.layers[i] for i in kept]
        for i, layer in enumerate(self.layers):
            for idx in layer:
                self.g[idx].layer = i
        self.widened = {shift[i] for i in self.widened if i in shift}

    def _check_tight(self) -> None:
        for parent, child in self.g.edges():
            if self.g[child].layer != self.g[parent].layer + 1:
                raise LayoutInvariantError(
                    f"Edge {self.g[parent].name!r} -> {self.g[child].name!r} spans "
                    f"layers {self.g[parent].layer} to {self.g[child].layer}"
                )

    def demote(self, layer_index: int) -> int | None:
        """
        Move one real vertex from a layer into the next one.

        The last vertex of the layer that is not a relay and has no child in
        the next layer is moved to the front of the next layer. A full next
        layer is demoted into first, appending a new trailing layer if the
        layering may still grow.

        Returns:
            Index of the demoted vertex, or None if no vertex can be moved
            without overfilling the next layer. Demotions further down that
            already succeeded are kept; this can leave a layer empty.
        """
        appended = layer_index + 1 == len(self.layers)
        if appended:
            if len(self.layers) >= self.max_layers:
                return None
            self.layers.append([])

        upper = self.layers[layer_index]
        lower = self.layers[layer_index + 1]
        if len(lower) >= self.max_width and self.demote(layer_index + 1) is None:
            return None

        for pos in range(len(upper) - 1, -1, -1):
            v = self.g[upper[pos]]
            if v.is_dummy:
                continue
            if any(self.g[child].layer == layer_index + 1 for child in v.children):
                continue
            break
        else:
            if appended:
                self.layers.pop()
            return None

        idx = upper.pop(pos)
        lower.insert(0, idx)
        self.g[idx].layer = layer_index + 1
        self.demotions += 1
        return idx


def insert_dummy_nodes(
    g: graph.Graph,
    layers: list[list[int]],
    max_width: int
) -> tuple[list[list[int]], int]:
    """Insert relay vertices for edges spanning more than one layer.

    Returns:
        The tightened layers and the number of relays inserted.
    """
    inserter = DummyInserter(g, layers, max_width)
    return inserter.run(), inserter.dummies
