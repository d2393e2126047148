import logging

from strata import graph

logger = logging.getLogger(__name__)


def distribute_layers(g: graph.Graph, order: list[int], max_width: int) -> list[list[int]]:
    """
    Greedily split a Coffman-Graham order into layers of at most max_width.

    The order is consumed from its tail: a new layer is opened when the
    current one is full, or when the next vertex has a child in it. Layers
    are then reversed so that sources come first, and vertices without any
    edge are promoted one layer towards the sources when there is room,
    thinning out the dense base this procedure tends to produce.

    Args:
        g: Graph the order was computed on.
        order: Vertex indices in Coffman-Graham order.
        max_width: Maximum number of vertices per layer.

    Returns:
        Layers of vertex indices; ``Vertex.layer`` is updated to match.
    """
    layers: list[list[int]] = [[]]
    members: set[int] = set()
    for idx in reversed(order):
        shares_layer = any(child in members for child in g[idx].children)
        if len(layers[-1]) >= max_width or shares_layer:
            layers.append([])
            members = set()
        layers[-1].append(idx)
        members.add(idx)

    for layer in layers:
        layer.reverse()
    layers.reverse()

    for j in range(1, len(layers)):
        kept = []
        for idx in layers[j]:
            isolated = not g[idx].parents and not g[idx].children
            if isolated and len(layers[j - 1]) < max_width:
                layers[j - 1].append(idx)
            else:
                kept.append(idx)
        layers[j] = kept

    layers = [layer for layer in layers if layer]
    for i, layer in enumerate(layers):
        for idx in layer:
            g[idx].layer = i

    logger.debug("Distributed %d vertices into %d layers", len(order), len(layers))
    return layers
