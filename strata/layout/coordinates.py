from strata import graph
from strata.layout.minimize import median_value


def assign_coordinates(
    g: graph.Graph,
    layers: list[list[int]],
    layer_spacing: float = 1.0,
    vertex_spacing: float = 1.0,
    refine: bool = True
) -> None:
    """
    Set x and y of every vertex from its layer and its slot in the layer.

    x is the layer index times layer_spacing, y the slot times
    vertex_spacing. The refinement pass then walks each layer bottom-up
    and moves a vertex down towards the median y of its children, never
    closer than one step to the vertex after it.

    Args:
        g: Graph whose vertices are updated in place.
        layers: Final layering.
        layer_spacing: Distance between layers along x.
        vertex_spacing: Distance between consecutive vertices along y.
        refine: Run the median refinement pass.
    """
    for i, layer in enumerate(layers):
        for slot, idx in enumerate(layer):
            v = g[idx]
            v.layer = i
            v.x = i * layer_spacing
            v.y = slot * vertex_spacing

    if not refine:
        return

    for j in range(len(layers) - 1):
        layer = layers[j]
        next_layer = set(layers[j + 1])
        for i in range(len(layer) - 1, -1, -1):
            v = g[layer[i]]
            target = median_value(sorted(g[c].y for c in v.children if c in next_layer))
            if target is None or v.y >= target:
                continue
            if i < len(layer) - 1:
                target = min(target, g[layer[i + 1]].y - vertex_spacing)
            v.y = target
