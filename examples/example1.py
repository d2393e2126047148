from strata.graph import Graph, Item
from strata.layout import compute_layout

# B and C require A, D requires both: three layers, no crossings
graph = Graph([
    Item("A"),
    Item("B", ("A",)),
    Item("C", ("A",)),
    Item("D", ("B", "C")),
])

if __name__ == "__main__":
    result = compute_layout(graph)
    for layer in result.layout.layer_names():
        print(layer)
