from strata.config import LayoutConfig
from strata.graph import Graph
from strata.layout import compute_layout

graph = Graph.from_node_names(
    node_names=[
        "input",
        "analyze",
        "content",
        "metadata",
        "online",
        "LLM knowledge",
        "HyDE",
        "search terms",
        "generate",
        "criteria",
        "index",
        "lookup",
        "candidates",
        "rerank",
        "reranked",
        "filter",
        "tabular",
        "final"
    ],
    edges=[
        ("input", "analyze"),
        ("analyze", "content"),
        ("analyze", "metadata"),
        ("content", "HyDE"),
        ("online", "HyDE"),
        ("LLM knowledge", "HyDE"),
        ("HyDE", "search terms"),
        ("content", "generate"),
        ("generate", "criteria"),
        ("search terms", "lookup"),
        ("index", "lookup"),
        ("tabular", "lookup"),
        ("metadata", "lookup"),
        ("lookup", "candidates"),
        ("candidates", "rerank"),
        ("rerank", "reranked"),
        ("reranked", "filter"),
        ("criteria", "filter"),
        ("filter", "final")
    ],
    ranks={"online": 1, "LLM knowledge": 1, "tabular": 2}
)

if __name__ == "__main__":
    result = compute_layout(graph, LayoutConfig(max_width=6), progress=True)
    for name, placement in result.placements().items():
        print(f"{name:15s} layer={placement.layer:2d} x={placement.x:5.1f} y={placement.y:5.2f}")
    print(f"{result.layer_count} layers, {result.crossings} crossings, {result.rounds} rounds")
