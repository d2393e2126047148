import numpy as np

from strata.layout import Result
from strata.layout.crossings import crossings_per_layer


def generate_layout_report(
    result: Result,
    max_width: int | None = None,
    max_rounds: int | None = None,
    top_n: int = 5,
) -> str:
    """Generate a diagnostic report for a finished layering.

    Args:
        result: Result returned by a layout engine
        max_width: Layer width cap the layout ran with, for occupancy bars
        max_rounds: Round cap the layout ran with, to flag truncated searches
        top_n: Number of worst layer pairs to show

    Returns:
        Formatted diagnostic report string
    """
    layout = result.layout
    g = layout.graph
    meta = result.metadata
    history = meta.get("history", [])
    lines = []

    lines.append("=" * 60)
    lines.append("LAYERING DIAGNOSTIC REPORT")
    lines.append("=" * 60)
    lines.append("")

    # 1. Summary
    lines.append("## Summary")
    lines.append("")
    real = len(g.real_vertices())
    dummies = len(g.dummy_vertices())
    lines.append(f"Items:           {real}")
    lines.append(f"Dummy vertices:  {dummies}")
    lines.append(f"Layers:          {layout.layer_count}")
    if result.widened_layers:
        lines.append(f"Widened layers:  {', '.join(map(str, result.widened_layers))}")
    lines.append(f"Rounds:          {result.rounds}")
    lines.append(f"Crossings:       {meta.get('initial_crossings', result.crossings)} -> {result.crossings}")
    lines.append("")

    # 2. Layer occupancy
    lines.append("## Layers")
    lines.append("")
    sizes = np.array([len(layer) for layer in layout.layers], dtype=int)
    width = max_width or (int(sizes.max()) if len(sizes) else 1)
    lines.append(f"  {'Layer':>5s} {'Items':>6s} {'Dummies':>8s}")
    for i, layer in enumerate(layout.layers):
        n_dummy = sum(1 for idx in layer if g[idx].is_dummy)
        filled = int(round(20 * len(layer) / width)) if width else 0
        bar = "█" * filled + "░" * (20 - filled)
        lines.append(f"  {i:5d} {len(layer) - n_dummy:6d} {n_dummy:8d} {bar}")
    lines.append("")

    # 3. Worst layer pairs
    per_pair = crossings_per_layer(g, layout.layers)
    lines.append("## Crossings By Layer Pair")
    lines.append("")
    worst = sorted(((c, i) for i, c in enumerate(per_pair) if c > 0), reverse=True)[:top_n]
    if worst:
        for count, i in worst:
            lines.append(f"  {i:3d} -> {i + 1:<3d} {count:6d}")
    else:
        lines.append("  (no crossings)")
    lines.append("")

    # 4. Round history
    if history:
        lines.append("## Rounds")
        lines.append("")
        lines.append(f"  {'Round':>5s} {'Crossings':>10s} {'Best':>6s}  Moves")
        for record in history:
            moves = []
            if record["median_moved"]:
                moves.append("median")
            if record["transposed"]:
                moves.append("transpose")
            lines.append(
                f"  {record['round']:5d} {record['crossings']:10d} {record['best']:6d}  "
                f"{', '.join(moves) or '-'}"
            )
        lines.append("")

    # 5. Recommendations
    lines.append("## Recommendations")
    lines.append("")
    notes = []
    if max_rounds is not None and result.rounds >= max_rounds and history and (
        history[-1]["median_moved"] or history[-1]["transposed"]
    ):
        notes.append("⚠️  Search stopped at the round cap while still moving vertices")
        notes.append("   → Consider raising max_rounds")
    if max_width is not None and len(sizes) > 1 and np.all(sizes[:-1] >= max_width):
        notes.append("⚠️  Every layer but the last is full")
        notes.append("   → Consider raising max_width for a shallower layering")
    if result.widened_layers:
        notes.append(f"⚠️  {len(result.widened_layers)} layer(s) exceed max_width: no vertex could be demoted")
        notes.append("   → Consider raising max_width")
    if real and dummies > real:
        notes.append(f"⚠️  More dummy vertices than items ({dummies} vs {real})")
        notes.append("   → Many long edges; the graph may benefit from transitive reduction")
    if notes:
        lines.extend(notes)
    else:
        lines.append("✓ Layering looks balanced")

    lines.append("")
    lines.append("=" * 60)

    return "\n".join(lines)
