import argparse
import logging
import sys
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from strata.config import load_config
from strata.errors import GraphInputError, LayoutInvariantError


def main():
    parser = argparse.ArgumentParser(description="Compute layered layouts of dependency graphs")
    parser.add_argument("input", help="YAML config file")
    parser.add_argument(
        "--max-width", "-w",
        type=int,
        default=None,
        help="Override the maximum number of vertices per layer"
    )
    parser.add_argument(
        "--progress", "-p",
        action="store_true",
        help="Show crossing minimization progress bar"
    )
    parser.add_argument(
        "--diagnose", "-d",
        action="store_true",
        help="Generate diagnostic report and crossing plot"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log pipeline stages"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    name = input_path.stem

    try:
        config = load_config(input_path)
        if args.max_width is not None:
            config.layout = config.layout.override(max_width=args.max_width)
        g = config.build_graph()
    except FileNotFoundError:
        print(f"Error: YAML file '{args.input}' not found", file=sys.stderr)
        sys.exit(1)
    except GraphInputError as e:
        print(f"Error: invalid graph: {e}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"Error: invalid config: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading YAML config: {e}", file=sys.stderr)
        sys.exit(1)

    engine = config.layout.bind(progress=args.progress)
    try:
        result = engine.fit(g)
    except LayoutInvariantError as e:
        print(f"Error: layout failed: {e}", file=sys.stderr)
        sys.exit(1)

    placements = result.placements()
    df = pd.DataFrame(
        [(name_, p.layer, p.x, p.y) for name_, p in placements.items()],
        columns=["id", "layer", "x", "y"],
    ).sort_values(["layer", "y"])
    print(df.to_string(index=False))
    print(
        f"\n{len(placements)} items in {result.layer_count} layers, "
        f"{result.crossings} crossings after {result.rounds} rounds"
    )
    if result.widened_layers:
        print(
            f"Layers {result.widened_layers} exceed max width "
            f"{config.layout.max_width}: no vertex could be demoted"
        )

    history = result.metadata.get("history", [])
    if history:
        print("Crossing history:")
        print(pd.DataFrame(history).tail(10).to_string(index=False))

    # Generate diagnostic report if requested
    if args.diagnose:
        from strata.diagnostics import generate_layout_report, plot_crossing_history

        output_dir = Path("output")
        output_dir.mkdir(parents=True, exist_ok=True)
        report = generate_layout_report(
            result,
            max_width=config.layout.max_width,
            max_rounds=config.layout.max_rounds,
        )
        report_path = output_dir / f"{name}_report.md"
        report_path.write_text(report)
        print(f"Diagnostic report saved to {report_path}")

        if history:
            plot_crossing_history(history, str(output_dir / f"{name}_crossings.png"))


if __name__ == "__main__":
    main()
