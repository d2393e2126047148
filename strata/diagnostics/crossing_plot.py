import matplotlib.pyplot as plt
import pandas as pd


def plot_crossing_history(
    history: list[dict],
    output_path: str | None = None,
    figsize: tuple[int, int] = (10, 4),
) -> None:
    """Plot crossing counts over minimization rounds.

    Args:
        history: Per-round records from the crossing minimizer
        output_path: Path to save the plot (if None, displays interactively)
        figsize: Figure size in inches
    """
    if not history:
        print("No history data to plot")
        return

    df = pd.DataFrame(history).set_index("round")

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(df.index, df["crossings"], "b-", linewidth=1.5, marker="o", label="Crossings")
    ax.step(df.index, df["best"], "g--", where="post", linewidth=1.0, label="Best")

    # Mark rounds where transpose kept a swap
    transposed = df["transposed"].astype(bool)
    if transposed.any():
        ax.scatter(
            df.index[transposed], df["crossings"][transposed],
            c="orange", s=30, zorder=3, label="Transposed"
        )

    ax.set_xlabel("Round")
    ax.set_ylabel("Crossings")
    ax.set_title("Crossing Minimization")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        print(f"Crossing plot saved to {output_path}")
    else:
        plt.show()

    plt.close(fig)
