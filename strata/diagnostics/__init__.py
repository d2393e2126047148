from strata.diagnostics.crossing_plot import plot_crossing_history
from strata.diagnostics.report import generate_layout_report

__all__ = [
    "generate_layout_report",
    "plot_crossing_history",
]
