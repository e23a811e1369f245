# Application Stats Package
from .metrics_calculator import (
    HeatmapSettings,
    MetricsCalculator,
    build_heatmap,
    compute_stats,
    cycle_window,
    rolling_window,
)

__all__ = [
    "HeatmapSettings",
    "MetricsCalculator",
    "build_heatmap",
    "compute_stats",
    "cycle_window",
    "rolling_window",
]
