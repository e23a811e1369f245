# Domain Stats Package
from .models import ActivityHeatmap, Stats

__all__ = ["ActivityHeatmap", "Stats"]
