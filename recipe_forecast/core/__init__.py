"""Core configuration for the recipe forecast engine."""

from .config import (
    CONFIG,
    ForecastConfig,
    MovingAverageConfig,
    ReorderConfig,
    SalesConfig,
    SmoothingConfig,
    TrendConfig,
)

__all__ = [
    "CONFIG",
    "ForecastConfig",
    "MovingAverageConfig",
    "SmoothingConfig",
    "TrendConfig",
    "ReorderConfig",
    "SalesConfig",
]
