"""Core configuration for the bakery dashboard."""

from .config import (
    CONFIG,
    ApiConfig,
    DashboardConfig,
    ForecastConfig,
    InventoryConfig,
    UIConfig,
)

__all__ = [
    "CONFIG",
    "ApiConfig",
    "DashboardConfig",
    "ForecastConfig",
    "InventoryConfig",
    "UIConfig",
]
