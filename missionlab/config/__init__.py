"""Configuration for MissionLab."""

from .settings import (
    ADMIN_KEY_ENV,
    AdminSettings,
    ContentSettings,
    SimulationSettings,
    ViewportSettings,
    StudioConfig,
    config,
)

__all__ = [
    "ADMIN_KEY_ENV",
    "AdminSettings",
    "ContentSettings",
    "SimulationSettings",
    "ViewportSettings",
    "StudioConfig",
    "config",
]
