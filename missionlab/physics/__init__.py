"""Projectile simulation and viewport scaling.

Nothing in this package draws; rendering lives in ``missionlab.rendering``.
"""

from .trajectory import (
    LaunchParameters,
    FlightMetrics,
    TrajectorySample,
    TrajectorySimulator,
    simulate,
)
from .viewport import PixelPath, ViewportMapper, ViewportMargins, map_to_viewport

__all__ = [
    "LaunchParameters",
    "FlightMetrics",
    "TrajectorySample",
    "TrajectorySimulator",
    "simulate",
    "PixelPath",
    "ViewportMapper",
    "ViewportMargins",
    "map_to_viewport",
]
