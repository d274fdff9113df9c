"""MissionLab: physics learning missions with a live projectile simulation."""

from .studio import MissionBriefing, MissionStudio, SimulationFrame, UploadResult

__version__ = "0.1.0"

__all__ = [
    "MissionBriefing",
    "MissionStudio",
    "SimulationFrame",
    "UploadResult",
    "__version__",
]
