"""
Configuration settings for the mission studio.

This module contains all configurable parameters for topic resolution,
content-pack ingestion, the projectile simulation and the drawing surface.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Any

ADMIN_KEY_ENV = "MISSIONLAB_ADMIN_KEY"


def _default_admin_key() -> str:
    return os.environ.get(ADMIN_KEY_ENV, "jee-admin-2026")


@dataclass
class AdminSettings:
    """Shared-secret gate for content uploads.

    This is a placeholder control, not a credential system.
    """

    ADMIN_KEY: str = field(default_factory=_default_admin_key)
    MAX_UPLOAD_BYTES: int = 1024 * 1024

    def __post_init__(self):
        """Validate admin settings."""
        if not self.ADMIN_KEY or not self.ADMIN_KEY.strip():
            raise ValueError("ADMIN_KEY must not be blank")
        if self.MAX_UPLOAD_BYTES <= 0:
            raise ValueError("MAX_UPLOAD_BYTES must be positive")


@dataclass
class ContentSettings:
    """Catalog defaults."""

    DEFAULT_TOPIC: str = "projectile"

    def __post_init__(self):
        """Validate content settings."""
        if not self.DEFAULT_TOPIC or not self.DEFAULT_TOPIC.strip():
            raise ValueError("DEFAULT_TOPIC must not be blank")


@dataclass
class SimulationSettings:
    """Projectile simulation defaults (slider start values)."""

    SAMPLE_COUNT: int = 80
    DEFAULT_ANGLE_DEG: float = 45.0
    DEFAULT_SPEED_M_S: float = 20.0
    DEFAULT_GRAVITY_M_S2: float = 9.8

    def __post_init__(self):
        """Validate simulation settings."""
        if self.SAMPLE_COUNT < 1:
            raise ValueError("SAMPLE_COUNT must be at least 1")
        if self.DEFAULT_GRAVITY_M_S2 <= 0:
            raise ValueError("DEFAULT_GRAVITY_M_S2 must be positive")


@dataclass
class ViewportSettings:
    """Drawing surface size and plot margins, in pixels."""

    WIDTH_PX: int = 640
    HEIGHT_PX: int = 360
    MARGIN_HORIZONTAL_PX: float = 40.0  # total width reserved for margins
    MARGIN_VERTICAL_PX: float = 30.0  # total height reserved for margins
    MARGIN_LEFT_PX: float = 20.0
    MARGIN_BOTTOM_PX: float = 10.0

    def __post_init__(self):
        """Validate viewport settings."""
        if self.WIDTH_PX <= 0 or self.HEIGHT_PX <= 0:
            raise ValueError("Viewport dimensions must be positive")
        if not 0 <= self.MARGIN_HORIZONTAL_PX < self.WIDTH_PX:
            raise ValueError("MARGIN_HORIZONTAL_PX must fit inside WIDTH_PX")
        if not 0 <= self.MARGIN_VERTICAL_PX < self.HEIGHT_PX:
            raise ValueError("MARGIN_VERTICAL_PX must fit inside HEIGHT_PX")
        if self.MARGIN_LEFT_PX < 0 or self.MARGIN_BOTTOM_PX < 0:
            raise ValueError("Plot margins must not be negative")


class StudioConfig:
    """Global configuration for the mission studio."""

    def __init__(self):
        self.admin = AdminSettings()
        self.content = ContentSettings()
        self.simulation = SimulationSettings()
        self.viewport = ViewportSettings()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "admin": {
                k: v for k, v in self.admin.__dict__.items() if k != "ADMIN_KEY"
            },
            "content": self.content.__dict__,
            "simulation": self.simulation.__dict__,
            "viewport": self.viewport.__dict__,
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StudioConfig":
        """Create configuration from dictionary."""
        instance = cls()

        sections = {
            "admin": AdminSettings,
            "content": ContentSettings,
            "simulation": SimulationSettings,
            "viewport": ViewportSettings,
        }
        for name, section_cls in sections.items():
            if name not in config_dict:
                continue
            section = section_cls()
            for k, v in config_dict[name].items():
                if hasattr(section, k):
                    setattr(section, k, v)
            section.__post_init__()  # Validate
            setattr(instance, name, section)

        return instance

    def validate(self):
        """Validate entire configuration."""
        self.admin.__post_init__()
        self.content.__post_init__()
        self.simulation.__post_init__()
        self.viewport.__post_init__()


# Default configuration instance
config = StudioConfig()
config.validate()  # Ensure default configuration is valid
