"""Configuration helpers for drawing sessions."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from .model import BLACK, Color, Point, is_color


class ConfigError(ValueError):
    """Raised when a :class:`SessionConfig` holds inconsistent values."""


@dataclass
class SessionConfig:
    min_scale: float = 0.3
    max_scale: float = 4.0
    grid_spacing: float = 40.0
    grid_snap_threshold: float = 8.0
    rotation_snap_threshold: float = 6.0
    protractor_snap_threshold: float = 1.0
    history_capacity: int = 20
    snap_enabled: bool = True
    pen_color: Color = BLACK
    pen_width: float = 6.0
    ruler_center: Point = (400.0, 400.0)
    set_square_center: Point = (600.0, 600.0)
    ruler_length_px: float = 800.0

    def validate(self) -> None:
        if self.min_scale <= 0.0 or self.max_scale <= 0.0:
            raise ConfigError("scale bounds must be positive")
        if self.min_scale > self.max_scale:
            raise ConfigError(f"min_scale {self.min_scale} exceeds max_scale {self.max_scale}")
        if self.grid_spacing <= 0.0:
            raise ConfigError("grid_spacing must be positive")
        for name in ("grid_snap_threshold", "rotation_snap_threshold", "protractor_snap_threshold"):
            if getattr(self, name) < 0.0:
                raise ConfigError(f"{name} must not be negative")
        if self.history_capacity < 1:
            raise ConfigError("history_capacity must be at least 1")
        if self.pen_width <= 0.0:
            raise ConfigError("pen_width must be positive")
        if not is_color(self.pen_color):
            raise ConfigError(f"pen_color must be #RRGGBB, got {self.pen_color!r}")


_SESSION_CONFIG = SessionConfig()


def get_session_config() -> SessionConfig:
    return copy.deepcopy(_SESSION_CONFIG)


def set_session_config(config: SessionConfig) -> None:
    global _SESSION_CONFIG
    config.validate()
    _SESSION_CONFIG = copy.deepcopy(config)


__all__ = ["ConfigError", "SessionConfig", "get_session_config", "set_session_config"]
