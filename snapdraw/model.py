"""Core data structures shared by the geometry kernel, tools and history."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Point = Tuple[float, float]
Color = str

BLACK: Color = "#000000"
RED: Color = "#FF0000"
BLUE: Color = "#0000FF"
GREEN: Color = "#00FF00"
MAGENTA: Color = "#FF00FF"
AMBER: Color = "#FFA000"
DARK_GRAY: Color = "#404040"

PEN_PALETTE: Tuple[Color, ...] = (BLACK, RED, BLUE, GREEN, MAGENTA, AMBER)

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def is_color(value: object) -> bool:
    """Return ``True`` when *value* is a ``#RRGGBB`` colour string."""

    return isinstance(value, str) and bool(_COLOR_RE.match(value))


def as_point(value) -> Point:
    return float(value[0]), float(value[1])


class Tool(enum.Enum):
    PEN = "pen"
    RULER = "ruler"
    SET_SQUARE = "set_square"
    PROTRACTOR = "protractor"
    PAN = "pan"

    @property
    def uses_line_reference(self) -> bool:
        return self in (Tool.RULER, Tool.SET_SQUARE)


@dataclass
class ViewportTransform:
    """Pan/zoom mapping between screen space and world space.

    Any assignment to ``scale`` is clamped to ``[min_scale, max_scale]``.
    """

    offset: Point = (0.0, 0.0)
    scale: float = 1.0
    min_scale: float = 0.3
    max_scale: float = 4.0

    def __setattr__(self, name: str, value) -> None:
        # The range fields are assigned after ``scale`` in __init__; __post_init__ clamps then.
        if name == "scale" and "max_scale" in self.__dict__:
            if value <= 0.0:
                raise ValueError(f"viewport scale must be positive, got {value}")
            value = min(max(float(value), self.min_scale), self.max_scale)
        object.__setattr__(self, name, value)

    def __post_init__(self) -> None:
        if self.min_scale <= 0.0 or self.max_scale < self.min_scale:
            raise ValueError(f"invalid scale range [{self.min_scale}, {self.max_scale}]")
        self.offset = as_point(self.offset)
        self.scale = self.scale

    def pan(self, delta: Point) -> None:
        self.offset = (self.offset[0] + float(delta[0]), self.offset[1] + float(delta[1]))

    def zoom(self, factor: float) -> None:
        if factor <= 0.0:
            raise ValueError(f"zoom factor must be positive, got {factor}")
        self.scale = min(max(self.scale * float(factor), self.min_scale), self.max_scale)


@dataclass
class LineReference:
    """Straight edge of a ruler or set-square, in world space."""

    center: Point = (0.0, 0.0)
    rotation_deg: float = 0.0
    length_px: float = 800.0

    def __post_init__(self) -> None:
        self.center = as_point(self.center)
        self.rotation_deg = float(self.rotation_deg)

    def endpoints(self) -> Tuple[Point, Point]:
        half = self.length_px * 0.5
        theta = math.radians(self.rotation_deg)
        dx, dy = math.cos(theta) * half, math.sin(theta) * half
        cx, cy = self.center
        return (cx - dx, cy - dy), (cx + dx, cy + dy)


@dataclass
class SetSquareReference(LineReference):
    # 45-45-90 square when True, 30-60-90 otherwise; display only.
    is_45: bool = True


@dataclass(frozen=True)
class Stroke:
    """A committed polyline. Immutable; compared by value."""

    points: Tuple[Point, ...]
    color: Color = BLACK
    width_px: float = 6.0

    def __post_init__(self) -> None:
        points = tuple(as_point(p) for p in self.points)
        if len(points) < 2:
            raise ValueError(f"a stroke needs at least 2 points, got {len(points)}")
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "width_px", float(self.width_px))


StrokeCollection = List[Stroke]
HistorySnapshot = Tuple[Stroke, ...]


@dataclass(frozen=True)
class ProtractorMeasurement:
    vertex: Point
    ray1: Point
    ray2: Point
    measured_deg: float
    snapped: bool = False


@dataclass
class ProtractorState:
    """Pending taps of an unfinished protractor measurement."""

    vertex: Optional[Point] = None
    ray1: Optional[Point] = None
    measurement: Optional[ProtractorMeasurement] = None

    def reset_taps(self) -> None:
        self.vertex = None
        self.ray1 = None


@dataclass
class StrokeStyle:
    color: Color = BLACK
    width_px: float = 6.0


@dataclass
class ToolStates:
    """Per-tool state owned by a session and handed to the tool handlers."""

    ruler: LineReference = field(default_factory=lambda: LineReference(center=(400.0, 400.0)))
    set_square: SetSquareReference = field(
        default_factory=lambda: SetSquareReference(center=(600.0, 600.0))
    )
    protractor: ProtractorState = field(default_factory=ProtractorState)

    def line_reference(self, tool: Tool) -> LineReference:
        if tool is Tool.RULER:
            return self.ruler
        if tool is Tool.SET_SQUARE:
            return self.set_square
        raise ValueError(f"tool {tool.value} has no line reference")


__all__ = [
    "AMBER",
    "BLACK",
    "BLUE",
    "Color",
    "DARK_GRAY",
    "GREEN",
    "HistorySnapshot",
    "LineReference",
    "MAGENTA",
    "PEN_PALETTE",
    "Point",
    "ProtractorMeasurement",
    "ProtractorState",
    "RED",
    "SetSquareReference",
    "Stroke",
    "StrokeCollection",
    "StrokeStyle",
    "Tool",
    "ToolStates",
    "ViewportTransform",
    "as_point",
    "is_color",
]
