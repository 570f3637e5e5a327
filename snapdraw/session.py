"""Drawing session façade tying the viewport, tools and history together."""

from __future__ import annotations

import copy
import logging
from typing import Optional, Tuple, Union

from .config import SessionConfig, get_session_config
from .geometry import screen_to_world
from .history import HistoryManager
from .model import (
    Color,
    LineReference,
    Point,
    ProtractorMeasurement,
    SetSquareReference,
    Stroke,
    StrokeCollection,
    StrokeStyle,
    Tool,
    ToolStates,
    ViewportTransform,
    as_point,
    is_color,
)
from .tools import ToolStateMachine, apply_transform_event

logger = logging.getLogger(__name__)

DragResult = Union[Stroke, ProtractorMeasurement, None]


class DrawingSession:
    """Owns the live stroke collection and routes caller events to the core.

    All methods run synchronously on the caller's thread. Every mutating call
    returns plain values; the rendering layer reads the properties afterwards.
    """

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = copy.deepcopy(config) if config is not None else get_session_config()
        self.config.validate()
        self.viewport = ViewportTransform(
            min_scale=self.config.min_scale, max_scale=self.config.max_scale
        )
        states = ToolStates(
            ruler=LineReference(center=self.config.ruler_center, length_px=self.config.ruler_length_px),
            set_square=SetSquareReference(
                center=self.config.set_square_center, length_px=self.config.ruler_length_px
            ),
        )
        self.tools = ToolStateMachine(
            states,
            self.config,
            StrokeStyle(self.config.pen_color, self.config.pen_width),
        )
        self.history = HistoryManager(self.config.history_capacity)
        self.snap_enabled = self.config.snap_enabled
        self._strokes: StrokeCollection = []

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        return tuple(self._strokes)

    @property
    def stroke_count(self) -> int:
        return len(self._strokes)

    @property
    def active_tool(self) -> Tool:
        return self.tools.tool

    @property
    def in_progress_points(self) -> Tuple[Point, ...]:
        return self.tools.in_progress_points

    @property
    def measurement(self) -> Optional[ProtractorMeasurement]:
        return self.tools.measurement

    @property
    def ruler(self) -> LineReference:
        return self.tools.states.ruler

    @property
    def set_square(self) -> SetSquareReference:
        return self.tools.states.set_square

    def select_tool(self, tool: Union[Tool, str]) -> None:
        tool = Tool(tool)
        if tool is not self.tools.tool:
            logger.info("Active tool: %s", tool.value)
        self.tools.select(tool)

    def set_snap_enabled(self, enabled: bool) -> None:
        self.snap_enabled = bool(enabled)

    def set_stroke_color(self, color: Color) -> None:
        if not is_color(color):
            raise ValueError(f"stroke colour must be #RRGGBB, got {color!r}")
        self.tools.pen_style.color = color

    def set_stroke_width(self, width_px: float) -> None:
        if width_px <= 0.0:
            raise ValueError(f"stroke width must be positive, got {width_px}")
        self.tools.pen_style.width_px = float(width_px)

    def apply_transform_event(
        self, pan_delta: Point, rotation_delta_deg: float = 0.0, zoom: float = 1.0
    ) -> Optional[LineReference]:
        """Route a two-finger gesture.

        Ruler and set-square absorb pan and rotation and the updated reference
        is returned. Any other tool pans and zooms the viewport instead.
        """

        tool = self.tools.tool
        if tool.uses_line_reference:
            return apply_transform_event(
                self.tools.states.line_reference(tool),
                pan_delta,
                rotation_delta_deg,
                self.viewport.scale,
                self.snap_enabled,
                threshold_deg=self.config.rotation_snap_threshold,
            )
        self.viewport.pan(pan_delta)
        self.viewport.zoom(zoom)
        return None

    def _to_world(self, point: Point, screen: bool) -> Point:
        return screen_to_world(point, self.viewport) if screen else as_point(point)

    def handle_drag_start(self, point: Point, *, screen: bool = True) -> DragResult:
        return self.tools.drag_start(self._to_world(point, screen), snap_enabled=self.snap_enabled)

    def handle_drag_move(self, point: Point, *, screen: bool = True) -> DragResult:
        self.tools.drag_move(
            self._to_world(point, screen), scale=self.viewport.scale, snap_enabled=self.snap_enabled
        )
        return None

    def handle_drag_end(self) -> DragResult:
        stroke = self.tools.drag_end()
        if stroke is not None:
            self._commit(stroke)
        return stroke

    def cancel_drag(self) -> None:
        self.tools.cancel()

    def _commit(self, stroke: Stroke) -> None:
        self.history.push_snapshot(self._strokes)
        self._strokes.append(stroke)
        logger.info(
            "Committed %s stroke with %d points (total %d)",
            self.tools.tool.value,
            len(stroke.points),
            len(self._strokes),
        )

    def undo(self) -> Tuple[Stroke, ...]:
        if self.history.can_undo:
            self._strokes = self.history.undo(self._strokes)
            logger.info("Undo -> %d strokes", len(self._strokes))
        return self.strokes

    def redo(self) -> Tuple[Stroke, ...]:
        if self.history.can_redo:
            self._strokes = self.history.redo(self._strokes)
            logger.info("Redo -> %d strokes", len(self._strokes))
        return self.strokes

    def clear(self) -> Tuple[Stroke, ...]:
        self.history.push_snapshot(self._strokes)
        self._strokes = []
        logger.info("Cleared drawing")
        return self.strokes


__all__ = ["DragResult", "DrawingSession"]
