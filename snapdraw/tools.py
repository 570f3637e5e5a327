"""Interaction protocol of the drawing tools.

Pen, ruler and set-square turn a drag into a stroke; the protractor turns
three taps into an angle measurement. The state machine never touches the
stroke collection itself: ``drag_end`` hands back the finished stroke and the
owner decides how to commit it.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Optional, Tuple

from .config import SessionConfig, get_session_config
from .geometry import angle_at_vertex, normalize_angle, project_onto_line, snap_angle, snap_to_grid
from .model import (
    BLUE,
    DARK_GRAY,
    MAGENTA,
    Color,
    LineReference,
    Point,
    ProtractorMeasurement,
    Stroke,
    StrokeStyle,
    Tool,
    ToolStates,
    as_point,
)

logger = logging.getLogger(__name__)

TOOL_STROKE_STYLES: Dict[Tool, StrokeStyle] = {
    Tool.RULER: StrokeStyle(color=DARK_GRAY, width_px=4.0),
    Tool.SET_SQUARE: StrokeStyle(color=BLUE, width_px=4.0),
}


class DragState(enum.Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


def apply_transform_event(
    reference: LineReference,
    pan_delta: Point,
    rotation_delta_deg: float,
    current_scale: float,
    snap_enabled: bool,
    *,
    threshold_deg: float = 6.0,
) -> LineReference:
    """Move and rotate a ruler/set-square reference in place and return it.

    ``pan_delta`` is in screen pixels and is divided by ``current_scale``.
    With snapping on, the new rotation locks to a common angle once it lies
    within ``threshold_deg / current_scale`` of one.
    """

    if current_scale <= 0.0:
        raise ValueError(f"scale must be positive, got {current_scale}")
    cx, cy = reference.center
    reference.center = (
        cx + float(pan_delta[0]) / current_scale,
        cy + float(pan_delta[1]) / current_scale,
    )
    candidate = reference.rotation_deg + float(rotation_delta_deg)
    snapped, hard = snap_angle(candidate, threshold_deg / current_scale)
    reference.rotation_deg = snapped if snap_enabled and hard else normalize_angle(candidate)
    return reference


class ToolStateMachine:
    """Drag accumulator and per-tool dispatch for the active tool."""

    def __init__(
        self,
        states: Optional[ToolStates] = None,
        config: Optional[SessionConfig] = None,
        pen_style: Optional[StrokeStyle] = None,
    ) -> None:
        self.config = config or get_session_config()
        self.states = states or ToolStates()
        self.pen_style = pen_style or StrokeStyle(self.config.pen_color, self.config.pen_width)
        self._tool = Tool.PEN
        self._state = DragState.IDLE
        self._points: List[Point] = []

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def in_progress_points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def measurement(self) -> Optional[ProtractorMeasurement]:
        return self.states.protractor.measurement

    @property
    def preview_color(self) -> Color:
        if self._tool is Tool.PEN:
            return self.pen_style.color
        style = TOOL_STROKE_STYLES.get(self._tool)
        return style.color if style else MAGENTA

    def select(self, tool: Tool) -> None:
        tool = Tool(tool)
        if tool is not self._tool:
            self.cancel()
            logger.debug("Tool %s -> %s", self._tool.value, tool.value)
        self._tool = tool

    def cancel(self) -> None:
        """Drop the in-progress drag and any pending protractor taps."""

        self._points.clear()
        self._state = DragState.IDLE
        self.states.protractor.reset_taps()

    def drag_start(self, world_point: Point, *, snap_enabled: bool = True) -> Optional[ProtractorMeasurement]:
        point = as_point(world_point)
        if self._tool is Tool.PROTRACTOR:
            return self._protractor_tap(point, snap_enabled)
        if self._tool is Tool.PAN:
            return None
        if self._tool.uses_line_reference:
            ref = self.states.line_reference(self._tool)
            point = project_onto_line(point, ref.center, ref.rotation_deg)
        self._points = [point]
        self._state = DragState.ACCUMULATING
        return None

    def drag_move(self, world_point: Point, *, scale: float = 1.0, snap_enabled: bool = True) -> None:
        if self._state is not DragState.ACCUMULATING:
            return
        point = as_point(world_point)
        if self._tool.uses_line_reference:
            ref = self.states.line_reference(self._tool)
            point = project_onto_line(point, ref.center, ref.rotation_deg)
            # Only the ruler locks onto grid intersections; the set-square glides freely.
            if self._tool is Tool.RULER and snap_enabled:
                point = snap_to_grid(
                    point, self.config.grid_spacing / scale, self.config.grid_snap_threshold
                )
        self._points.append(point)

    def drag_end(self) -> Optional[Stroke]:
        if self._state is not DragState.ACCUMULATING:
            return None
        points = tuple(self._points)
        self._points.clear()
        self._state = DragState.IDLE
        if len(points) < 2:
            logger.debug("Discarding %s drag with %d point(s)", self._tool.value, len(points))
            return None
        style = TOOL_STROKE_STYLES.get(self._tool, self.pen_style)
        return Stroke(points=points, color=style.color, width_px=style.width_px)

    def _protractor_tap(self, point: Point, snap_enabled: bool) -> Optional[ProtractorMeasurement]:
        taps = self.states.protractor
        if taps.vertex is None:
            taps.vertex = point
            return None
        if taps.ray1 is None:
            taps.ray1 = point
            return None
        raw = angle_at_vertex(taps.ray1, taps.vertex, point)
        snapped, hard = snap_angle(raw, self.config.protractor_snap_threshold)
        use_snapped = snap_enabled and hard
        measurement = ProtractorMeasurement(
            vertex=taps.vertex,
            ray1=taps.ray1,
            ray2=point,
            measured_deg=snapped if use_snapped else raw,
            snapped=use_snapped,
        )
        taps.measurement = measurement
        taps.reset_taps()
        logger.info("Protractor measured %.1f deg", measurement.measured_deg)
        return measurement


__all__ = ["DragState", "TOOL_STROKE_STYLES", "ToolStateMachine", "apply_transform_event"]
