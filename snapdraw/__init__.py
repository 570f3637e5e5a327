from .config import ConfigError, SessionConfig, get_session_config, set_session_config
from .geometry import (
    COMMON_ANGLES,
    angle_at_vertex,
    distance,
    normalize_angle,
    polyline_length,
    project_onto_line,
    px_to_cm,
    screen_to_world,
    snap_angle,
    snap_to_grid,
    world_to_screen,
)
from .history import HistoryManager
from .model import (
    LineReference,
    PEN_PALETTE,
    Point,
    ProtractorMeasurement,
    SetSquareReference,
    Stroke,
    Tool,
    ToolStates,
    ViewportTransform,
)
from .session import DrawingSession
from .tools import DragState, ToolStateMachine, apply_transform_event

__all__ = [
    'COMMON_ANGLES',
    'ConfigError',
    'DragState',
    'DrawingSession',
    'HistoryManager',
    'LineReference',
    'PEN_PALETTE',
    'Point',
    'ProtractorMeasurement',
    'SessionConfig',
    'SetSquareReference',
    'Stroke',
    'Tool',
    'ToolStateMachine',
    'ToolStates',
    'ViewportTransform',
    'angle_at_vertex',
    'apply_transform_event',
    'distance',
    'get_session_config',
    'normalize_angle',
    'polyline_length',
    'project_onto_line',
    'px_to_cm',
    'screen_to_world',
    'set_session_config',
    'snap_angle',
    'snap_to_grid',
    'world_to_screen',
]
