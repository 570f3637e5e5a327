from . import DrawingSession, Tool, polyline_length
from .logging_utils import configure_logging


def _describe(session: DrawingSession) -> str:
    lines = []
    for idx, stroke in enumerate(session.strokes):
        start, end = stroke.points[0], stroke.points[-1]
        lines.append(
            f"  {idx}: {len(stroke.points)} pts {stroke.color} w={stroke.width_px:g} "
            f"({start[0]:.1f}, {start[1]:.1f}) -> ({end[0]:.1f}, {end[1]:.1f}) "
            f"len={polyline_length(stroke.points):.1f}"
        )
    return "\n".join(lines) if lines else "  (none)"


def run():
    configure_logging("WARNING")
    session = DrawingSession()

    session.handle_drag_start((10.0, 10.0))
    for x in range(20, 60, 10):
        session.handle_drag_move((x, 10.0 + x * 0.5))
    session.handle_drag_end()

    session.select_tool(Tool.RULER)
    session.apply_transform_event((0.0, 0.0), 43.0)
    print(f"Ruler rotation after 43 deg twist: {session.ruler.rotation_deg:g}")
    session.handle_drag_start((400.0, 400.0))
    session.handle_drag_move((462.0, 438.0))
    session.handle_drag_move((521.0, 519.0))
    session.handle_drag_end()

    session.select_tool(Tool.SET_SQUARE)
    session.handle_drag_start((500.0, 650.0))
    session.handle_drag_move((700.0, 580.0))
    session.handle_drag_end()

    session.select_tool(Tool.PROTRACTOR)
    for tap in ((0.0, 0.0), (100.0, 0.0), (0.5, 100.0)):
        measurement = session.handle_drag_start(tap)
    print(f"Protractor: {measurement.measured_deg:.1f} deg (snapped={measurement.snapped})")

    print(f"Strokes:\n{_describe(session)}")
    session.undo()
    print(f"After undo:\n{_describe(session)}")
    session.redo()
    print(f"After redo:\n{_describe(session)}")


if __name__ == "__main__":
    run()
