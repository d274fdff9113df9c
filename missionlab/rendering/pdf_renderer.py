"""PDF trajectory renderer for MissionLab."""

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from reportlab.graphics import renderPDF
from reportlab.graphics.shapes import Circle, Drawing, Line, PolyLine, Rect, String
from reportlab.lib import colors

from ..physics import FlightMetrics, PixelPath

TRAJECTORY_COLOR = colors.HexColor("#8ce1ff")
BACKGROUND_COLOR = colors.HexColor("#0b1a2b")
TEXT_COLOR = colors.black
READOUT_LINE_HEIGHT = 16
READOUT_PADDING = 12


def create_trajectory_drawing(path: PixelPath, metrics: FlightMetrics) -> Drawing:
    """Build a drawing with the viewport on top and the metrics read-out below."""
    lines = metrics.summary_lines()
    readout_height = READOUT_PADDING * 2 + READOUT_LINE_HEIGHT * len(lines)
    drawing = Drawing(path.width, path.height + readout_height)

    # PDF space has a bottom-left origin; pixel space is top-left
    def to_page_y(py: float) -> float:
        return readout_height + (path.height - py)

    drawing.add(
        Rect(
            0,
            readout_height,
            path.width,
            path.height,
            fillColor=BACKGROUND_COLOR,
            strokeColor=None,
        )
    )

    points = [(float(x), to_page_y(float(y))) for x, y in zip(path.px, path.py)]
    if len(points) > 1:
        ground_y = points[0][1]
        drawing.add(
            Line(0, ground_y, path.width, ground_y, strokeColor=colors.grey)
        )
        flat = [coord for point in points for coord in point]
        drawing.add(PolyLine(flat, strokeColor=TRAJECTORY_COLOR, strokeWidth=2))
    elif points:
        x, y = points[0]
        drawing.add(Circle(x, y, 2, fillColor=TRAJECTORY_COLOR, strokeColor=None))

    for index, text in enumerate(lines):
        y = readout_height - READOUT_PADDING - (index + 1) * READOUT_LINE_HEIGHT + 4
        drawing.add(
            String(
                READOUT_PADDING,
                y,
                text,
                fontName="Helvetica",
                fontSize=11,
                fillColor=TEXT_COLOR,
            )
        )

    return drawing


class PdfTrajectoryRenderer:
    """Renders each frame to a single-page PDF, overwriting the previous one."""

    def __init__(self, output_file: Union[str, Path]):
        self.output_file = Path(output_file)
        self.last_drawing: Optional[Drawing] = None

    def draw(self, path: PixelPath, metrics: FlightMetrics) -> None:
        drawing = create_trajectory_drawing(path, metrics)
        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        renderPDF.drawToFile(drawing, str(self.output_file), "Projectile trajectory")
        self.last_drawing = drawing
        logger.debug(f"Trajectory drawn to {self.output_file}")
