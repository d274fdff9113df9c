"""Scale a physical trajectory into a fixed pixel viewport."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..errors import InvalidParameter
from .trajectory import FlightMetrics, TrajectorySample

HEADROOM_FACTOR = 1.2  # keeps the apex below the top edge
MIN_SCALE_SPAN = 1.0


@dataclass(frozen=True)
class ViewportMargins:
    """Pixel margins around the plot area.

    ``horizontal``/``vertical`` are the totals removed from the drawable
    width/height; ``left``/``bottom`` place the launch point.
    """

    horizontal: float = 40.0
    vertical: float = 30.0
    left: float = 20.0
    bottom: float = 10.0


@dataclass(frozen=True, eq=False)
class PixelPath:
    """Screen coordinates (origin top-left), one per trajectory point."""

    px: np.ndarray
    py: np.ndarray
    width: int
    height: int

    @property
    def points(self) -> List[Tuple[float, float]]:
        return [(float(x), float(y)) for x, y in zip(self.px, self.py)]

    def __len__(self) -> int:
        return len(self.px)


def map_to_viewport(
    sample: TrajectorySample,
    metrics: FlightMetrics,
    width: int,
    height: int,
    margins: Optional[ViewportMargins] = None,
) -> PixelPath:
    """Map physical points to pixels.

    The horizontal scale fits the range and the vertical scale fits the apex
    plus headroom; both spans are floored at 1 m so near-zero trajectories do
    not blow up. The y axis is flipped so ground level sits ``bottom`` pixels
    above the lower edge.
    """
    if width <= 0 or height <= 0:
        raise InvalidParameter(f"Viewport must be positive, got {width}x{height}")
    margins = margins or ViewportMargins()

    scale_x = (width - margins.horizontal) / max(metrics.range_m, MIN_SCALE_SPAN)
    scale_y = (height - margins.vertical) / max(
        metrics.max_height_m * HEADROOM_FACTOR, MIN_SCALE_SPAN
    )

    px = margins.left + sample.x_m * scale_x
    py = height - margins.bottom - sample.y_m * scale_y

    return PixelPath(
        px=np.asarray(px, dtype=float),
        py=np.asarray(py, dtype=float),
        width=width,
        height=height,
    )


class ViewportMapper:
    """Viewport of fixed size and margins."""

    def __init__(
        self, width: int, height: int, margins: Optional[ViewportMargins] = None
    ):
        if width <= 0 or height <= 0:
            raise InvalidParameter(f"Viewport must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.margins = margins or ViewportMargins()

    def map(self, sample: TrajectorySample, metrics: FlightMetrics) -> PixelPath:
        return map_to_viewport(sample, metrics, self.width, self.height, self.margins)
