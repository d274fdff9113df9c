"""Protocol definition for trajectory renderers."""

from typing import Protocol

from ..physics import FlightMetrics, PixelPath


class Renderer(Protocol):
    """Anything that can draw a mapped trajectory.

    The simulation core only produces a :class:`PixelPath` and
    :class:`FlightMetrics`; drawing surfaces plug in behind this interface.
    """

    def draw(self, path: PixelPath, metrics: FlightMetrics) -> None:
        """Draw the path and its metrics read-out.

        Args:
            path: Pixel coordinates with top-left origin
            metrics: Flight summary to display alongside the curve
        """
        ...
