"""Renderers for mapped trajectories."""

from .protocol import Renderer
from .pdf_renderer import PdfTrajectoryRenderer, create_trajectory_drawing

__all__ = ["Renderer", "PdfTrajectoryRenderer", "create_trajectory_drawing"]
