"""Canvas compositing engine."""

from .canvas import TEXT_PALETTE, CanvasEngine, CanvasState, CanvasStateError
from .render import render_layers, render_template_background

__all__ = [
    "CanvasEngine",
    "CanvasState",
    "CanvasStateError",
    "TEXT_PALETTE",
    "render_layers",
    "render_template_background",
]
