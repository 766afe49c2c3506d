"""Graphics and rendering for BALLRUNNER."""

from ballrunner.graphics.primitives import Color, Buffer, new_buffer, fill, draw_rect, draw_circle
from ballrunner.graphics.renderer import SceneRenderer, SceneState

__all__ = [
    "Color",
    "Buffer",
    "new_buffer",
    "fill",
    "draw_rect",
    "draw_circle",
    "SceneRenderer",
    "SceneState",
]
