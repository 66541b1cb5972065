from pathtracer.renderer.canvas import Canvas
from pathtracer.renderer.renderer import Render, Renderer, RenderPass, compute_render, ray_color, render_pass
from pathtracer.renderer.worker import (
    RenderAborted,
    RenderFinished,
    RenderPassAvailable,
    RenderStarted,
    RenderWorker,
)

__all__ = [
    "Canvas",
    "Render",
    "RenderAborted",
    "RenderFinished",
    "RenderPass",
    "RenderPassAvailable",
    "RenderStarted",
    "RenderWorker",
    "Renderer",
    "compute_render",
    "ray_color",
    "render_pass",
]
