# renderer/preview.py
import logging
import queue
from typing import Optional

import pygame

from pathtracer.renderer.renderer import Render, RenderPass
from pathtracer.renderer.worker import RenderAborted, RenderFinished, RenderPassAvailable, RenderWorker

logger = logging.getLogger(__name__)


class LivePreview:
    """
    pygame window showing each RenderPass as it arrives.

    Purely a consumer: it reads snapshots from the renderer's pass queue and
    never touches the accumulating image.
    """
    def __init__(self, width: int, height: int, scale: float = 1.0,
                 title: str = "Path Tracer - Live Preview"):
        pygame.init()
        self.image_size = (width, height)
        self.window_size = (max(1, int(width * scale)), max(1, int(height * scale)))
        self.title = title
        self.screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.last_pass: Optional[RenderPass] = None

    def show(self, render_pass: RenderPass):
        # surfarray is indexed (x, y), the canvas (row, column)
        pixels = render_pass.canvas.to_rgb_bytes_array().swapaxes(0, 1)
        surface = pygame.surfarray.make_surface(pixels)
        if surface.get_size() != self.window_size:
            surface = pygame.transform.scale(surface, self.window_size)
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

        progress = render_pass.current_pass / render_pass.total_passes * 100
        pygame.display.set_caption(
            f"{self.title} - pass {render_pass.current_pass}/{render_pass.total_passes} "
            f"({progress:.1f}%)"
        )
        self.last_pass = render_pass

    def poll_closed(self) -> bool:
        """Process window events; True once the user asked to close."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return True
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return True
        return False

    def follow(self, worker: RenderWorker, fps: int = 30) -> Optional[Render]:
        """
        Display the passes of a running RenderWorker.

        Returns the finished Render, or None if the render was aborted or the
        window was closed first (which also stops the worker).
        """
        while True:
            if self.poll_closed():
                logger.info("Preview window closed, stopping render")
                worker.stop()
                return None
            try:
                event = worker.events.get(timeout=1.0 / fps)
            except queue.Empty:
                continue
            if isinstance(event, RenderPassAvailable):
                self.show(event.render_pass)
                self.clock.tick(fps)
            elif isinstance(event, RenderFinished):
                return event.render
            elif isinstance(event, RenderAborted):
                logger.info("Render aborted: %s", event.reason)
                return None

    def wait_for_close(self, fps: int = 30):
        while not self.poll_closed():
            self.clock.tick(fps)

    def close(self):
        pygame.display.quit()
        pygame.quit()
