"""Tests for the pygame live preview, run against SDL's dummy video driver."""

from __future__ import annotations

import numpy as np
import pygame
import pytest

from pathtracer.renderer.canvas import Canvas
from pathtracer.renderer.renderer import RenderPass


@pytest.fixture
def preview(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    from pathtracer.renderer.preview import LivePreview

    window = LivePreview(4, 2, scale=2.0, title="Test")
    yield window
    window.close()


class TestLivePreview:
    def test_window_is_scaled(self, preview) -> None:
        assert preview.window_size == (8, 4)

    def test_show_updates_caption(self, preview) -> None:
        canvas = Canvas(2, 4, np.full((2, 4, 3), 0.5, dtype=np.float32), layers=1)
        preview.show(RenderPass(canvas, 1, 4))
        assert pygame.display.get_caption()[0] == "Test - pass 1/4 (25.0%)"
        assert preview.last_pass.current_pass == 1

    def test_quit_event_closes(self, preview) -> None:
        assert not preview.poll_closed()
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert preview.poll_closed()

    def test_closing_stops_worker(self, preview, ground_and_ball) -> None:
        from pathtracer.camera import Camera
        from pathtracer.renderer.renderer import Renderer
        from pathtracer.renderer.worker import RenderWorker

        renderer = Renderer(ground_and_ball, Camera.builder().build()).width(2).height(2).samples(50).workers(1)
        worker = RenderWorker(renderer, 50).start()
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        assert preview.follow(worker) is None
        assert worker.stopped
        worker.join(timeout=30)
