"""Tests for the background render worker and its event stream."""

from __future__ import annotations

from pathtracer.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.renderer.renderer import Renderer
from pathtracer.renderer.worker import (
    RenderAborted,
    RenderFinished,
    RenderPassAvailable,
    RenderStarted,
    RenderWorker,
)


def make_renderer(world, samples: int = 3) -> Renderer:
    camera = Camera.builder().set_origin(Vector3(0, 1, 3)).set_look_at(Vector3(0, 0.5, 0)).build()
    return Renderer(world, camera).width(4).height(3).samples(samples).bounces(2).workers(2).seed(8)


class TestRenderWorker:
    def test_event_order(self, ground_and_ball) -> None:
        worker = RenderWorker(make_renderer(ground_and_ball), 3).start()

        events = list(worker.iter_events())
        worker.join(timeout=10)

        assert isinstance(events[0], RenderStarted)
        assert events[0].total_passes == 3
        passes = events[1:-1]
        assert all(isinstance(e, RenderPassAvailable) for e in passes)
        assert [e.render_pass.current_pass for e in passes] == [1, 2, 3]
        assert isinstance(events[-1], RenderFinished)
        assert events[-1].render.width == 4
        assert not worker.is_alive()

    def test_stop_before_start_aborts(self, ground_and_ball) -> None:
        worker = RenderWorker(make_renderer(ground_and_ball, samples=6), 6)
        worker.stop()
        worker.start()

        events = list(worker.iter_events())
        worker.join(timeout=10)

        assert worker.stopped
        assert isinstance(events[0], RenderStarted)
        assert isinstance(events[-1], RenderAborted)
        assert not any(isinstance(e, RenderFinished) for e in events)
