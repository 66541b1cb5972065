# renderer/worker.py
import logging
import queue
import threading
from typing import Iterator, NamedTuple, Optional

from pathtracer.errors import PathTracerError, RenderCancelled
from pathtracer.renderer.renderer import Render, Renderer, RenderPass

logger = logging.getLogger(__name__)


class RenderStarted(NamedTuple):
    total_passes: int


class RenderPassAvailable(NamedTuple):
    render_pass: RenderPass


class RenderFinished(NamedTuple):
    render: Render


class RenderAborted(NamedTuple):
    reason: str


class RenderWorker:
    """
    Runs a Renderer on a background thread and turns its output into events.

    Front ends read ``events`` (or iterate ``iter_events()``): one
    RenderStarted, a RenderPassAvailable per merged pass, then exactly one of
    RenderFinished or RenderAborted. ``stop()`` cancels cooperatively; passes
    already being traced still run to completion in the background.
    """
    def __init__(self, renderer: Renderer, total_passes: int):
        self.renderer = renderer
        self.total_passes = total_passes
        self.events: "queue.Queue" = queue.Queue()
        self._stop_event = threading.Event()
        self._pass_queue = renderer.get_render_pass_queue()
        self._thread = threading.Thread(target=self._run, name="render-worker-main", daemon=True)
        self._bridge = threading.Thread(target=self._forward_passes, name="render-pass-bridge", daemon=True)

    def start(self) -> "RenderWorker":
        self.events.put(RenderStarted(self.total_passes))
        self._bridge.start()
        self._thread.start()
        return self

    def stop(self):
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def join(self, timeout: Optional[float] = None):
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def iter_events(self) -> Iterator[NamedTuple]:
        while True:
            event = self.events.get()
            yield event
            if isinstance(event, (RenderFinished, RenderAborted)):
                return

    def _forward_passes(self):
        while True:
            render_pass = self._pass_queue.get()
            if render_pass is None:
                return
            self.events.put(RenderPassAvailable(render_pass))

    def _run(self):
        try:
            render = self.renderer.render(stop_event=self._stop_event)
        except RenderCancelled as exc:
            self._bridge.join()
            self.events.put(RenderAborted(str(exc)))
            return
        except PathTracerError as exc:
            logger.error("Render failed: %s", exc)
            self._bridge.join()
            self.events.put(RenderAborted(str(exc)))
            return
        self._bridge.join()
        self.events.put(RenderFinished(render))
