# renderer/renderer.py
import logging
import math
import os
import queue
import random
import threading
import time
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from typing import NamedTuple, Optional, Union

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.errors import InvalidSettingError, RenderCancelled, RenderError
from pathtracer.export.writers import save_canvas, to_rgba_bytes
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.world import World
from pathtracer.renderer.canvas import Canvas
from pathtracer.renderer.progress import ProgressTracker

logger = logging.getLogger(__name__)

# Offsets the ray start so a surface does not re-hit itself.
T_MIN = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)
SKY_BOTTOM = Vector3(1.0, 1.0, 1.0)
SKY_TOP = Vector3(0.5, 0.7, 1.0)

# How often blocked queue operations wake up to check for cancellation.
_POLL_SECONDS = 0.1

_END_OF_STREAM = object()


class RenderPass(NamedTuple):
    """Snapshot of the running average after ``current_pass`` merged passes."""
    canvas: Canvas
    current_pass: int
    total_passes: int


class Render:
    """A finished image: normalized and gamma corrected."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    def save(self, path):
        save_canvas(self.canvas, path)

    def to_rgba_bytes(self) -> bytes:
        return to_rgba_bytes(self.canvas)


def ray_color(world: Hittable, r: Ray, depth: int, rng=random) -> Vector3:
    """Radiance carried back along ``r`` after at most ``depth`` scatter events."""
    if depth <= 0:
        return BLACK

    rec = world.hit(r, T_MIN, math.inf)
    if rec is not None:
        scattered = rec.material.scatter(r, rec, rng)
        if scattered is not None:
            return rec.material.albedo() * ray_color(world, scattered, depth - 1, rng)
        # Absorbed
        return BLACK

    unit_direction = r.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return Vector3.lerp(SKY_BOTTOM, SKY_TOP, t)


def compute_render(height: int, width: int, camera: Camera, world: Hittable,
                   max_depth: int, rng=random) -> Canvas:
    """Trace one jittered ray per pixel and return the pass as its own Canvas."""
    canvas = Canvas(height, width)
    u_scale = max(width - 1, 1)
    v_scale = max(height - 1, 1)
    for j in range(height):
        for i in range(width):
            u = (i + rng.random()) / u_scale
            v = (j + rng.random()) / v_scale
            r = camera.get_ray_from_coords(u, v, rng)
            # Camera v grows upwards while canvas rows grow downwards.
            canvas.set_pixel(i, height - 1 - j, ray_color(world, r, max_depth, rng))
    return canvas


def render_pass(height: int, width: int, camera: Camera, world: Hittable,
                max_depth: int, seed: Optional[int]) -> Canvas:
    """
    Entry point of a worker process: one full pass drawn from its own
    ``Random(seed)``. With ``seed`` None the generator is seeded from OS
    entropy, so forked workers never share a sequence.
    """
    return compute_render(height, width, camera, world, max_depth, random.Random(seed))


class _Aggregator(threading.Thread):
    """
    Single consumer owning the running Canvas.

    Passes arrive through ``data_queue``; only this thread ever touches the
    accumulated buffer.
    """
    def __init__(self, height: int, width: int, total_passes: int,
                 data_queue: queue.Queue, pass_queue: Optional[queue.Queue],
                 stop_event: threading.Event):
        super().__init__(name="render-aggregator", daemon=True)
        self.canvas = Canvas(height, width)
        self.total_passes = total_passes
        self.data_queue = data_queue
        self.pass_queue = pass_queue
        self.stop_event = stop_event
        self.merged = 0
        self.result: Optional[Canvas] = None

    def run(self):
        try:
            while True:
                try:
                    item = self.data_queue.get(timeout=_POLL_SECONDS)
                except queue.Empty:
                    if self.stop_event.is_set():
                        return
                    continue
                if item is _END_OF_STREAM or self.stop_event.is_set():
                    break
                self.canvas += item
                self.merged += 1
                logger.debug("Merged pass %d/%d", self.merged, self.total_passes)
                if self.pass_queue is not None:
                    output = self.canvas.copy()
                    output.normalize()
                    output.gamma_correction()
                    self.pass_queue.put(RenderPass(output, self.merged, self.total_passes))

            if not self.stop_event.is_set():
                self.canvas.normalize()
                self.canvas.gamma_correction()
                self.result = self.canvas
        finally:
            if self.pass_queue is not None:
                self.pass_queue.put(None)


class Renderer:
    """
    Progressive multi-process renderer.

    Configure with the chainable setters, then call ``render()``::

        render = (Renderer(world, camera)
                  .width(400).height(225)
                  .samples(64).bounces(8)
                  .render())
        render.save("out.png")

    Every sample is an independent full-resolution pass traced in a worker
    process; the scene and camera are pickled to the workers and finished
    passes come back to a single aggregator thread in this process.
    """
    def __init__(self, world: Union[World, Hittable], camera: Camera):
        self._world = world.hittables if isinstance(world, World) else world
        self._camera = camera
        self._width = 960
        self._height = 540
        self._samples = 100
        self._bounces = 2
        self._workers = os.cpu_count() or 1
        self._seed: Optional[int] = None
        self._render_pass_queue: Optional[queue.Queue] = None
        self._with_cli_progress_tracker = False

    @staticmethod
    def _positive(name: str, value) -> int:
        try:
            whole = not isinstance(value, bool) and int(value) == value
        except (TypeError, ValueError, OverflowError):
            whole = False
        if not whole or value < 1:
            raise InvalidSettingError(f"{name} must be a positive integer, got {value!r}")
        return int(value)

    def width(self, width: int) -> "Renderer":
        self._width = self._positive("width", width)
        return self

    def height(self, height: int) -> "Renderer":
        self._height = self._positive("height", height)
        return self

    def samples(self, samples: int) -> "Renderer":
        self._samples = self._positive("samples", samples)
        return self

    def bounces(self, bounces: int) -> "Renderer":
        self._bounces = self._positive("bounces", bounces)
        return self

    def workers(self, workers: int) -> "Renderer":
        self._workers = self._positive("workers", workers)
        return self

    def seed(self, seed: Optional[int]) -> "Renderer":
        """Make each pass reproducible; pass ``k`` draws from ``Random(seed + k)``."""
        self._seed = seed
        return self

    def with_cli_progress_tracker(self) -> "Renderer":
        self._with_cli_progress_tracker = True
        return self

    def get_render_pass_queue(self) -> queue.Queue:
        """
        Register a progress sink. The returned queue receives one RenderPass
        per merged pass, then ``None`` once the render ends.
        """
        self._render_pass_queue = queue.Queue()
        return self._render_pass_queue

    def _pass_seed(self, index: int) -> Optional[int]:
        return None if self._seed is None else self._seed + index

    @staticmethod
    def _deliver(canvas: Canvas, data_queue: queue.Queue, consumer: threading.Thread,
                 stop_event: threading.Event):
        # Bounded put; give up if the aggregator is gone or the render was stopped.
        while True:
            try:
                data_queue.put(canvas, timeout=_POLL_SECONDS)
                return
            except queue.Full:
                if stop_event.is_set() or not consumer.is_alive():
                    logger.debug("Dropping pass: aggregator no longer consuming")
                    return

    def render(self, stop_event: Optional[threading.Event] = None) -> Render:
        """
        Run every pass and return the averaged image.

        At most ``workers`` passes are in flight at once, so a stop request
        is seen before the next pass is handed to a worker.

        Raises:
            RenderCancelled: ``stop_event`` was set before the render finished.
            RenderError: no pass could be merged.
        """
        stop_event = stop_event or threading.Event()
        logger.info("Rendering %dx%d, %d samples, %d bounces on %d worker processes",
                    self._width, self._height, self._samples, self._bounces, self._workers)
        started = time.perf_counter()

        data_queue: queue.Queue = queue.Queue(maxsize=2 * self._workers)
        aggregator = _Aggregator(self._height, self._width, self._samples,
                                 data_queue, self._render_pass_queue, stop_event)
        aggregator.start()

        tracker = ProgressTracker(self._samples).start() if self._with_cli_progress_tracker else None

        lost = 0
        submitted = 0
        pending = set()
        pool = ProcessPoolExecutor(max_workers=self._workers)
        try:
            while submitted < self._samples or pending:
                while (not stop_event.is_set() and submitted < self._samples
                       and len(pending) < self._workers):
                    pending.add(pool.submit(render_pass, self._height, self._width,
                                            self._camera, self._world, self._bounces,
                                            self._pass_seed(submitted)))
                    submitted += 1
                if stop_event.is_set():
                    break
                done, pending = wait(pending, timeout=_POLL_SECONDS, return_when=FIRST_COMPLETED)
                for future in done:
                    exc = future.exception()
                    if exc is not None:
                        lost += 1
                        logger.warning("Render pass lost", exc_info=exc)
                        continue
                    if tracker is not None:
                        tracker.notify()
                    self._deliver(future.result(), data_queue, aggregator, stop_event)
        finally:
            # Passes already running finish; queued ones are dropped on cancellation.
            pool.shutdown(wait=not stop_event.is_set(), cancel_futures=stop_event.is_set())
            if tracker is not None:
                tracker.close()

        if not stop_event.is_set():
            while aggregator.is_alive():
                try:
                    data_queue.put(_END_OF_STREAM, timeout=_POLL_SECONDS)
                    break
                except queue.Full:
                    continue
        aggregator.join()

        if stop_event.is_set():
            logger.info("Render cancelled after %d/%d passes", aggregator.merged, self._samples)
            raise RenderCancelled(f"Render stopped after {aggregator.merged} of {self._samples} passes")
        if aggregator.result is None or aggregator.merged == 0:
            raise RenderError(f"All {self._samples} render passes were lost")
        if lost:
            logger.warning("%d of %d passes lost; image averages the remaining %d",
                           lost, self._samples, aggregator.merged)

        logger.info("Render finished in %.2fs", time.perf_counter() - started)
        return Render(aggregator.result)
