# renderer/progress.py
import queue
import threading

from tqdm import tqdm


class ProgressTracker:
    """
    Command-line progress bar fed by completion signals from the renderer.

    ``notify()`` is called once per finished pass; a dedicated thread drains
    those signals and refreshes the bar every ``interval`` seconds. It only
    counts, it never looks at image data.
    """
    def __init__(self, total: int, interval: float = 0.5, **tqdm_kwargs):
        self.total = total
        self.interval = interval
        self.done = 0
        self._signals: "queue.SimpleQueue[None]" = queue.SimpleQueue()
        self._closed = threading.Event()
        self._tqdm_kwargs = dict(unit="pass", desc="Rendering", dynamic_ncols=True)
        self._tqdm_kwargs.update(tqdm_kwargs)
        self._thread = threading.Thread(target=self._run, name="render-progress", daemon=True)

    def start(self) -> "ProgressTracker":
        self._thread.start()
        return self

    def notify(self):
        self._signals.put(None)

    def close(self):
        """Stop the reporting thread once every pending signal is counted."""
        self._closed.set()
        self._thread.join()

    def _drain(self) -> int:
        count = 0
        while True:
            try:
                self._signals.get_nowait()
            except queue.Empty:
                return count
            count += 1

    def _run(self):
        with tqdm(total=self.total, **self._tqdm_kwargs) as bar:
            while True:
                finished = self._closed.wait(self.interval)
                count = self._drain()
                if count:
                    self.done += count
                    bar.update(count)
                if finished:
                    break
