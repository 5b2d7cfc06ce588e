import logging
import queue
import threading
from typing import Any, Optional, Sequence

from .config import DEFAULT_CONFIG, VisionConfig
from .core import process_frame
from .estimate import TargetEstimate

logger = logging.getLogger(__name__)

_STOP = object()


class FrameWorker(threading.Thread):
    """
    Background producer: runs process_frame once per completed frame.

    The capture side calls submit() whenever a frame's contours are ready.
    Frames are handled one at a time in arrival order; if the worker falls
    behind, the pending frame is replaced by the newer one.
    """

    def __init__(
            self,
            estimate: TargetEstimate,
            config: VisionConfig = DEFAULT_CONFIG,
            max_pending: int = 1,
        ) -> None:
        super().__init__(name="vision-target-worker", daemon=True)
        if max_pending < 1:
            raise ValueError(f"max_pending must be >= 1, got {max_pending}")
        self.estimate = estimate
        self.config = config
        self._frames: "queue.Queue[Any]" = queue.Queue(maxsize=max_pending)
        # serializes submit() against stop() so the stop marker is never evicted
        self._submit_lock = threading.Lock()
        self._stopping = threading.Event()
        self._count_lock = threading.Lock()
        self._processed = 0
        self._dropped = 0

    @property
    def frames_processed(self) -> int:
        with self._count_lock:
            return self._processed

    @property
    def frames_dropped(self) -> int:
        with self._count_lock:
            return self._dropped

    @property
    def stopping(self) -> bool:
        return self._stopping.is_set()

    def _drop_pending(self) -> None:
        try:
            self._frames.get_nowait()
        except queue.Empty:
            return
        self._frames.task_done()
        with self._count_lock:
            self._dropped += 1

    def submit(self, contours: Sequence[Any]) -> bool:
        """Queue a frame. Returns False once the worker is stopping."""
        with self._submit_lock:
            if self._stopping.is_set():
                logger.debug("Worker is stopping, frame ignored")
                return False
            while True:
                try:
                    self._frames.put_nowait(contours)
                    return True
                except queue.Full:
                    self._drop_pending()

    def join_pending(self) -> None:
        """Block until every submitted frame has been handled."""
        self._frames.join()

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._submit_lock:
            if not self._stopping.is_set():
                self._stopping.set()
                # submit() is locked out, so room made here stays free
                while True:
                    try:
                        self._frames.put_nowait(_STOP)
                        break
                    except queue.Full:
                        self._drop_pending()

        if self.ident is None:
            logger.info("Worker stopped before it was started")
            return
        self.join(timeout)
        if self.is_alive():
            logger.warning(f"Worker did not stop within {timeout}s")
        else:
            logger.info(f"Worker stopped after {self.frames_processed} frame(s)")

    def run(self) -> None:
        logger.info("Worker started")
        while True:
            item = self._frames.get()
            try:
                if item is _STOP:
                    return
                try:
                    process_frame(item, self.estimate, self.config)
                except Exception:
                    logger.exception("Failed to process frame")
                with self._count_lock:
                    self._processed += 1
            finally:
                self._frames.task_done()
