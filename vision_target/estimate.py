import logging
import threading

from .types import Estimate

logger = logging.getLogger(__name__)


class TargetEstimate:
    """
    The latest (center_x, distance) found by the vision worker.

    Written by the producer once per qualifying frame and read by control code
    at its own rate. Both fields live in one immutable snapshot that is
    swapped under the lock, so a reader never sees half of an update.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = Estimate.empty()
        self._updates = 0

    def publish(self, center_x: float, distance: float) -> Estimate:
        value = Estimate(center_x=float(center_x), distance=float(distance))
        with self._lock:
            self._value = value
            self._updates += 1
        logger.debug(f"Published center_x={value.center_x:.1f} distance={value.distance:.2f}")
        return value

    def read(self) -> Estimate:
        with self._lock:
            return self._value

    @property
    def updates(self) -> int:
        with self._lock:
            return self._updates

    @property
    def has_target(self) -> bool:
        return self.updates > 0
