from typing import Any, Iterator, List, Sequence, Tuple
import numpy as np
import cv2

from .types import BoundingPair, Rect


_INT32 = np.iinfo(np.int32)


def _as_points(cnt: Any) -> np.ndarray:
    pts = np.asarray(cnt)
    if pts.size == 0:
        return pts.reshape(0, 2)
    if np.issubdtype(pts.dtype, np.floating):
        if not np.isfinite(pts).all() or np.abs(pts).max() > _INT32.max:
            raise ValueError("Contour coordinates must be finite 32-bit pixel coordinates")
        return pts.reshape(-1, 2).astype(np.float32)
    if not np.issubdtype(pts.dtype, np.integer):
        raise ValueError(f"Contour points must be numeric, got dtype {pts.dtype}")
    if pts.min() < _INT32.min or pts.max() > _INT32.max:
        raise ValueError("Contour coordinates do not fit in 32-bit pixel coordinates")
    return pts.reshape(-1, 2).astype(np.int32)


def rect_from_contour(cnt: Any) -> Rect:
    """Axis-aligned bounding rect of a contour (OpenCV array or list of (x, y))."""
    pts = _as_points(cnt)
    if len(pts) == 0:
        return Rect(0, 0, 0, 0)
    x, y, w, h = cv2.boundingRect(pts)
    return Rect(int(x), int(y), int(w), int(h))


def rects_from_contours(contours: Sequence[Any]) -> List[Rect]:
    return [rect_from_contour(c) for c in contours]


def bounding_pair(rect1: Rect, rect2: Rect) -> BoundingPair:
    # smallest box enclosing both: min on the low edges, max on the high ones
    return BoundingPair(
        top=min(rect1.top, rect2.top),
        bottom=max(rect1.bottom, rect2.bottom),
        left=min(rect1.left, rect2.left),
        right=max(rect1.right, rect2.right),
    )


def enumerate_pairs(n: int) -> Iterator[Tuple[int, int]]:
    """Yield every (i, j) with i < j, outer index first."""
    for i in range(n):
        for j in range(i + 1, n):
            yield i, j
