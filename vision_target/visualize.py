from typing import Optional
import matplotlib.pyplot as plt
import numpy as np
import cv2

from .geometry import bounding_pair
from .types import Estimate, Rect, ScoredPair


def _corners(r: Rect):
    return (int(round(r.left)), int(round(r.top))), (int(round(r.right)), int(round(r.bottom)))


def draw_target_on_image(
        image_bgr: np.ndarray,
        pair: Optional[ScoredPair],
        estimate: Optional[Estimate] = None,
    ) -> np.ndarray:
    vis = image_bgr.copy()
    if pair is None:
        return vis

    for r in (pair.rect1, pair.rect2):
        p1, p2 = _corners(r)
        cv2.rectangle(vis, p1, p2, (0, 255, 0), 2)

    b = bounding_pair(pair.rect1, pair.rect2)
    x1, y1 = int(round(b.left)), int(round(b.top))
    x2, y2 = int(round(b.right)), int(round(b.bottom))
    cv2.rectangle(vis, (x1, y1), (x2, y2), (0, 200, 255), 1)

    label = f"score={pair.total:.0f}"
    if estimate is not None:
        label += f" d={estimate.distance:.1f}in"
        cx = int(round(estimate.center_x))
        cv2.line(vis, (cx, y1), (cx, y2), (0, 200, 255), 1)

    (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, 0.5, 1)
    y_text = max(th + 4, y1 - 6)
    cv2.putText(vis, label, (x1, y_text), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 200, 255), 1, cv2.LINE_AA)
    return vis


def show_image(image_bgr: np.ndarray, title: str) -> None:
    vis_rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
    plt.figure(figsize=(8, 6))
    plt.imshow(vis_rgb)
    plt.title(title)
    plt.axis("off")
    plt.show()
