import logging
import math
from typing import Optional

from .config import DEFAULT_CONFIG, VisionConfig
from .types import BoundingPair, Estimate

logger = logging.getLogger(__name__)


def horizontal_center(bounding: BoundingPair) -> float:
    return (bounding.left + bounding.right) / 2.0


def distance_from_height(pixel_height: float, config: VisionConfig = DEFAULT_CONFIG) -> Optional[float]:
    """
    Pinhole estimate of the distance to a target spanning `pixel_height` rows.

    target_height / pixel_height is the same ratio as view_height / image_height,
    which gives the height of the full view at the target in inches. Half of it
    and half the vertical FOV form a right triangle whose adjacent side is the
    distance.
    """
    if pixel_height <= 0:
        return None
    view_height = config.target_height_in * config.image_height / pixel_height
    distance = 0.5 * view_height / math.tan(math.radians(config.camera_fov_vert_deg / 2.0))
    if not math.isfinite(distance):
        return None
    return distance


def resolve_target(bounding: BoundingPair, config: VisionConfig = DEFAULT_CONFIG) -> Optional[Estimate]:
    distance = distance_from_height(bounding.bottom - bounding.top, config)
    if distance is None:
        logger.debug(f"Zero-height bounding box {bounding}, nothing to resolve")
        return None
    return Estimate(center_x=horizontal_center(bounding), distance=distance)
