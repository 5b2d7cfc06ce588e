import logging
from typing import Any, Dict, Optional, Sequence

from .config import DEFAULT_CONFIG, VisionConfig
from .estimate import TargetEstimate
from .geometry import bounding_pair, enumerate_pairs, rects_from_contours
from .resolve import resolve_target
from .scoring import score_pair, select_best
from .types import Estimate, Rect, ScoredPair

logger = logging.getLogger(__name__)


def find_target(rects: Sequence[Rect], config: VisionConfig = DEFAULT_CONFIG) -> Optional[ScoredPair]:
    """Best-scoring pair of rects that clears the threshold, or None."""
    if len(rects) < 2:
        logger.debug(f"{len(rects)} candidate(s), need at least 2 for a target")
        return None

    scored = (score_pair(rects[i], rects[j], i, j) for i, j in enumerate_pairs(len(rects)))
    best = select_best(scored, config)

    if best is None:
        logger.debug(f"No pair of {len(rects)} candidates cleared {config.score_threshold:g}")
    else:
        logger.debug(f"Target pair ({best.index1}, {best.index2}) score={best.total:.1f}")
    return best


def process_frame(
        contours: Sequence[Any],
        estimate: TargetEstimate,
        config: VisionConfig = DEFAULT_CONFIG,
    ) -> Optional[Estimate]:
    """
    Run one frame's contours through scoring and publish the result.

    Returns the published estimate, or None when the frame has no target; in
    that case the previous estimate is left as it was.
    """
    result = analyze_frame(contours, config)
    if result["estimate"] is None:
        return None
    value = result["estimate"]
    return estimate.publish(value.center_x, value.distance)


def analyze_frame(contours: Sequence[Any], config: VisionConfig = DEFAULT_CONFIG) -> Dict[str, Any]:
    """Score a frame without publishing. Returns the rects, the winner and its estimate."""
    rects = rects_from_contours(contours)
    pair = find_target(rects, config)

    value = None
    if pair is not None:
        value = resolve_target(bounding_pair(pair.rect1, pair.rect2), config)

    return {"rects": rects, "pair": pair, "estimate": value}
