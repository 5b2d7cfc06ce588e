"""Pairwise scoring of candidate rects against the two-strip target.

Every sub-score turns one geometric expectation into a ratio that is 1.0 for
a perfect match and maps it through a triangular function onto [0, 100].
"""
import logging
import math
from functools import reduce
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_CONFIG, VisionConfig
from .geometry import bounding_pair
from .types import BoundingPair, Rect, ScoredPair, SubScores

logger = logging.getLogger(__name__)


def ratio_to_score(ratio: float) -> float:
    """
    Piecewise linear from (0, 0) to (1, 100) to (2, 0); 0 outside [0, 2].
    Non-finite ratios (from degenerate geometry) score 0.
    """
    if not math.isfinite(ratio):
        return 0.0
    return max(0.0, min(100.0 * (1.0 - abs(1.0 - ratio)), 100.0))


def _div(num: float, den: float) -> float:
    if den == 0:
        return math.nan
    return num / den


# The bounding box around both strips should be about twice as tall as wide
def bounding_ratio_score(rect1: Rect, rect2: Rect, bounding: Optional[BoundingPair] = None) -> float:
    b = bounding or bounding_pair(rect1, rect2)
    return ratio_to_score(_div(b.height, 2 * b.width))


# Either strip should be about 1/4 of the total bounding width
def contour_width_score(rect1: Rect, rect2: Rect, bounding: Optional[BoundingPair] = None) -> float:
    b = bounding or bounding_pair(rect1, rect2)
    return ratio_to_score(_div(rect1.width * 4, b.width))


# Top edges should be level. The scaled difference is ideally 0, so shift by 1
def top_edge_score(rect1: Rect, rect2: Rect, bounding: Optional[BoundingPair] = None) -> float:
    b = bounding or bounding_pair(rect1, rect2)
    return ratio_to_score(1 + _div(rect1.top - rect2.top, b.height))


# Left edges should be 3/4 of the target width apart
def left_spacing_score(rect1: Rect, rect2: Rect, bounding: Optional[BoundingPair] = None) -> float:
    b = bounding or bounding_pair(rect1, rect2)
    return ratio_to_score(_div(abs(rect2.left - rect1.left) * 3, 4 * b.width))


def width_ratio_score(rect1: Rect, rect2: Rect) -> float:
    return ratio_to_score(_div(rect1.width, rect2.width))


def height_ratio_score(rect1: Rect, rect2: Rect) -> float:
    return ratio_to_score(_div(rect1.height, rect2.height))


def compute_subscores(rect1: Rect, rect2: Rect) -> SubScores:
    if rect1.is_degenerate or rect2.is_degenerate:
        logger.debug(f"Degenerate rect in pair {rect1} / {rect2}, scoring 0")
        return SubScores()

    b = bounding_pair(rect1, rect2)
    if b.width <= 0 or b.height <= 0:
        logger.debug(f"Degenerate bounding box {b}, scoring 0")
        return SubScores()

    return SubScores(
        bounding_ratio=bounding_ratio_score(rect1, rect2, b),
        contour_width=contour_width_score(rect1, rect2, b),
        top_edge=top_edge_score(rect1, rect2, b),
        left_spacing=left_spacing_score(rect1, rect2, b),
        width_ratio=width_ratio_score(rect1, rect2),
        height_ratio=height_ratio_score(rect1, rect2),
    )


def score_pair(rect1: Rect, rect2: Rect, index1: Optional[int] = None, index2: Optional[int] = None) -> ScoredPair:
    return ScoredPair(
        rect1=rect1,
        rect2=rect2,
        scores=compute_subscores(rect1, rect2),
        index1=index1,
        index2=index2,
    )


def is_selectable(pair: ScoredPair, config: VisionConfig = DEFAULT_CONFIG) -> bool:
    if not pair.total > config.score_threshold:
        return False
    if config.min_subscore > 0 and pair.scores.minimum < config.min_subscore:
        return False
    return True


Best = Tuple[float, Optional[ScoredPair]]


def select_best(pairs: Iterable[ScoredPair], config: VisionConfig = DEFAULT_CONFIG) -> Optional[ScoredPair]:
    """
    Fold over scored pairs carrying (best_score, best_pair).

    A pair takes over only when it strictly beats the carried score and
    clears the threshold, so on an exact tie the first pair seen wins.
    """
    def step(best: Best, pair: ScoredPair) -> Best:
        best_score, _ = best
        if pair.total > best_score and is_selectable(pair, config):
            return pair.total, pair
        return best

    _, winner = reduce(step, pairs, (0.0, None))
    return winner
