from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_xywh(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class BoundingPair:
    top: float
    bottom: float
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class SubScores:
    bounding_ratio: float = 0.0
    contour_width: float = 0.0
    top_edge: float = 0.0
    left_spacing: float = 0.0
    width_ratio: float = 0.0
    height_ratio: float = 0.0

    def as_tuple(self) -> Tuple[float, ...]:
        return (
            self.bounding_ratio,
            self.contour_width,
            self.top_edge,
            self.left_spacing,
            self.width_ratio,
            self.height_ratio,
        )

    @property
    def total(self) -> float:
        return float(sum(self.as_tuple()))

    @property
    def minimum(self) -> float:
        return float(min(self.as_tuple()))


@dataclass(frozen=True)
class ScoredPair:
    rect1: Rect
    rect2: Rect
    scores: SubScores = field(default_factory=SubScores)
    index1: Optional[int] = None     # position of rect1 in the frame
    index2: Optional[int] = None

    @property
    def total(self) -> float:
        return self.scores.total


@dataclass(frozen=True)
class Estimate:
    center_x: float
    distance: float

    @classmethod
    def empty(cls) -> "Estimate":
        return cls(0.0, 0.0)

    @property
    def is_empty(self) -> bool:
        # a published distance is always > 0, so (0, 0) means "never seen a target"
        return self.center_x == 0.0 and self.distance == 0.0
