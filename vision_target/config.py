from dataclasses import dataclass, fields
from typing import Any, Mapping

IMG_WIDTH = 320
IMG_HEIGHT = 240
TARGET_HEIGHT_IN = 15.3       # height of the two-strip target, inches
CAMERA_FOV_VERT_DEG = 41.0    # vertical FOV of the MS LifeCam, degrees

# "average" sub-score of 75 needed to be seen as a target
SCORE_THRESHOLD = 75 * 6
# lowest sub-score a pair may have; 0 disables the check (15 is a sane value)
MIN_SUBSCORE = 0.0

MAX_TOTAL_SCORE = 600.0
MAX_SUBSCORE = 100.0


@dataclass(frozen=True)
class VisionConfig:
    image_width: int = IMG_WIDTH
    image_height: int = IMG_HEIGHT
    target_height_in: float = TARGET_HEIGHT_IN
    camera_fov_vert_deg: float = CAMERA_FOV_VERT_DEG
    score_threshold: float = SCORE_THRESHOLD
    min_subscore: float = MIN_SUBSCORE

    def __post_init__(self) -> None:
        if self.image_width <= 0 or self.image_height <= 0:
            raise ValueError(
                f"Image size must be positive, got {self.image_width}x{self.image_height}"
            )
        if self.target_height_in <= 0:
            raise ValueError(f"Target height must be positive, got {self.target_height_in}")
        if not (0.0 < self.camera_fov_vert_deg < 180.0):
            raise ValueError(
                f"Vertical FOV must be in (0, 180) degrees, got {self.camera_fov_vert_deg}"
            )
        if not (0.0 <= self.score_threshold <= MAX_TOTAL_SCORE):
            raise ValueError(
                f"Score threshold must be in [0, {MAX_TOTAL_SCORE:g}], got {self.score_threshold}"
            )
        if not (0.0 <= self.min_subscore <= MAX_SUBSCORE):
            raise ValueError(
                f"Minimum sub-score must be in [0, {MAX_SUBSCORE:g}], got {self.min_subscore}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VisionConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))


DEFAULT_CONFIG = VisionConfig()
