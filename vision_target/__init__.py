"""Top-level package interface for vision_target.

Expose the main API: per-frame processing, the published estimate and the worker.
"""
from .config import VisionConfig  # re-export
from .core import find_target, process_frame
from .estimate import TargetEstimate
from .worker import FrameWorker

__all__ = ["VisionConfig", "find_target", "process_frame", "TargetEstimate", "FrameWorker"]
