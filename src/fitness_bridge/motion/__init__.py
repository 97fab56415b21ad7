"""Accelerometer motion classification."""

from .activity_classifier import ActivityClassifier
from .channel import AccelerometerChannel
from .fall_detector import FallDetector
from .processor import MotionProcessor
from .smoother import MagnitudeSmoother, vector_magnitude
from .source import AccelerometerSource
from .state import MotionState
from .step_detector import StepDetector

__all__ = [
    "AccelerometerChannel",
    "AccelerometerSource",
    "ActivityClassifier",
    "FallDetector",
    "MagnitudeSmoother",
    "MotionProcessor",
    "MotionState",
    "StepDetector",
    "vector_magnitude",
]
