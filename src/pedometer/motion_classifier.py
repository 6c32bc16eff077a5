"""Threshold classification of motion type from amplitude and frequency estimates."""

from enum import Enum
from typing import Dict

from .config import AlgoConfig


class MotionType(Enum):
    """Motion categories; values are the numbers written to output traces."""

    STATIONARY = 0
    WALK = 1
    HOP = 2
    RUN = 3


MOTION_LABELS: Dict[MotionType, str] = {
    MotionType.STATIONARY: 'STATIONARY',
    MotionType.WALK: 'WALKING',
    MotionType.HOP: 'HOPPING',
    MotionType.RUN: 'RUNNING',
}


def classify(amplitude: float, frequency: float, config: AlgoConfig = None) -> MotionType:
    """
    Map an (amplitude, frequency) estimate to a motion type.

    Small swings are stationary or walking depending on step rate, large
    swings are running or hopping, and medium swings are running when fast
    and walking otherwise.

    Args:
        amplitude: Smoothed max-to-min swing (m/s^2)
        frequency: Smoothed extremum rate (Hz)
        config: Thresholds; defaults to AlgoConfig()

    Returns:
        MotionType for the window
    """
    config = config or AlgoConfig()

    if amplitude <= config.SMALL_AMP:
        if frequency <= config.SLOW_FREQ:
            return MotionType.STATIONARY
        return MotionType.WALK
    if amplitude >= config.LARGE_AMP:
        if frequency >= config.FAST_FREQ:
            return MotionType.RUN
        return MotionType.HOP
    if frequency >= config.FAST_FREQ:
        return MotionType.RUN
    return MotionType.WALK


class MotionClassifier:
    """
    Classifies each window and keeps per-category step counters.

    Steps in a stationary window are not added to any category, so the sum of
    the counters can fall below the pipeline's overall step count.
    """

    def __init__(self, config: AlgoConfig):
        self.config = config
        self.steps_by_type = self._init_counters()

    @staticmethod
    def _init_counters() -> Dict[MotionType, int]:
        return {MotionType.WALK: 0, MotionType.RUN: 0, MotionType.HOP: 0}

    def reset(self):
        self.steps_by_type = self._init_counters()

    def update(self, amplitude: float, frequency: float, steps: int) -> MotionType:
        """
        Classify a window and credit its steps to the resulting category.

        Args:
            amplitude: Smoothed amplitude estimate
            frequency: Smoothed frequency estimate
            steps: Step pairs completed in the window

        Returns:
            MotionType for the window
        """
        motion = classify(amplitude, frequency, self.config)
        if motion in self.steps_by_type:
            self.steps_by_type[motion] += steps
        return motion

    @property
    def labelled_total(self) -> int:
        """Sum of the walk, run and hop counters."""
        return sum(self.steps_by_type.values())
