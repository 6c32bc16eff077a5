"""Hold-and-decay smoothing of per-window amplitude and frequency estimates."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .config import AlgoConfig
from .peak_detector import WindowResult


@dataclass
class EstimateHoldState:
    """Last reported estimates and how many windows each has been held."""

    amplitude: np.float32 = np.float32(0.0)
    frequency: np.float32 = np.float32(0.0)
    amplitude_hold: int = 0
    frequency_hold: int = 0


class EstimateSmoother:
    """
    Carries estimates across windows without fresh detections.

    A window with no accepted minimum reuses the previous amplitude; a window
    whose mean period is not above EPSILON reuses the previous frequency.
    Each estimate may be held for `hold_limit` consecutive windows, after
    which it decays to zero and its counter starts again.
    """

    def __init__(self, config: AlgoConfig):
        self.epsilon = config.EPSILON
        self.hold_limit = config.hold_limit
        self.state = EstimateHoldState()

    def reset(self):
        self.state = EstimateHoldState()

    def update(self, result: WindowResult) -> Tuple[np.float32, np.float32]:
        """
        Produce the smoothed estimates for a window.

        Args:
            result: Output of PeakDetector.process_window

        Returns:
            Tuple of (amplitude, frequency)
        """
        state = self.state

        amplitude = result.raw_amplitude
        if amplitude is not None:
            state.amplitude_hold = 0
        else:
            amplitude = state.amplitude
            state.amplitude_hold += 1
        if state.amplitude_hold > self.hold_limit:
            state.amplitude_hold = 0
            amplitude = np.float32(0.0)

        period = result.average_period
        if float(period) > self.epsilon:
            frequency = np.float32(1.0) / period
            state.frequency_hold = 0
        else:
            frequency = state.frequency
            state.frequency_hold += 1
        if state.frequency_hold > self.hold_limit:
            state.frequency_hold = 0
            frequency = np.float32(0.0)

        state.amplitude = amplitude
        state.frequency = frequency
        return amplitude, frequency
