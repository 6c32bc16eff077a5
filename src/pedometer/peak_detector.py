"""Window-based detection of alternating maxima and minima of vertical acceleration."""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

import numpy as np

from .config import AlgoConfig
from .signal_filters import BiquadFilter
from .window_buffer import ExtendedBuffer, SampleWindow

logger = logging.getLogger(__name__)


@dataclass
class PeakState:
    """
    Last accepted maximum and minimum of the smoothed signal.

    The detector looks for a maximum while max_time <= min_time and for a
    minimum otherwise, so accepted extrema always alternate.
    """

    max_value: np.float32 = np.float32(0.0)
    max_time: np.float32 = np.float32(0.0)
    min_value: np.float32 = np.float32(0.0)
    min_time: np.float32 = np.float32(0.0)

    @property
    def seeking_max(self) -> bool:
        return bool(self.max_time <= self.min_time)

    def copy(self) -> 'PeakState':
        return replace(self)


@dataclass(frozen=True)
class PeakEvent:
    """An accepted extremum: kind is 'max' or 'min'."""

    kind: str
    value: float
    time: float


@dataclass
class WindowResult:
    """Detections and raw accumulators from a single window."""

    peaks: PeakState
    max_count: int = 0
    min_count: int = 0
    amplitude_sum: np.float32 = np.float32(0.0)
    period_sum: np.float32 = np.float32(0.0)
    max_value_sum: np.float32 = np.float32(0.0)
    events: List[PeakEvent] = field(default_factory=list)

    @property
    def step_count(self) -> int:
        """Completed max -> min pairs in this window."""
        return self.min_count

    @property
    def raw_amplitude(self) -> Optional[np.float32]:
        """Mean max-to-min swing, or None when no minimum was accepted."""
        if self.min_count == 0:
            return None
        return self.amplitude_sum / np.float32(self.min_count)

    @property
    def average_period(self) -> np.float32:
        """Mean inferred period over all accepted extrema (0 when none)."""
        detections = self.max_count + self.min_count
        if detections == 0:
            return self.period_sum
        return self.period_sum / np.float32(detections)


class PeakDetector:
    """
    Finds local maxima and minima of the smoothed signal one window at a time.

    Extrema are located at zero-crossings of the derivative filter output:
    a falling crossing marks a maximum and a rising crossing a minimum. The
    derivative lags the smoothed signal by `tc_samples`, so values and times
    are read from an extended buffer that starts with the tail of the
    previous window. Filter history, that tail and the last derivative sample
    all persist between windows.
    """

    def __init__(self, config: AlgoConfig, derivative_filter: BiquadFilter):
        """
        Initialize the detector.

        Args:
            config: Algorithm configuration
            derivative_filter: Lead-lag filter used to differentiate the window
        """
        self.config = config
        self.derivative_filter = derivative_filter
        self.tc_samples = derivative_filter.tc_samples
        self.window_size = config.window_size

        self.epsilon = config.EPSILON
        self.close_to_zero = config.CLOSE_TO_ZERO
        self.no_detect_dur = np.float32(config.NO_DETECT_DUR_SEC)
        self.max_period = np.float32(config.MAX_TIME_PERIOD_SEC)

        self.buffer = ExtendedBuffer(self.tc_samples, self.window_size)
        self.prev_derivative = np.float32(0.0)

    def reset(self):
        """Reset all internal state, including the derivative filter."""
        self.derivative_filter.reset()
        self.buffer = ExtendedBuffer(self.tc_samples, self.window_size)
        self.prev_derivative = np.float32(0.0)

    def process_window(self, window: SampleWindow, peaks: PeakState) -> WindowResult:
        """
        Search a full window for new extrema.

        Args:
            window: Full window of smoothed samples
            peaks: Peak state left by the previous window (not modified)

        Returns:
            WindowResult holding the updated peak state and accumulators
        """
        derivative = self.derivative_filter.filter_batch(window.values[:len(window)])
        self.buffer.load(window)

        prev_max_val, prev_max_ts = peaks.max_value, peaks.max_time
        prev_min_val, prev_min_ts = peaks.min_value, peaks.min_time

        amplitude_sum = np.float32(0.0)
        period_sum = np.float32(0.0)
        max_value_sum = np.float32(0.0)
        max_count = 0
        min_count = 0
        events = []

        prev_der = self.prev_derivative
        for i in range(self.window_size):
            if i >= 1:
                prev_der = derivative[i - 1]
            der = float(derivative[i])
            value, ts = self.buffer[i]

            if prev_max_ts <= prev_min_ts:
                # Falling zero-crossing: next maximum
                if der < -self.epsilon and float(prev_der) >= 0.0:
                    if ts - prev_max_ts > self.no_detect_dur and abs(float(value)) > self.close_to_zero:
                        # Bound the period a long pause can contribute
                        if ts > prev_max_ts + self.max_period:
                            prev_max_ts = ts - self.max_period
                        if float(value - prev_min_val) > self.close_to_zero:
                            period_sum = period_sum + (ts - prev_max_ts)
                            max_value_sum = max_value_sum + value
                            max_count += 1
                            prev_max_ts = ts
                            prev_max_val = value
                            events.append(PeakEvent('max', float(value), float(ts)))
            else:
                # Rising zero-crossing: next minimum
                if der > self.epsilon and float(prev_der) <= 0.0:
                    if ts - prev_min_ts > self.no_detect_dur:
                        if ts > prev_min_ts + self.max_period:
                            prev_min_ts = ts - self.max_period
                        swing = prev_max_val - value
                        if float(swing) > self.close_to_zero:
                            period_sum = period_sum + (ts - prev_min_ts)
                            amplitude_sum = amplitude_sum + swing
                            min_count += 1
                            prev_min_ts = ts
                            prev_min_val = value
                            events.append(PeakEvent('min', float(value), float(ts)))

        self.buffer.carry_tail(window)
        self.prev_derivative = derivative[-1]

        result = WindowResult(
            peaks=PeakState(prev_max_val, prev_max_ts, prev_min_val, prev_min_ts),
            max_count=max_count,
            min_count=min_count,
            amplitude_sum=amplitude_sum,
            period_sum=period_sum,
            max_value_sum=max_value_sum,
            events=events,
        )
        logger.debug(
            "Window ending %.3fs: %d max, %d min",
            float(window.times[len(window) - 1]), max_count, min_count
        )
        return result
