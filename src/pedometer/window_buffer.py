"""Fixed-size sample windows and the accumulator that fills them."""

from typing import Tuple

import numpy as np

from .signal_filters import BiquadFilter


class SampleWindow:
    """
    Fixed-capacity ordered buffer of (smoothed value, timestamp) pairs.

    Storage is preallocated float32 so a full window is handed over without
    copying; reads and writes outside the filled range raise IndexError.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Window capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.values = np.zeros(capacity, dtype=np.float32)
        self.times = np.zeros(capacity, dtype=np.float32)
        self.count = 0

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, idx: int) -> Tuple[np.float32, np.float32]:
        if not 0 <= idx < self.count:
            raise IndexError(f"Window index {idx} out of range (0..{self.count - 1})")
        return self.values[idx], self.times[idx]

    @property
    def is_full(self) -> bool:
        return self.count == self.capacity

    def push(self, value: float, timestamp: float):
        """
        Append a sample.

        Raises:
            IndexError: If the window is already full
        """
        if self.is_full:
            raise IndexError(f"Window is full ({self.capacity} samples)")
        self.values[self.count] = value
        self.times[self.count] = timestamp
        self.count += 1

    def tail(self, n: int) -> Tuple[np.ndarray, np.ndarray]:
        """Copies of the last n (values, timestamps) of a full window."""
        if not 0 <= n <= self.count:
            raise IndexError(f"Cannot take {n} samples from a window of {self.count}")
        return self.values[self.count - n:self.count].copy(), self.times[self.count - n:self.count].copy()

    def clear(self):
        """Logically empty the window; storage is reused."""
        self.count = 0

    @classmethod
    def from_arrays(cls, values, times) -> 'SampleWindow':
        """Build a full window from existing smoothed values and timestamps."""
        values = np.asarray(values, dtype=np.float32)
        times = np.asarray(times, dtype=np.float32)
        if len(values) != len(times):
            raise ValueError("values and times must have the same length")
        window = cls(len(values))
        for value, timestamp in zip(values, times):
            window.push(value, timestamp)
        return window


class ExtendedBuffer:
    """
    Window samples preceded by the last `prefix_len` samples of the previous
    window.

    The derivative filter output lags the smoothed signal by `prefix_len`
    samples, so entry i of this buffer is the smoothed sample that lines up
    with derivative sample i of the current window.
    """

    def __init__(self, prefix_len: int, capacity: int):
        if prefix_len > capacity:
            raise ValueError(
                f"Prefix of {prefix_len} samples does not fit a window of {capacity}"
            )
        self.prefix_len = prefix_len
        self.capacity = capacity
        self.values = np.zeros(prefix_len + capacity, dtype=np.float32)
        self.times = np.zeros(prefix_len + capacity, dtype=np.float32)

    def load(self, window: SampleWindow):
        """Place a full window after the carried-over prefix."""
        if not window.is_full or window.capacity != self.capacity:
            raise ValueError(
                f"Expected a full window of {self.capacity} samples, got {len(window)}"
            )
        self.values[self.prefix_len:] = window.values
        self.times[self.prefix_len:] = window.times

    def carry_tail(self, window: SampleWindow):
        """Seed the prefix for the next window with this window's last samples."""
        values, times = window.tail(self.prefix_len)
        self.values[:self.prefix_len] = values
        self.times[:self.prefix_len] = times

    def __getitem__(self, idx: int) -> Tuple[np.float32, np.float32]:
        return self.values[idx], self.times[idx]


class WindowAccumulator:
    """Smooths raw samples and collects them into fixed-size windows."""

    def __init__(self, smoothing_filter: BiquadFilter, capacity: int):
        """
        Initialize the accumulator.

        Args:
            smoothing_filter: Low-pass filter applied to every raw sample
            capacity: Samples per window
        """
        self.smoothing_filter = smoothing_filter
        self.window = SampleWindow(capacity)

    def push(self, raw_sample: float, timestamp: float) -> bool:
        """
        Smooth and store one sample.

        Args:
            raw_sample: Raw vertical acceleration
            timestamp: Sample time in seconds

        Returns:
            True when the window has just become full
        """
        smoothed = self.smoothing_filter.filter_sample(raw_sample)
        self.window.push(smoothed, timestamp)
        return self.window.is_full

    def clear(self):
        self.window.clear()
