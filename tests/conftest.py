"""Shared fixtures and synthetic signal helpers."""

import numpy as np
import pytest

from pedometer import AlgoConfig, SampleWindow


GRAVITY = 9.81


def sine_samples(peak: float, freq: float, seconds: float, fs: int = 104, offset: float = GRAVITY) -> np.ndarray:
    """Raw vertical acceleration: gravity plus a sinusoid of the given peak and frequency."""
    n = int(round(seconds * fs))
    t = (np.arange(n) + 1) / fs
    return (offset + peak * np.sin(2 * np.pi * freq * t)).astype(np.float32)


class ScriptedDerivative:
    """Stand-in for the derivative filter that replays preset derivative windows."""

    def __init__(self, windows, tc_samples: int = 0):
        self.windows = [np.asarray(w, dtype=np.float32) for w in windows]
        self.tc_samples = tc_samples
        self.calls = 0

    def filter_batch(self, samples):
        result = self.windows[self.calls]
        self.calls += 1
        return result

    def reset(self):
        self.calls = 0


def derivative_pattern(crossings, size: int = 52, start_sign: float = 1.0) -> np.ndarray:
    """Derivative that flips sign at each index in `crossings`."""
    der = np.empty(size, dtype=np.float32)
    sign = start_sign
    bounds = [0] + list(crossings) + [size]
    for lo, hi in zip(bounds[:-1], bounds[1:]):
        der[lo:hi] = sign
        sign = -sign
    return der


def make_window(values: dict, start_time: float, size: int = 52, fill: float = 5.0,
                fs: int = 104) -> SampleWindow:
    """Window of `fill` values with the given {index: value} overrides."""
    data = np.full(size, fill, dtype=np.float32)
    for idx, value in values.items():
        data[idx] = value
    times = np.float32(start_time) + (np.arange(size, dtype=np.float32) + 1) / np.float32(fs)
    return SampleWindow.from_arrays(data, times)


@pytest.fixture
def config():
    return AlgoConfig()
