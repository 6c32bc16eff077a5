"""
Second-order IIR filtering for block-based step detection.

Two fixed biquad designs are used by the pipeline:
1. Smoothing filter: 2nd order low-pass, 3 Hz cut-off at 104 Hz
2. Derivative filter: 2nd order lead-lag, 4 Hz cut-off, approximates d/dt

Both run sample by sample in single precision so that results match the
embedded target bit for bit.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.signal import freqz


@dataclass(frozen=True)
class FilterCoefficients:
    """
    Direct-form biquad design.

    Y(n) = b0*X(n) + b1*X(n-1) + b2*X(n-2) - a1*Y(n-1) - a2*Y(n-2)

    Attributes:
        name: Short description used for display
        b0, b1, b2: Feed-forward coefficients
        a1, a2: Feedback coefficients (a0 is 1)
        cutoff_hz: Nominal design cut-off frequency
        settle_time: Seconds after which the filter output is considered settled
    """

    name: str
    b0: float
    b1: float
    b2: float
    a1: float
    a2: float
    cutoff_hz: float
    settle_time: float

    @property
    def numerator(self) -> np.ndarray:
        return np.array([self.b0, self.b1, self.b2], dtype=np.float64)

    @property
    def denominator(self) -> np.ndarray:
        return np.array([1.0, self.a1, self.a2], dtype=np.float64)


SMOOTHING_FILTER = FilterCoefficients(
    name='Low-pass',
    b0=7.2269463e-3,
    b1=1.4453893e-2,
    b2=7.2269463e-3,
    a1=-1.7455322,
    a2=0.77444003,
    cutoff_hz=3.0,
    settle_time=0.075,
)

DERIVATIVE_FILTER = FilterCoefficients(
    name='Lead-lag',
    b0=2.5369363,
    b1=0.0,
    b2=-2.5369363,
    a1=-1.6641912,
    a2=0.71297842,
    cutoff_hz=4.0,
    settle_time=0.06,
)


def settle_samples(fs: int, settle_time: float, max_samples: int = 20) -> int:
    """
    Number of samples a filter output lags its input by.

    Args:
        fs: Sampling rate in Hz
        settle_time: Settling time of the filter in seconds
        max_samples: Upper bound on the result

    Returns:
        int(fs * settle_time) + 1, capped at max_samples
    """
    samples = int(np.float32(fs) * np.float32(settle_time)) + 1
    return min(samples, max_samples)


class BiquadFilter:
    """
    Stateful second-order IIR filter processed one sample at a time.

    The output is computed from the history as it stood before the call, then
    the history is shifted. Non-finite inputs are not checked and will stay in
    the history for as long as the filter runs.
    """

    def __init__(self, coefficients: FilterCoefficients, fs: int = 104, max_tc_samples: int = 20):
        """
        Initialize the filter with zeroed history.

        Args:
            coefficients: Filter design
            fs: Sampling rate in Hz
            max_tc_samples: Cap on the settling delay in samples
        """
        self.coefficients = coefficients
        self.fs = fs

        self.b0 = np.float32(coefficients.b0)
        self.b1 = np.float32(coefficients.b1)
        self.b2 = np.float32(coefficients.b2)
        self.a1 = np.float32(coefficients.a1)
        self.a2 = np.float32(coefficients.a2)

        self.tc_samples = settle_samples(fs, coefficients.settle_time, max_tc_samples)
        self._reset_state()

    def _reset_state(self):
        """Zero the input and output history."""
        self.prev_in = np.float32(0.0)
        self.prev_prev_in = np.float32(0.0)
        self.prev_out = np.float32(0.0)
        self.prev_prev_out = np.float32(0.0)

    def filter_sample(self, sample: float) -> np.float32:
        """
        Filter a single sample.

        Args:
            sample: Input sample value

        Returns:
            Filtered sample value
        """
        x = np.float32(sample)
        y = (self.b0 * x) + (self.b1 * self.prev_in) + (self.b2 * self.prev_prev_in) \
            - (self.a1 * self.prev_out) - (self.a2 * self.prev_prev_out)

        self.prev_prev_in = self.prev_in
        self.prev_in = x
        self.prev_prev_out = self.prev_out
        self.prev_out = y

        return y

    def filter_batch(self, samples: Sequence[float]) -> np.ndarray:
        """
        Filter a batch of samples, maintaining state.

        Args:
            samples: Input samples in time order

        Returns:
            Array of filtered samples (float32)
        """
        return np.array([self.filter_sample(s) for s in samples], dtype=np.float32)

    def reset(self):
        """Reset filter state (only when starting a new stream)."""
        self._reset_state()

    def frequency_response(self, freqs: Sequence[float]) -> np.ndarray:
        """
        Magnitude response of the design at the given frequencies.

        Args:
            freqs: Frequencies in Hz

        Returns:
            Array of linear gains
        """
        _, h = freqz(
            self.coefficients.numerator,
            self.coefficients.denominator,
            worN=np.asarray(freqs, dtype=np.float64),
            fs=self.fs,
        )
        return np.abs(h)

    def gain_at(self, freq_hz: float) -> float:
        """Linear gain of the design at a single frequency."""
        return float(self.frequency_response([freq_hz])[0])

    def get_info(self, freq_hz: Optional[float] = None) -> dict:
        """
        Get filter information for display.

        Args:
            freq_hz: Optional frequency at which to report the gain

        Returns:
            Dictionary with filter details
        """
        info = {
            'type': self.coefficients.name,
            'cutoff': f'{self.coefficients.cutoff_hz:.1f} Hz',
            'delay': self.tc_samples,
            'description': (
                f'2nd order {self.coefficients.name.lower()} @ '
                f'{self.coefficients.cutoff_hz:.1f} Hz, {self.tc_samples} sample delay'
            ),
        }
        if freq_hz is not None:
            info['gain'] = self.gain_at(freq_hz)
        return info
