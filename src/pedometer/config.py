"""Configuration settings for the step detection pipeline and replay viewer."""

from pathlib import Path
from dataclasses import dataclass, field

import numpy as np


@dataclass
class AlgoConfig:
    """Configuration for step detection and motion classification."""

    SAMPLING_RATE: int = 104  # Hz
    BUFF_FACTOR: int = 2  # Window holds SAMPLING_RATE // BUFF_FACTOR samples
    MAX_TC_SAMPLES: int = 20  # Cap on filter settling delay (samples)
    EPSILON: float = 1e-6

    # Peak detection parameters
    NO_DETECT_DUR_SEC: float = 0.2  # Debounce between extrema of the same kind
    CLOSE_TO_ZERO: float = 1.5  # Minimum extremum height and max/min swing (m/s^2)
    MAX_TIME_PERIOD_SEC: float = 1.5  # Maximum duration of one step

    # Classification thresholds
    SMALL_AMP: float = 5.0  # m/s^2
    LARGE_AMP: float = 15.0  # m/s^2
    SLOW_FREQ: float = 0.5  # Hz
    FAST_FREQ: float = 2.2  # Hz

    # Input trace layout
    SKIP_LINES: int = 2

    @property
    def sample_interval(self) -> np.float32:
        """Seconds between samples, in single precision like the sensor clock."""
        return np.float32(1.0) / np.float32(self.SAMPLING_RATE)

    @property
    def window_size(self) -> int:
        return self.SAMPLING_RATE // self.BUFF_FACTOR

    @property
    def hold_limit(self) -> int:
        """Windows an estimate may be held before it decays to zero."""
        return self.BUFF_FACTOR

    def validate(self):
        """
        Check the configuration for values the pipeline cannot run with.

        Raises:
            ValueError: If a rate, size or threshold is out of range
        """
        if self.SAMPLING_RATE <= 0:
            raise ValueError(f"Sampling rate must be positive, got {self.SAMPLING_RATE}")
        if self.BUFF_FACTOR < 1:
            raise ValueError(f"Buffer factor must be >= 1, got {self.BUFF_FACTOR}")
        if self.MAX_TC_SAMPLES < 1:
            raise ValueError(f"MAX_TC_SAMPLES must be >= 1, got {self.MAX_TC_SAMPLES}")
        if self.window_size <= self.MAX_TC_SAMPLES:
            raise ValueError(
                f"Window of {self.window_size} samples is too short for a "
                f"settling delay of up to {self.MAX_TC_SAMPLES} samples"
            )
        if self.SMALL_AMP >= self.LARGE_AMP:
            raise ValueError(
                f"SMALL_AMP ({self.SMALL_AMP}) must be below LARGE_AMP ({self.LARGE_AMP})"
            )
        if self.SLOW_FREQ >= self.FAST_FREQ:
            raise ValueError(
                f"SLOW_FREQ ({self.SLOW_FREQ}) must be below FAST_FREQ ({self.FAST_FREQ})"
            )


@dataclass
class UIConfig:
    """Configuration for the replay viewer."""

    DATA_DIR: Path = Path("data/traces")
    UPDATE_INTERVAL: int = 52  # Redraw once per completed window
    DOWNSAMPLE_FACTOR: int = 2  # Display every Nth point
    DISPLAY_SECONDS: float = 10.0  # Width of the scrolling chart
    DEFAULT_SPEED: float = 4.0  # Playback speed multiplier (1 = real-time)
    CHART_HEIGHT: int = 420
    CHART_LINE_WIDTH: float = 1.5
    CHART_MARGIN: dict = field(default_factory=lambda: dict(l=50, r=20, t=40, b=50))
    CHART_COLORS: dict = field(default_factory=lambda: {
        'signal': '#2a9d8f',   # Teal
        'max': '#d68032',      # Orange
        'min': '#264653',      # Dark slate
    })
    MOTION_COLORS: dict = field(default_factory=lambda: {
        'STATIONARY': 'rgba(200, 200, 200, 0.15)',
        'WALKING': 'rgba(42, 157, 143, 0.12)',
        'HOPPING': 'rgba(233, 196, 106, 0.20)',
        'RUNNING': 'rgba(231, 111, 81, 0.15)',
    })
