"""Core streaming logic: raw samples in, step count and motion type out."""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

import numpy as np

from .config import AlgoConfig
from .estimate_smoother import EstimateSmoother
from .motion_classifier import MOTION_LABELS, MotionClassifier, MotionType
from .peak_detector import PeakDetector, PeakEvent, PeakState
from .signal_filters import BiquadFilter, DERIVATIVE_FILTER, SMOOTHING_FILTER
from .window_buffer import SampleWindow, WindowAccumulator

logger = logging.getLogger(__name__)


@dataclass
class AlgoOutput:
    """Externally visible result, updated once per completed window."""

    step_count: int = 0
    motion_type: MotionType = MotionType.STATIONARY
    peaks: PeakState = field(default_factory=PeakState)

    @property
    def label(self) -> str:
        return MOTION_LABELS[self.motion_type]

    def snapshot(self) -> 'AlgoOutput':
        """Independent copy safe to hand to a consumer."""
        return replace(self, peaks=self.peaks.copy())


@dataclass(frozen=True)
class WindowRecord:
    """Per-window estimates kept for display."""

    end_time: float
    amplitude: float
    frequency: float
    motion_type: MotionType
    steps: int


@dataclass(frozen=True)
class RunSummary:
    """End-of-run totals."""

    duration: float
    total_steps: int
    walk_steps: int
    run_steps: int
    hop_steps: int

    @property
    def labelled_steps(self) -> int:
        """Steps credited to a motion category (stationary windows excluded)."""
        return self.walk_steps + self.run_steps + self.hop_steps


class StepCounterPipeline:
    """
    Owns every piece of persistent state of the step detection algorithm.

    Samples must be delivered in time order. Results only change when a
    window completes; between windows process_sample returns the output of
    the last completed window.
    """

    def __init__(self, config: Optional[AlgoConfig] = None):
        """
        Initialize the pipeline.

        Args:
            config: Algorithm configuration; defaults to AlgoConfig()

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or AlgoConfig()
        self.config.validate()

        self.smoothing_filter = BiquadFilter(
            SMOOTHING_FILTER, self.config.SAMPLING_RATE, self.config.MAX_TC_SAMPLES
        )
        self.derivative_filter = BiquadFilter(
            DERIVATIVE_FILTER, self.config.SAMPLING_RATE, self.config.MAX_TC_SAMPLES
        )
        self.accumulator = WindowAccumulator(self.smoothing_filter, self.config.window_size)
        self.detector = PeakDetector(self.config, self.derivative_filter)
        self.smoother = EstimateSmoother(self.config)
        self.classifier = MotionClassifier(self.config)

        self.sample_interval = self.config.sample_interval
        self._init_run_state()

    def _init_run_state(self):
        self.timestamp = np.float32(0.0)
        self.sample_idx = 0
        self.output = AlgoOutput()
        self.events: List[PeakEvent] = []
        self.window_history: List[WindowRecord] = []

    def reset(self):
        """Return to start-up state (new stream)."""
        self.smoothing_filter.reset()
        self.detector.reset()
        self.accumulator.clear()
        self.smoother.reset()
        self.classifier.reset()
        self._init_run_state()

    def process_sample(self, raw_y: float) -> AlgoOutput:
        """
        Feed one vertical acceleration sample.

        Args:
            raw_y: Raw Y-axis acceleration (m/s^2)

        Returns:
            Snapshot of the current output
        """
        self.timestamp = np.float32(self.timestamp + self.sample_interval)
        self.sample_idx += 1

        if self.accumulator.push(raw_y, self.timestamp):
            self.process_window(self.accumulator.window)
            self.accumulator.clear()

        return self.output.snapshot()

    def process_window(self, window: SampleWindow) -> AlgoOutput:
        """
        Run detection, smoothing and classification over one full window.

        Args:
            window: Full window of smoothed samples

        Returns:
            Snapshot of the updated output
        """
        result = self.detector.process_window(window, self.output.peaks)
        amplitude, frequency = self.smoother.update(result)
        motion = self.classifier.update(amplitude, frequency, result.step_count)

        self.output.peaks = result.peaks
        self.output.step_count += result.step_count
        self.output.motion_type = motion

        self.events.extend(result.events)
        end_time = float(window.times[len(window) - 1])
        self.window_history.append(WindowRecord(
            end_time=end_time,
            amplitude=float(amplitude),
            frequency=float(frequency),
            motion_type=motion,
            steps=result.step_count,
        ))
        logger.debug(
            "t=%.3fs amp=%.3f freq=%.3f -> %s (+%d steps, total %d)",
            end_time, amplitude, frequency, MOTION_LABELS[motion],
            result.step_count, self.output.step_count
        )
        return self.output.snapshot()

    def run(self, samples: Iterable[float]) -> List[AlgoOutput]:
        """Process a sequence of raw samples, returning one output per sample."""
        return [self.process_sample(s) for s in samples]

    @property
    def steps_by_type(self) -> Dict[MotionType, int]:
        return dict(self.classifier.steps_by_type)

    def get_all_events(self) -> Dict[str, List[float]]:
        """
        Get all accepted extrema.

        Returns:
            Dictionary with 'max_times', 'max_values', 'min_times', 'min_values'
        """
        maxima = [e for e in self.events if e.kind == 'max']
        minima = [e for e in self.events if e.kind == 'min']
        return {
            'max_times': [e.time for e in maxima],
            'max_values': [e.value for e in maxima],
            'min_times': [e.time for e in minima],
            'min_values': [e.value for e in minima],
        }

    def summary(self) -> RunSummary:
        counters = self.classifier.steps_by_type
        return RunSummary(
            duration=float(self.timestamp),
            total_steps=self.output.step_count,
            walk_steps=counters[MotionType.WALK],
            run_steps=counters[MotionType.RUN],
            hop_steps=counters[MotionType.HOP],
        )
