"""Accelerometer step counting and motion classification."""

from .config import AlgoConfig, UIConfig
from .signal_filters import (
    BiquadFilter,
    FilterCoefficients,
    SMOOTHING_FILTER,
    DERIVATIVE_FILTER,
    settle_samples
)
from .window_buffer import SampleWindow, ExtendedBuffer, WindowAccumulator
from .peak_detector import PeakDetector, PeakState, PeakEvent, WindowResult
from .estimate_smoother import EstimateSmoother, EstimateHoldState
from .motion_classifier import MotionType, MOTION_LABELS, MotionClassifier, classify
from .step_pipeline import AlgoOutput, RunSummary, WindowRecord, StepCounterPipeline
from .data_loader import SensorTraceLoader, annotate_trace, write_annotated_trace
from .chart_renderer import ChartRenderer
from .metrics_display import (
    format_summary,
    format_metric_value,
    calculate_step_rate,
    motion_segments,
    calculate_dynamic_x_range
)


__all__ = [
    'AlgoConfig',
    'UIConfig',
    'BiquadFilter',
    'FilterCoefficients',
    'SMOOTHING_FILTER',
    'DERIVATIVE_FILTER',
    'settle_samples',
    'SampleWindow',
    'ExtendedBuffer',
    'WindowAccumulator',
    'PeakDetector',
    'PeakState',
    'PeakEvent',
    'WindowResult',
    'EstimateSmoother',
    'EstimateHoldState',
    'MotionType',
    'MOTION_LABELS',
    'MotionClassifier',
    'classify',
    'AlgoOutput',
    'RunSummary',
    'WindowRecord',
    'StepCounterPipeline',
    'SensorTraceLoader',
    'annotate_trace',
    'write_annotated_trace',
    'ChartRenderer',
    'format_summary',
    'format_metric_value',
    'calculate_step_rate',
    'motion_segments',
    'calculate_dynamic_x_range'
]
