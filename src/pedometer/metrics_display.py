"""Metrics formatting helpers for the step counter CLI and viewer."""

from typing import Any, Dict, List, Optional, Tuple

from .motion_classifier import MOTION_LABELS, MotionType
from .step_pipeline import RunSummary, WindowRecord


def format_summary(summary: RunSummary) -> str:
    """
    End-of-run report as printed by the command line tool.

    The headline total is the sum of the walk, run and hop counters.

    Args:
        summary: Totals from StepCounterPipeline.summary()

    Returns:
        Multi-line report
    """
    return (
        f"Total motion duration is {summary.duration:f} sec, which contains approximately:\n"
        f" {summary.labelled_steps} Total number of steps including\n"
        f" |---> {summary.walk_steps} steps of WALKING,\n"
        f" |---> {summary.run_steps} steps of RUNNING, and\n"
        f" |---> {summary.hop_steps} steps of HOPPING."
    )


def format_metric_value(value: Optional[float], unit: str, precision: int = 1) -> str:
    """
    Format metric value for display.

    Args:
        value: The metric value to format
        unit: The unit string to append
        precision: Decimal places

    Returns:
        Formatted metric string, "--" when there is no value
    """
    if value is None:
        return "--"
    return f"{value:.{precision}f}{unit}"


def calculate_step_rate(history: List[WindowRecord], window_seconds: float) -> Optional[float]:
    """
    Steps per minute over the most recent window_seconds of processed windows.

    Args:
        history: Per-window records from the pipeline
        window_seconds: Length of the look-back period

    Returns:
        Step rate, or None before the first window
    """
    if not history:
        return None
    current_time = history[-1].end_time
    cutoff_time = current_time - window_seconds
    recent = [r for r in history if r.end_time > cutoff_time]
    span = current_time - max(cutoff_time, 0.0)
    if span <= 0:
        return None
    return sum(r.steps for r in recent) * 60.0 / span


def motion_segments(history: List[WindowRecord], window_duration: float) -> List[Tuple[float, float, str]]:
    """
    Merge consecutive windows of the same motion type into time segments.

    Args:
        history: Per-window records from the pipeline
        window_duration: Seconds covered by one window

    Returns:
        List of (start_time, end_time, label)
    """
    segments = []
    for record in history:
        label = MOTION_LABELS[record.motion_type]
        start = record.end_time - window_duration
        if segments and segments[-1][2] == label:
            segments[-1] = (segments[-1][0], record.end_time, label)
        else:
            segments.append((start, record.end_time, label))
    return segments


def display_step_metrics(placeholders: Dict[str, Any], summary: RunSummary,
                         current_type: MotionType, step_rate: Optional[float],
                         tooltips: Dict[str, str]):
    """
    Display step metrics in Streamlit placeholders.

    Args:
        placeholders: Dictionary of Streamlit placeholder objects
        summary: Current run totals
        current_type: Motion type of the last completed window
        step_rate: Recent steps per minute
        tooltips: Tooltip text dictionary
    """
    placeholders['total_steps'].metric("Total Steps", value=summary.total_steps, help=tooltips['total_steps'])
    placeholders['motion'].metric("Motion", value=MOTION_LABELS[current_type].title(), help=tooltips['motion'])
    placeholders['step_rate'].metric(
        "Step Rate (steps/min)", value=format_metric_value(step_rate, ""), help=tooltips['step_rate']
    )
    placeholders['walk'].metric("Walking", value=summary.walk_steps)
    placeholders['run'].metric("Running", value=summary.run_steps)
    placeholders['hop'].metric("Hopping", value=summary.hop_steps)


def display_empty_metrics(placeholders: Dict[str, Any], tooltips: Dict[str, str]):
    """Display empty metric placeholders before the first replay."""
    placeholders['total_steps'].metric("Total Steps", value="--", help=tooltips['total_steps'])
    placeholders['motion'].metric("Motion", value="--", help=tooltips['motion'])
    placeholders['step_rate'].metric("Step Rate (steps/min)", value="--", help=tooltips['step_rate'])
    for key, title in [('walk', "Walking"), ('run', "Running"), ('hop', "Hopping")]:
        placeholders[key].metric(title, value="--")


def calculate_dynamic_x_range(times: list, window_duration: float,
                              fallback_start: float = 0.0) -> Tuple[float, float]:
    """
    Calculate dynamic x-axis range for scrolling window display.

    Args:
        times: Time values currently displayed
        window_duration: Duration of the display window in seconds
        fallback_start: Start time used when there is no data

    Returns:
        Tuple of (x_min, x_max)
    """
    if times:
        current_max_time = max(times)
        return current_max_time - window_duration, current_max_time
    return fallback_start, fallback_start + window_duration
