"""
Streamlit app to replay recorded accelerometer traces through the step counter.
Shows the smoothed vertical acceleration, accepted maxima/minima, motion type
and step counts as the trace streams in.
"""
import asyncio
import time

import streamlit as st

from pedometer import (
    AlgoConfig,
    UIConfig,
    SensorTraceLoader,
    StepCounterPipeline,
    ChartRenderer,
    calculate_step_rate,
    calculate_dynamic_x_range
)
from pedometer.metrics_display import display_step_metrics, display_empty_metrics
from pedometer.ui_components import StepCounterUI


# Constants
TOOLTIPS = {
    'total_steps': "Accepted maximum-to-minimum pairs of vertical acceleration, including steps in stationary windows.",
    'motion': "Motion type of the last completed half-second window.",
    'step_rate': "Steps per minute over the last 10 seconds.",
}
STEP_RATE_WINDOW = 10.0  # seconds


# Initialize configurations and components
algo_config = AlgoConfig()
ui_config = UIConfig()

st.set_page_config(page_title="Step counter replay")
ui = StepCounterUI(ui_config)
loader = SensorTraceLoader(ui_config.DATA_DIR, algo_config)
renderer = ChartRenderer(ui_config)

# === UI Setup ===
ui.render_header()

traces = loader.list_traces()
selected_trace = ui.render_trace_selector(traces)
speed, start_stream, stop_stream = ui.render_stream_controls()

pipeline = StepCounterPipeline(algo_config)
ui.render_filter_info(pipeline.smoothing_filter, pipeline.derivative_filter)

status = ui.create_status_placeholder()
chart = ui.create_chart_placeholder()
metric_placeholders = ui.create_metric_placeholders()

for key, default in [('streaming', False), ('last_chart', None), ('last_summary', None)]:
    if key not in st.session_state:
        st.session_state[key] = default


async def replay_trace(trace_name: str, speed: float) -> None:
    """
    Replay a trace sample by sample, redrawing once per completed window.

    Args:
        trace_name: Trace to load from the data directory
        speed: Playback speed multiplier
    """
    status.info(f"Loading {trace_name}...")
    try:
        df = loader.load_trace(trace_name)
    except (FileNotFoundError, ValueError) as e:
        status.error(str(e))
        st.session_state.streaming = False
        return

    pipeline.reset()
    window_duration = algo_config.window_size / algo_config.SAMPLING_RATE
    max_points = int(ui_config.DISPLAY_SECONDS * algo_config.SAMPLING_RATE)
    times, values = [], []

    status.success(f"Replaying {len(df)} samples")
    last_update_time = time.time()
    sample_count = 0

    for row_idx, ary in enumerate(df['ary'].to_numpy()):
        if not st.session_state.streaming:
            status.warning("Replay stopped by user")
            break

        output = pipeline.process_sample(ary)
        times.append(float(pipeline.timestamp))
        values.append(float(pipeline.smoothing_filter.prev_out))
        if len(times) > max_points:
            del times[0], values[0]

        sample_count += 1
        if sample_count < ui_config.UPDATE_INTERVAL:
            continue

        times_display, values_display = renderer.downsample_data(times, values, ui_config.DOWNSAMPLE_FACTOR)
        fig = renderer.create_step_chart(
            times_display, values_display,
            events=pipeline.get_all_events(),
            history=pipeline.window_history,
            window_duration=window_duration,
            x_range=calculate_dynamic_x_range(times, ui_config.DISPLAY_SECONDS),
        )
        st.session_state.last_chart = fig
        chart.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False})

        summary = pipeline.summary()
        step_rate = calculate_step_rate(pipeline.window_history, STEP_RATE_WINDOW)
        st.session_state.last_summary = (summary, output.motion_type, step_rate)
        display_step_metrics(metric_placeholders, summary, output.motion_type, step_rate, TOOLTIPS)

        elapsed_real_time = time.time() - last_update_time
        status.info(
            f"Sample {row_idx + 1}/{len(df)} | Time: {pipeline.timestamp:.2f}s | "
            f"Steps: {output.step_count} | {output.label}"
        )

        target_update_time = ui_config.UPDATE_INTERVAL / algo_config.SAMPLING_RATE / speed
        sleep_time = max(0, target_update_time - elapsed_real_time)
        await asyncio.sleep(sleep_time)

        last_update_time = time.time()
        sample_count = 0

    summary = pipeline.summary()
    status.success(
        f"Replay completed! {summary.total_steps} steps in {summary.duration:.2f}s "
        f"({summary.walk_steps} walking, {summary.run_steps} running, {summary.hop_steps} hopping)"
    )
    st.session_state.streaming = False


# Pre-populate UI with frozen/empty state before replay starts
if not st.session_state.streaming:
    if st.session_state.last_chart is not None:
        chart.plotly_chart(st.session_state.last_chart, use_container_width=True,
                           config={'displayModeBar': False}, key='frozen_chart')
    else:
        empty_fig = renderer.create_step_chart(
            times=[0.0], values=[0.0],
            x_range=(0.0, ui_config.DISPLAY_SECONDS)
        )
        chart.plotly_chart(empty_fig, use_container_width=True,
                           config={'displayModeBar': False}, key='empty_chart')

    if st.session_state.last_summary is not None:
        summary, motion, step_rate = st.session_state.last_summary
        display_step_metrics(metric_placeholders, summary, motion, step_rate, TOOLTIPS)
    else:
        display_empty_metrics(metric_placeholders, TOOLTIPS)
        if not traces:
            status.warning(f"No traces found in {ui_config.DATA_DIR}")
        else:
            status.info("Ready to replay. Click 'Start Replay' to begin.")


# === Replay Control Logic ===
if start_stream and selected_trace:
    st.session_state.streaming = True
    asyncio.run(replay_trace(selected_trace, speed))

if stop_stream:
    st.session_state.streaming = False
    st.rerun()
