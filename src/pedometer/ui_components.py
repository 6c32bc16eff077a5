"""UI components for the Streamlit step counter replay app."""

import streamlit as st
from typing import Dict, Optional, Tuple

from .config import UIConfig
from .signal_filters import BiquadFilter


class StepCounterUI:
    """Handles rendering of UI components for the replay app."""

    def __init__(self, ui_config: UIConfig):
        """
        Initialize the UI component manager.

        Args:
            ui_config: UI configuration object
        """
        self.config = ui_config

    def render_header(self):
        """Render app title."""
        st.title("Step detection and motion classification")

    def render_trace_selector(self, traces: list) -> Optional[str]:
        """
        Render trace selection dropdown.

        Args:
            traces: List of available trace names

        Returns:
            Selected trace name or None
        """
        return st.selectbox(
            "Select Trace",
            traces,
            index=0 if traces else None
        )

    def render_stream_controls(self) -> Tuple[float, bool, bool]:
        """
        Render replay control inputs.

        Returns:
            Tuple of (speed, start_clicked, stop_clicked)
        """
        speed = st.number_input(
            "Playback speed",
            min_value=0.5,
            max_value=50.0,
            value=self.config.DEFAULT_SPEED,
            step=0.5,
            help="Replay speed multiplier (1 = real-time)"
        )

        col1, col2 = st.columns([1, 1])
        with col1:
            start = st.button("▶ Start Replay")
        with col2:
            stop = st.button("⏹ Stop Replay")

        return speed, start, stop

    def create_chart_placeholder(self) -> st.delta_generator.DeltaGenerator:
        st.subheader("Live Data")
        return st.empty()

    def create_status_placeholder(self) -> st.delta_generator.DeltaGenerator:
        return st.empty()

    def create_metric_placeholders(self) -> Dict[str, st.delta_generator.DeltaGenerator]:
        """
        Create placeholders for step metrics.

        Returns:
            Dictionary of placeholder objects keyed by metric
        """
        st.subheader("Metrics")
        col1, col2, col3 = st.columns(3)
        with col1:
            total_steps = st.empty()
            walk = st.empty()
        with col2:
            motion = st.empty()
            run = st.empty()
        with col3:
            step_rate = st.empty()
            hop = st.empty()
        return {
            'total_steps': total_steps,
            'motion': motion,
            'step_rate': step_rate,
            'walk': walk,
            'run': run,
            'hop': hop,
        }

    def render_filter_info(self, smoothing: BiquadFilter, derivative: BiquadFilter):
        """Show the fixed filter designs in an expander."""
        with st.expander("Filters"):
            for filt in (smoothing, derivative):
                info = filt.get_info()
                st.markdown(f"**{info['type']}**: {info['description']}")
