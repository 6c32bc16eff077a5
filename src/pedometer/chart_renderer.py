"""Chart rendering utilities for step detection visualization."""

import plotly.graph_objects as go
from plotly.subplots import make_subplots
from typing import Dict, List, Optional, Tuple

from .config import UIConfig
from .step_pipeline import WindowRecord
from .metrics_display import motion_segments


class ChartRenderer:
    """Handles creation and styling of Plotly charts for step detection."""

    def __init__(self, ui_config: UIConfig):
        """
        Initialize the chart renderer.

        Args:
            ui_config: UI configuration object
        """
        self.config = ui_config

    def create_step_chart(
        self,
        times: List[float],
        values: List[float],
        events: Optional[Dict[str, List[float]]] = None,
        history: Optional[List[WindowRecord]] = None,
        window_duration: float = 0.5,
        x_range: Optional[Tuple[float, float]] = None,
    ) -> go.Figure:
        """
        Create a stacked figure: smoothed signal with extrema on top,
        per-window amplitude and frequency estimates below.

        Args:
            times: Sample times (x-axis)
            values: Smoothed vertical acceleration
            events: Accepted extrema from StepCounterPipeline.get_all_events()
            history: Per-window records, used for estimates and motion shading
            window_duration: Seconds covered by one window
            x_range: Optional fixed x-axis range

        Returns:
            Plotly Figure with subplots
        """
        fig = make_subplots(
            rows=2, cols=1,
            shared_xaxes=True,
            subplot_titles=("Smoothed Accel Y", "Estimates"),
            vertical_spacing=0.12,
            row_heights=[0.65, 0.35],
            specs=[[{}], [{"secondary_y": True}]],
        )

        fig.add_trace(
            go.Scatter(
                x=times,
                y=values,
                mode='lines',
                line=dict(color=self.config.CHART_COLORS['signal'], width=self.config.CHART_LINE_WIDTH),
                name="Signal",
                showlegend=False
            ),
            row=1, col=1
        )

        if events and times:
            self._add_event_markers(fig, events, min(times), max(times), row=1, col=1)

        if history:
            for start, end, label in motion_segments(history, window_duration):
                if times and (end < min(times) or start > max(times)):
                    continue
                fig.add_vrect(
                    x0=start, x1=end,
                    fillcolor=self.config.MOTION_COLORS[label],
                    line_width=0,
                    layer='below',
                    row=1, col=1
                )

            end_times = [r.end_time for r in history]
            fig.add_trace(
                go.Scatter(
                    x=end_times,
                    y=[r.amplitude for r in history],
                    mode='lines',
                    line=dict(color=self.config.CHART_COLORS['max'], width=1, shape='hv'),
                    name='Amplitude (m/s²)',
                ),
                row=2, col=1, secondary_y=False
            )
            fig.add_trace(
                go.Scatter(
                    x=end_times,
                    y=[r.frequency for r in history],
                    mode='lines',
                    line=dict(color=self.config.CHART_COLORS['min'], width=1, shape='hv', dash='dot'),
                    name='Frequency (Hz)',
                ),
                row=2, col=1, secondary_y=True
            )

        fig.update_layout(
            height=self.config.CHART_HEIGHT,
            margin=self.config.CHART_MARGIN,
            showlegend=True,
            legend=dict(
                orientation="h",
                yanchor="bottom",
                y=1.08,
                xanchor="left",
                x=0,
                bgcolor="rgba(255, 255, 255, 0.8)",
                bordercolor="rgba(200, 200, 200, 0.5)",
                borderwidth=1
            ),
            transition={'duration': 0},
            uirevision='constant',
            hovermode=False,
            dragmode=False,
            plot_bgcolor='white',
            paper_bgcolor='white',
        )

        fig.update_xaxes(
            fixedrange=True,
            showgrid=True,
            gridcolor='rgba(220, 220, 220, 0.3)',
            zeroline=False,
            type='linear'
        )
        if x_range is not None:
            fig.update_xaxes(range=list(x_range))
        fig.update_xaxes(title_text="Time (s)", row=2, col=1)
        fig.update_yaxes(title_text="Accel (m/s²)", fixedrange=True, row=1, col=1)
        fig.update_yaxes(title_text="Amp", fixedrange=True, row=2, col=1, secondary_y=False)
        fig.update_yaxes(title_text="Hz", fixedrange=True, row=2, col=1, secondary_y=True)

        return fig

    def _add_event_markers(
        self,
        fig: go.Figure,
        events: Dict[str, List[float]],
        time_min: float,
        time_max: float,
        row: int,
        col: int,
    ):
        """Helper to add max/min markers that fall inside the displayed time span."""
        for kind, symbol in [('max', 'triangle-down'), ('min', 'triangle-up')]:
            pairs = [
                (t, v) for t, v in zip(events.get(f'{kind}_times', []), events.get(f'{kind}_values', []))
                if time_min <= t <= time_max
            ]
            if not pairs:
                continue
            fig.add_trace(
                go.Scatter(
                    x=[t for t, _ in pairs],
                    y=[v for _, v in pairs],
                    mode='markers',
                    marker=dict(symbol=symbol, size=8, color=self.config.CHART_COLORS[kind]),
                    name='Maximum' if kind == 'max' else 'Minimum',
                    hoverinfo='skip'
                ),
                row=row, col=col
            )

    def downsample_data(
        self,
        times: List[float],
        values: List[float],
        factor: int
    ) -> Tuple[List[float], List[float]]:
        """
        Downsample data for display performance.

        Args:
            times: List of time values
            values: List of sensor values
            factor: Downsampling factor (keep every Nth point)

        Returns:
            Tuple of (downsampled_times, downsampled_values)
        """
        return times[::factor], values[::factor]
