"""Loading sensor traces and writing step-annotated traces."""

from pathlib import Path
from typing import List, Union

import numpy as np
import polars as pl

from .config import AlgoConfig
from .step_pipeline import StepCounterPipeline


TRACE_COLUMNS = ['RECORD', 'TYPE', 'DATE', 'TIME', 'arx', 'ary', 'arz', 'grx', 'gry', 'grz']
AXIS_COLUMNS = TRACE_COLUMNS[4:]
OUTPUT_COLUMNS = TRACE_COLUMNS + ['timestamp(sec)', 'step_count', 'step_type', 'step_type_num']

TRACE_SCHEMA = {
    'RECORD': pl.Int64,
    'TYPE': pl.Int64,
    'DATE': pl.Utf8,
    'TIME': pl.Utf8,
    **{axis: pl.Float32 for axis in AXIS_COLUMNS},
}


class SensorTraceLoader:
    """Handles loading and validation of recorded sensor traces."""

    def __init__(self, data_dir: Path, config: AlgoConfig = None):
        """
        Initialize the loader.

        Args:
            data_dir: Directory containing trace CSV files
            config: Algorithm configuration (header line count)
        """
        self.data_dir = Path(data_dir)
        self.config = config or AlgoConfig()

    def list_traces(self) -> List[str]:
        """
        Names of the traces available in the data directory.

        Returns:
            Sorted list of file stems
        """
        return [f.stem for f in sorted(self.data_dir.glob("*.csv"))]

    def get_file_path(self, name: str) -> Path:
        return self.data_dir / f"{name}.csv"

    def load_trace(self, source: Union[str, Path]) -> pl.DataFrame:
        """
        Load a trace by name or path.

        The first SKIP_LINES lines are headers. Each following line holds the
        record id, sensor id, date, time, three accelerometer axes (m/s^2) and
        three gyroscope axes (rad/s), separated by commas.

        Args:
            source: Trace name in data_dir, or a path to a CSV file

        Returns:
            DataFrame with TRACE_COLUMNS

        Raises:
            FileNotFoundError: If the trace file doesn't exist
            ValueError: If the file is too short or has fewer than ten fields
        """
        path = Path(source)
        if not path.exists():
            path = self.get_file_path(str(source))
        if not path.exists():
            raise FileNotFoundError(f"Trace file not found: {source}")

        has_records = False
        with open(path, 'r') as f:
            for _ in range(self.config.SKIP_LINES):
                if not f.readline():
                    raise ValueError(f"Cannot read first {self.config.SKIP_LINES} lines of {path}")
            for line in f:
                if line.strip():
                    has_records = True
                    break
        if not has_records:
            return pl.DataFrame(schema=TRACE_SCHEMA)

        df = pl.read_csv(
            path,
            has_header=False,
            skip_rows=self.config.SKIP_LINES,
            infer_schema=False,
            truncate_ragged_lines=True,
        )
        if df.width < len(TRACE_COLUMNS):
            raise ValueError(
                f"Expected {len(TRACE_COLUMNS)} fields per record in {path}, got {df.width}"
            )

        df = df.select(df.columns[:len(TRACE_COLUMNS)])
        df.columns = TRACE_COLUMNS
        return df.select([
            pl.col(name).str.strip_chars().cast(dtype)
            for name, dtype in TRACE_SCHEMA.items()
        ])


def annotate_trace(df: pl.DataFrame, pipeline: StepCounterPipeline) -> pl.DataFrame:
    """
    Run every record's vertical acceleration through the pipeline.

    Args:
        df: Trace loaded by SensorTraceLoader
        pipeline: Pipeline to feed; its state is advanced

    Returns:
        Input columns plus timestamp, cumulative step count and motion type
    """
    timestamps = np.zeros(len(df), dtype=np.float32)
    step_counts = np.zeros(len(df), dtype=np.int64)
    labels = []
    type_nums = np.zeros(len(df), dtype=np.int64)

    for idx, ary in enumerate(df['ary'].to_numpy()):
        output = pipeline.process_sample(ary)
        timestamps[idx] = pipeline.timestamp
        step_counts[idx] = output.step_count
        labels.append(output.label)
        type_nums[idx] = output.motion_type.value

    return df.with_columns(
        pl.Series('timestamp(sec)', timestamps, dtype=pl.Float32),
        pl.Series('step_count', step_counts, dtype=pl.Int64),
        pl.Series('step_type', labels, dtype=pl.Utf8),
        pl.Series('step_type_num', type_nums, dtype=pl.Int64),
    )


def write_annotated_trace(df: pl.DataFrame, path: Union[str, Path]):
    """Write an annotated trace as CSV with six decimal places."""
    df.select(OUTPUT_COLUMNS).write_csv(path, float_precision=6)
