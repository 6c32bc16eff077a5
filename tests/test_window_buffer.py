"""Tests for sample windows, the extended buffer and the accumulator."""

import numpy as np
import pytest

from pedometer import BiquadFilter, ExtendedBuffer, SampleWindow, SMOOTHING_FILTER, WindowAccumulator


def test_window_push_and_read():
    window = SampleWindow(3)
    window.push(1.0, 0.01)
    window.push(2.0, 0.02)

    assert len(window) == 2
    assert not window.is_full
    value, ts = window[1]
    assert value == np.float32(2.0)
    assert ts == np.float32(0.02)


def test_window_rejects_out_of_range_access():
    window = SampleWindow(2)
    window.push(1.0, 0.01)

    with pytest.raises(IndexError):
        window[1]
    with pytest.raises(IndexError):
        window[-1]

    window.push(2.0, 0.02)
    with pytest.raises(IndexError):
        window.push(3.0, 0.03)


def test_window_clear_reuses_storage():
    window = SampleWindow(2)
    window.push(1.0, 0.01)
    window.push(2.0, 0.02)
    window.clear()

    assert len(window) == 0
    window.push(5.0, 0.05)
    assert window[0][0] == np.float32(5.0)


def test_window_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SampleWindow(0)


def test_extended_buffer_starts_with_zero_prefix():
    window = SampleWindow.from_arrays(np.arange(1, 6), np.arange(1, 6) / 10)
    buffer = ExtendedBuffer(2, 5)
    buffer.load(window)

    assert buffer[0] == (0.0, 0.0)
    assert buffer[1] == (0.0, 0.0)
    assert buffer[2][0] == np.float32(1.0)
    assert buffer[6][0] == np.float32(5.0)


def test_extended_buffer_carries_tail_to_next_window():
    first = SampleWindow.from_arrays([1, 2, 3, 4, 5], [0.1, 0.2, 0.3, 0.4, 0.5])
    second = SampleWindow.from_arrays([6, 7, 8, 9, 10], [0.6, 0.7, 0.8, 0.9, 1.0])
    buffer = ExtendedBuffer(2, 5)

    buffer.load(first)
    buffer.carry_tail(first)
    buffer.load(second)

    np.testing.assert_array_equal(buffer.values, np.array([4, 5, 6, 7, 8, 9, 10], dtype=np.float32))
    assert buffer[1][1] == np.float32(0.5)


def test_extended_buffer_requires_full_window():
    buffer = ExtendedBuffer(2, 5)
    partial = SampleWindow(5)
    partial.push(1.0, 0.1)

    with pytest.raises(ValueError):
        buffer.load(partial)
    with pytest.raises(ValueError):
        ExtendedBuffer(6, 5)


def test_accumulator_smooths_and_reports_full():
    acc = WindowAccumulator(BiquadFilter(SMOOTHING_FILTER), capacity=3)

    assert acc.push(1.0, 0.1) is False
    assert acc.push(1.0, 0.2) is False
    assert acc.push(1.0, 0.3) is True

    # First smoothed value is b0 * x with zero history
    assert acc.window[0][0] == np.float32(7.2269463e-3)
    acc.clear()
    assert len(acc.window) == 0
