"""Tests for motion type thresholds and per-category step counters."""

import pytest

from pedometer import AlgoConfig, MOTION_LABELS, MotionClassifier, MotionType, classify


@pytest.mark.parametrize("amplitude, frequency, expected", [
    (0.0, 0.0, MotionType.STATIONARY),
    (5.0, 0.5, MotionType.STATIONARY),
    (5.0, 0.51, MotionType.WALK),
    (3.0, 3.0, MotionType.WALK),
    (15.0, 2.2, MotionType.RUN),
    (20.0, 1.0, MotionType.HOP),
    (20.0, 0.0, MotionType.HOP),
    (10.0, 2.2, MotionType.RUN),
    (10.0, 2.19, MotionType.WALK),
    (10.0, 0.1, MotionType.WALK),
])
def test_classify_thresholds(amplitude, frequency, expected):
    assert classify(amplitude, frequency) is expected


def test_classify_uses_config_thresholds():
    config = AlgoConfig(SMALL_AMP=2.0, LARGE_AMP=8.0)
    assert classify(10.0, 1.0, config) is MotionType.HOP
    assert classify(10.0, 1.0) is MotionType.WALK


def test_labels():
    assert MOTION_LABELS[MotionType.WALK] == 'WALKING'
    assert MOTION_LABELS[MotionType.STATIONARY] == 'STATIONARY'
    assert MotionType.RUN.value == 3


def test_steps_credited_to_window_category(config):
    classifier = MotionClassifier(config)

    assert classifier.update(10.0, 1.0, 2) is MotionType.WALK
    assert classifier.update(20.0, 3.0, 3) is MotionType.RUN
    assert classifier.update(20.0, 1.0, 1) is MotionType.HOP

    assert classifier.steps_by_type == {MotionType.WALK: 2, MotionType.RUN: 3, MotionType.HOP: 1}
    assert classifier.labelled_total == 6


def test_stationary_steps_not_credited(config):
    classifier = MotionClassifier(config)

    assert classifier.update(2.0, 0.4, 1) is MotionType.STATIONARY
    assert classifier.labelled_total == 0

    classifier.update(10.0, 1.0, 2)
    classifier.reset()
    assert classifier.labelled_total == 0
