import numpy as np
import pytest

from pedometer import AlgoConfig


def test_defaults(config):
    assert config.window_size == 52
    assert config.hold_limit == 2
    assert config.sample_interval == np.float32(1.0) / np.float32(104.0)
    config.validate()


@pytest.mark.parametrize("overrides", [
    {'SAMPLING_RATE': 0},
    {'BUFF_FACTOR': 0},
    {'MAX_TC_SAMPLES': 0},
    {'BUFF_FACTOR': 8},
    {'SMALL_AMP': 15.0},
    {'SLOW_FREQ': 3.0},
])
def test_invalid_values(overrides):
    with pytest.raises(ValueError):
        AlgoConfig(**overrides).validate()
