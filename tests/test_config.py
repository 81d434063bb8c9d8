"""Tests for configuration validation."""

from dataclasses import replace

import pytest

from orbit_rng.core.config import SequenceConfig, SweepConfig
from orbit_rng.core.errors import InvalidArgument


def test_defaults_valid():
    config = SequenceConfig()
    assert config.kind == "float"
    assert config.seed >= 1
    SweepConfig()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "complex"},
        {"seed": 0},
        {"n": -1},
        {"digits": -2},
        {"bins": 0},
        {"low": 1.0, "high": 1.0},
    ],
)
def test_invalid_sequence_config(kwargs):
    with pytest.raises(InvalidArgument):
        SequenceConfig(**kwargs)


def test_int_kind_ignores_bounds():
    config = SequenceConfig(kind="int", low=1.0, high=1.0)
    assert config.kind == "int"


def test_replace_revalidates():
    with pytest.raises(InvalidArgument):
        replace(SequenceConfig(), seed=-3)


def test_invalid_sweep_seeds():
    with pytest.raises(InvalidArgument):
        SweepConfig(seeds=[1, 0])


def test_invalid_sweep_lengths():
    with pytest.raises(InvalidArgument):
        SweepConfig(n_values=[10, -10])
