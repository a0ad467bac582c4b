"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def make_config():
    """Factory for Configs with the given input/output counts."""
    from neatmark.run.config import Config

    def _make(num_inputs=2, num_outputs=1, **overrides):
        config = Config()
        config.num_inputs  = num_inputs
        config.num_outputs = num_outputs
        for name, value in overrides.items():
            setattr(config, name, value)
        return config

    return _make


@pytest.fixture
def population(make_config):
    """Population with 2 inputs and 1 output."""
    from neatmark.pool.population import Population
    return Population(make_config(2, 1))


@pytest.fixture
def tracker(population):
    """Seeded tracker for a population with 2 inputs and 1 output (7 innovations)."""
    return population.innovations
