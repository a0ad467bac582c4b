"""
Shared fixtures for integration tests.
"""

import os
import pytest

from neatmark.pool.population import Population
from neatmark.run.config      import Config


@pytest.fixture
def config_file(tmp_path):
    """Write an INI file for a population with 2 inputs and 1 output."""
    path = tmp_path / "neatmark.ini"
    path.write_text("[POPULATION_INIT]\n"
                    "num_inputs  = 2\n"
                    "num_outputs = 1\n"
                    "\n"
                    "[PARALLEL]\n"
                    "num_jobs = 4\n")
    return os.fspath(path)


@pytest.fixture
def xor_population(config_file):
    """Population configured from file, as an XOR experiment would use."""
    return Population(Config(config_file))
