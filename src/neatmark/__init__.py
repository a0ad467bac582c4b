"""
neatmark - historical markings for NEAT (NeuroEvolution of Augmenting Topologies).

This package implements the innovation registry of a NEAT engine: it assigns
stable, globally unique innovation numbers to structural mutations (new
neurons, new links, and hidden neurons that split an existing link), so that
the same mutation arising independently in different genomes is recognized
as the same gene during crossover.

Main components:
- genotype: Innovation records, canonical keys, the innovation store and tracker
- pool:     The population, owner of the neuron-ID and innovation-number counters
- run:      Configuration, logging, persistence and parallel registration

Example:
    >>> from neatmark import Config, Population
    >>> config = Config()
    >>> config.num_inputs, config.num_outputs = 2, 1
    >>> tracker = Population(config).innovations
    >>> len(tracker)
    7
    >>> split = tracker.find_split_innovation(0, 0)
    >>> len(tracker)
    10
"""

__version__ = "0.1.0"

from neatmark.errors import (NeatmarkError,
                             ConfigurationError,
                             InvalidArgumentError,
                             IdentifierOverflowError,
                             ArchiveError)
from neatmark.run.config import Config
from neatmark.genotype.innovation import Innovation, InnovationType, NeuronType
from neatmark.genotype.innovation_tracker import InnovationTracker
from neatmark.pool.population import Population, PopulationLike
from neatmark.run.archive import save_innovations, load_innovations

__all__ = [
    "Config",
    "Innovation",
    "InnovationType",
    "NeuronType",
    "InnovationTracker",
    "Population",
    "PopulationLike",
    "save_innovations",
    "load_innovations",
    "NeatmarkError",
    "ConfigurationError",
    "InvalidArgumentError",
    "IdentifierOverflowError",
    "ArchiveError",
]
