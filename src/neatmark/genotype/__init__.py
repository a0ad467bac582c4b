"""
NEAT Genotype Package

This package implements the historical markings that the genotype of a NEAT
(NeuroEvolution of Augmenting Topologies) network relies on. Every structural
gene carries an innovation number obtained from the InnovationTracker, so that
genes created by the same mutation in different genomes line up in crossover.

Modules:
    innovation:         NeuronType and InnovationType enumerations, Innovation record
    innovation_keys:    Canonical keys identifying structural mutations
    innovation_store:   InnovationStore class
    innovation_tracker: InnovationTracker class

Exported Classes:
    NeuronType:        Enumeration for neuron types (BIAS, INPUT, HIDDEN, OUTPUT)
    InnovationType:    Enumeration for innovation types (NEW_NEURON, NEW_LINK)
    Innovation:        Immutable record of one structural innovation
    InnovationStore:   Thread-safe key -> Innovation mapping
    InnovationTracker: Registry of innovations shared by a population
"""

from neatmark.genotype.innovation         import Innovation, InnovationType, NeuronType
from neatmark.genotype.innovation_store   import InnovationStore
from neatmark.genotype.innovation_tracker import InnovationTracker

__all__ = ['Innovation',
           'InnovationStore',
           'InnovationTracker',
           'InnovationType',
           'NeuronType']
