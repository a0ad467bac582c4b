"""
NEAT Population Module

The innovation registry does not own its identifier counters: they belong
to the population, which hands out neuron IDs and innovation numbers on
request. This module defines that collaborator's interface and a minimal
implementation of it.

Classes:
    IdCounter:      Thread-safe, gap-free, bounded identifier counter
    PopulationLike: Protocol the InnovationTracker expects from a population
    Population:     Counter owner built from a Config
"""

import logging
import threading
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from neatmark.errors     import ConfigurationError, IdentifierOverflowError
from neatmark.run.config import Config

if TYPE_CHECKING:
    from neatmark.genotype.innovation_tracker import InnovationTracker

logger = logging.getLogger(__name__)

class IdCounter:
    """
    Hands out strictly increasing integers, starting at 'start'.
    Safe to share between threads. Raises IdentifierOverflowError
    rather than going past 'limit'.
    """

    def __init__(self, start: int, limit: int, name: str = "identifier"):
        if start < 0:
            raise ConfigurationError(f"{name} counter cannot start below 0, got {start}")
        self._name  = name
        self._limit = limit
        self._lock  = threading.Lock()
        self._next  = start

    def __next__(self) -> int:
        with self._lock:
            if self._next > self._limit:
                raise IdentifierOverflowError(f"{self._name} counter exhausted (limit {self._limit})")
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        """The value the next call will return."""
        return self._next

    def advance_to(self, value: int):
        """
        Move the counter forward so that the next value is at least 'value'.
        Counters never move backwards.
        """
        with self._lock:
            if value > self._next:
                self._next = value

@runtime_checkable
class PopulationLike(Protocol):
    """
    What the InnovationTracker needs from a population.
    """

    def assign_gene_id(self) -> int: ...

    def assign_innovation_id(self) -> int: ...

    def get_input_count(self) -> int: ...

    def get_output_count(self) -> int: ...

class Population:
    """
    Owner of the neuron-ID and innovation-number counters.

    Neuron IDs 0 .. num_inputs + num_outputs are reserved for the bias,
    input and output neurons of the initial topology, so the first
    neuron ID handed out is 1 + num_inputs + num_outputs.

    Public Methods:
        assign_gene_id():       Return a fresh neuron ID
        assign_innovation_id(): Return a fresh innovation number
        get_input_count():      Number of input neurons
        get_output_count():     Number of output neurons
        resume(...):            Move the counters past previously used values

    Public Properties:
        innovations: The InnovationTracker for this population (built on first access)
    """

    def __init__(self, config: Config):
        """
        Parameters:
            config: Stores configuration parameters
        """
        config.validate()
        self._config = config

        first_gene_id = 1 + config.num_inputs + config.num_outputs
        self._gene_ids       = IdCounter(first_gene_id,              config.max_identifier, "neuron ID")
        self._innovation_ids = IdCounter(config.first_innovation_id, config.max_identifier, "innovation number")

        self._innovations: 'InnovationTracker | None' = None
        self._innovations_lock = threading.Lock()

    def assign_gene_id(self) -> int:
        return next(self._gene_ids)

    def assign_innovation_id(self) -> int:
        return next(self._innovation_ids)

    def get_input_count(self) -> int:
        return self._config.num_inputs

    def get_output_count(self) -> int:
        return self._config.num_outputs

    @property
    def next_gene_id(self) -> int:
        return self._gene_ids.peek()

    @property
    def next_innovation_id(self) -> int:
        return self._innovation_ids.peek()

    def resume(self, next_gene_id: int, next_innovation_id: int):
        """
        Make sure future identifiers do not clash with ones used before,
        e.g. after reloading an innovation archive.

        Parameters:
            next_gene_id:       lowest neuron ID the counter may hand out next
            next_innovation_id: lowest innovation number the counter may hand out next
        """
        self._gene_ids.advance_to(next_gene_id)
        self._innovation_ids.advance_to(next_innovation_id)
        logger.debug(f"Counters resumed at neuron ID {self.next_gene_id}, "
                     f"innovation number {self.next_innovation_id}")

    @property
    def innovations(self) -> 'InnovationTracker':
        # Import here to avoid circular import
        from neatmark.genotype.innovation_tracker import InnovationTracker

        with self._innovations_lock:
            if self._innovations is None:
                self._innovations = InnovationTracker(self, seed=self._config.seed_initial_topology)
            return self._innovations

    @innovations.setter
    def innovations(self, tracker: 'InnovationTracker'):
        with self._innovations_lock:
            tracker.set_population(self)
            self._innovations = tracker
