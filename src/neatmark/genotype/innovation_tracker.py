"""
NEAT Innovation Tracker Module

This module implements the InnovationTracker class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationTracker: Registry of innovations shared by all genomes of a population
"""

import logging
from typing import TYPE_CHECKING, Iterator, Mapping

from neatmark.errors                     import ConfigurationError, InvalidArgumentError
from neatmark.genotype.innovation        import Innovation, InnovationType, NeuronType
from neatmark.genotype.innovation_store  import InnovationStore
from neatmark.genotype.innovation_keys   import (check_neuron_id,
                                                 produce_key_link,
                                                 produce_key_neuron,
                                                 produce_key_neuron_split)
if TYPE_CHECKING:
    from neatmark.pool.population import PopulationLike

logger = logging.getLogger(__name__)

class InnovationTracker:
    """
    Tracks structural changes across all genomes of a population.
    Ensures the same structural change gets the same innovation,
    so that crossover can line up homologous genes.

    Every lookup is "find or create": the first request for a given
    mutation allocates identifiers (through the population) and stores
    a new Innovation; every later request returns that same record.
    Safe to use from several threads at once.

    Public Methods:
        find_neuron_innovation(neuron_id, neuron_type): Innovation for a bias/input/output neuron
        find_link_innovation(from_id, to_id):           Innovation for a new link
        find_split_innovation(from_id, to_id):          Innovation for a hidden neuron splitting a link
        get_split_links(split):                         The two links created by a split
        get_innovations():                              Read-only mapping key -> Innovation
        set_population(population):                     Attach the identifier-providing population
        bootstrap():                                    Register the minimal initial topology
    """

    def __init__(self, population: 'PopulationLike | None' = None, seed: bool = True):
        """
        Create a tracker. If a population is given and 'seed' is True, the
        innovations of the minimal initial topology are registered right away.

        Parameters:
            population: Provides neuron IDs, innovation numbers and input/output counts.
                        May be None (e.g. before restoring from an archive), in which
                        case it must be attached with 'set_population()' before use.
            seed:       Whether to register the initial topology
        """
        self._population = population
        self._store      = InnovationStore()

        if population is not None and seed:
            self.bootstrap()

    def set_population(self, population: 'PopulationLike'):
        self._population = population

    @property
    def population(self) -> 'PopulationLike | None':
        return self._population

    def _require_population(self) -> 'PopulationLike':
        if self._population is None:
            raise ConfigurationError("No population attached to the innovation tracker; "
                                     "call 'set_population()' first")
        return self._population

    def bootstrap(self):
        """
        Register the innovations of the minimal initial topology:
        the bias neuron (ID 0), the input neurons (IDs 1..I), the output
        neurons (IDs I+1..I+O), and a link from the bias and every input
        to every output index 0..O-1.
        """
        population = self._require_population()
        num_inputs  = population.get_input_count()
        num_outputs = population.get_output_count()

        self.find_neuron_innovation(0, NeuronType.BIAS)

        for i in range(num_inputs):
            self.find_neuron_innovation(1 + i, NeuronType.INPUT)

        for i in range(num_outputs):
            self.find_neuron_innovation(1 + num_inputs + i, NeuronType.OUTPUT)

        # outputs are addressed by index here, not by neuron ID
        for from_id in range(num_inputs + 1):
            for to_id in range(num_outputs):
                self.find_link_innovation(from_id, to_id)

        logger.info(f"Seeded {1 + num_inputs + num_outputs} neuron and "
                    f"{(num_inputs + 1) * num_outputs} link innovations")

    def find_neuron_innovation(self, neuron_id: int, neuron_type: NeuronType) -> Innovation:
        """
        Find the innovation for a single neuron, i.e. one that was created
        without splitting a link. The only such neurons are the bias, input
        and output neurons.

        Parameters:
            neuron_id:   ID of the neuron
            neuron_type: type of the neuron

        Returns:
            the existing innovation, or the newly created one
        """
        if not isinstance(neuron_type, NeuronType):
            raise InvalidArgumentError(f"neuron_type must be a NeuronType, got {neuron_type!r}")

        population = self._require_population()
        neuron_id  = check_neuron_id(neuron_id)
        key        = produce_key_neuron(neuron_id)

        def create():
            return Innovation(innovation_id   = population.assign_innovation_id(),
                              innovation_type = InnovationType.NEW_NEURON,
                              from_neuron_id  = None,
                              to_neuron_id    = None,
                              neuron_id       = neuron_id,
                              neuron_type     = neuron_type)

        innovation, created = self._store.insert_if_absent(key, create)
        if created:
            logger.debug(f"New {innovation}")
        return innovation

    def find_link_innovation(self, from_id: int, to_id: int) -> Innovation:
        """
        Find the innovation for a link between two existing neurons.
        Direction matters: (a, b) and (b, a) are different links.

        Parameters:
            from_id: ID of the source neuron
            to_id:   ID of the target neuron

        Returns:
            the existing innovation, or the newly created one
        """
        population = self._require_population()
        from_id    = check_neuron_id(from_id, "from_id")
        to_id      = check_neuron_id(to_id,   "to_id")
        key        = produce_key_link(from_id, to_id)

        innovation, created = self._store.insert_if_absent(
            key, lambda: self._new_link(population, from_id, to_id))
        if created:
            logger.debug(f"New {innovation}")
        return innovation

    @staticmethod
    def _new_link(population: 'PopulationLike', from_id: int, to_id: int) -> Innovation:
        return Innovation(innovation_id   = population.assign_innovation_id(),
                          innovation_type = InnovationType.NEW_LINK,
                          from_neuron_id  = from_id,
                          to_neuron_id    = to_id,
                          neuron_id       = None,
                          neuron_type     = NeuronType.HIDDEN)

    def find_split_innovation(self, from_id: int, to_id: int) -> Innovation:
        """
        Find the innovation for a hidden neuron that splits an existing link.
        This is the means by which hidden neurons are introduced in NEAT.

        The first time a given link is split, a fresh neuron ID is assigned
        and the two links replacing the split one (from_id -> new neuron and
        new neuron -> to_id) are registered as well. Splitting the same link
        again returns the same innovation without registering anything.

        Parameters:
            from_id: ID of the source neuron of the link being split
            to_id:   ID of the target neuron of the link being split

        Returns:
            the existing innovation, or the newly created one
        """
        population = self._require_population()
        from_id    = check_neuron_id(from_id, "from_id")
        to_id      = check_neuron_id(to_id,   "to_id")
        key        = produce_key_neuron_split(from_id, to_id)

        def create():
            neuron_id = population.assign_gene_id()
            split = Innovation(innovation_id   = population.assign_innovation_id(),
                               innovation_type = InnovationType.NEW_NEURON,
                               from_neuron_id  = from_id,
                               to_neuron_id    = to_id,
                               neuron_id       = neuron_id,
                               neuron_type     = NeuronType.HIDDEN)
            records = [(key, split)]

            # the two links replacing the split one
            for link_from, link_to in ((from_id, neuron_id), (neuron_id, to_id)):
                link_key = produce_key_link(link_from, link_to)
                if self._store.lookup(link_key) is None:
                    records.append((link_key, self._new_link(population, link_from, link_to)))
            return records

        # The split and its links are stored together, or not at all
        innovation, created = self._store.insert_group_if_absent(key, create)
        if created:
            logger.debug(f"New {innovation}")
        return innovation

    def get_split_links(self, split: Innovation) -> tuple[Innovation, Innovation]:
        """
        Return the two link innovations that replace the link split by 'split'.

        Parameters:
            split: an innovation returned by 'find_split_innovation()'

        Returns:
            2-tuple (from -> new neuron, new neuron -> to)
        """
        if not (split.is_neuron and split.neuron_type == NeuronType.HIDDEN):
            raise InvalidArgumentError(f"Not a split innovation: {split}")
        return (self.find_link_innovation(split.from_neuron_id, split.neuron_id),
                self.find_link_innovation(split.neuron_id, split.to_neuron_id))

    def get_innovations(self) -> Mapping[str, Innovation]:
        """
        Read-only mapping from canonical key to innovation, in creation order.
        Meant for diagnostics and persistence.
        """
        return self._store.snapshot()

    @property
    def innovations(self) -> Mapping[str, Innovation]:
        return self.get_innovations()

    @property
    def store(self) -> InnovationStore:
        return self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Innovation]:
        return iter(self._store)

    def __contains__(self, key) -> bool:
        return key in self._store
