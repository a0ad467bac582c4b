"""
NEAT Parallel Registration Module

Helpers for registering many structural mutations at once, the way a
generation's worth of mutation operators would hit the innovation tracker
concurrently. Parallelization uses joblib with thread-based workers, so
that every worker shares the same InnovationTracker.

Classes:
    MutationRequest: Description of one structural mutation to register

Functions:
    register_concurrently: Resolve a batch of requests against a tracker
"""

import logging
from dataclasses import dataclass
from joblib      import Parallel, delayed

from neatmark.errors                      import InvalidArgumentError
from neatmark.genotype.innovation         import Innovation, NeuronType
from neatmark.genotype.innovation_tracker import InnovationTracker

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class MutationRequest:
    """
    One structural mutation.

    kind:
        "neuron" - neuron created without a split; uses 'neuron_id' and 'neuron_type'
        "link"   - new link; uses 'from_id' and 'to_id'
        "split"  - hidden neuron splitting the link 'from_id' -> 'to_id'
    """
    kind       : str
    from_id    : int | None        = None
    to_id      : int | None        = None
    neuron_id  : int | None        = None
    neuron_type: NeuronType | None = None

    @classmethod
    def neuron(cls, neuron_id: int, neuron_type: NeuronType) -> 'MutationRequest':
        return cls("neuron", neuron_id=neuron_id, neuron_type=neuron_type)

    @classmethod
    def link(cls, from_id: int, to_id: int) -> 'MutationRequest':
        return cls("link", from_id=from_id, to_id=to_id)

    @classmethod
    def split(cls, from_id: int, to_id: int) -> 'MutationRequest':
        return cls("split", from_id=from_id, to_id=to_id)

def _resolve(tracker: InnovationTracker, request: MutationRequest) -> Innovation:
    if request.kind == "neuron":
        return tracker.find_neuron_innovation(request.neuron_id, request.neuron_type)
    elif request.kind == "link":
        return tracker.find_link_innovation(request.from_id, request.to_id)
    elif request.kind == "split":
        return tracker.find_split_innovation(request.from_id, request.to_id)
    else:
        raise InvalidArgumentError(f"Unknown mutation kind '{request.kind}'")

def register_concurrently(tracker : InnovationTracker,
                          requests: list[MutationRequest],
                          num_jobs: int = 1) -> list[Innovation]:
    """
    Resolve every request against 'tracker', possibly from several threads.

    Parameters:
        tracker:  the shared innovation tracker
        requests: mutations to register
        num_jobs: number of worker threads
                   1 = serial (default)
                  -1 = use as many threads as CPU cores
                  >1 = use specified number of threads

    Returns:
        the innovations, in the same order as 'requests'
    """
    if num_jobs == 1:
        results = [_resolve(tracker, r) for r in requests]
    else:
        results = Parallel(num_jobs, prefer="threads")(
            delayed(_resolve)(tracker, r) for r in requests
        )

    logger.debug(f"Registered {len(requests)} mutations using {num_jobs} job(s); "
                 f"tracker now holds {len(tracker)} innovations")
    return results
