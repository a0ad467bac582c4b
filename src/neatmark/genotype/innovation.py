"""
NEAT Innovation Module

This module implements the innovation record (a.k.a. historical marking)
and the enumerations describing it.

Classes:
    NeuronType:     Enumeration for neuron types (BIAS, INPUT, HIDDEN, OUTPUT)
    InnovationType: Enumeration for innovation types (NEW_NEURON, NEW_LINK)
    Innovation:     Immutable record of one structural innovation
"""

from dataclasses import dataclass
from enum        import Enum

class NeuronType(Enum):
    """
    Neurons come in four types: bias, input, hidden, output.
    """
    BIAS   = "B"
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

class InnovationType(Enum):
    """
    A structural innovation either introduces a neuron or a link.
    """
    NEW_NEURON = "N"
    NEW_LINK   = "L"

@dataclass(frozen=True)
class Innovation:
    """
    Record of a single structural innovation.

    Created once by the InnovationTracker the first time a structural
    mutation is seen, and shared (read-only) by every genome that later
    applies the same mutation.

    Public Attributes:
        innovation_id:   Unique, monotonically assigned innovation number
        innovation_type: NEW_NEURON or NEW_LINK
        from_neuron_id:  Source of the link (None for bias/input/output neurons)
        to_neuron_id:    Target of the link (None for bias/input/output neurons)
        neuron_id:       Neuron introduced by this innovation (None for links)
        neuron_type:     Type of the introduced neuron (HIDDEN for links)

    For a split (hidden neuron) innovation, 'from_neuron_id' and 'to_neuron_id'
    record the endpoints of the link that was split.
    """
    innovation_id  : int
    innovation_type: InnovationType
    from_neuron_id : int | None
    to_neuron_id   : int | None
    neuron_id      : int | None
    neuron_type    : NeuronType

    @property
    def is_link(self) -> bool:
        return self.innovation_type == InnovationType.NEW_LINK

    @property
    def is_neuron(self) -> bool:
        return self.innovation_type == InnovationType.NEW_NEURON

    @property
    def endpoints(self) -> tuple[int | None, int | None]:
        return self.from_neuron_id, self.to_neuron_id

    def __str__(self):
        if self.is_link:
            return f"Innovation #{self.innovation_id}: link {self.from_neuron_id} -> {self.to_neuron_id}"
        s = f"Innovation #{self.innovation_id}: {self.neuron_type.name.lower()} neuron {self.neuron_id}"
        if self.from_neuron_id is not None:
            s += f" (splits {self.from_neuron_id} -> {self.to_neuron_id})"
        return s
