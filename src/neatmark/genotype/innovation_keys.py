"""
NEAT Innovation Keys Module

Canonical string keys for structural mutations. Two mutations describing
the same structural event always produce the same key, no matter which
genome applied them or in what order. Each family carries its own prefix,
so equal numeric arguments in different families never collide:

    neuron: "n:<neuron_id>"
    split:  "ns:<from_id>:<to_id>"
    link:   "l:<from_id>:<to_id>"

Functions:
    produce_key_neuron:       Key for a neuron created without a split
    produce_key_neuron_split: Key for a hidden neuron that splits a link
    produce_key_link:         Key for a new link between existing neurons
    parse_key:                Inverse of the three encoders
    check_neuron_id:          Validate a neuron identifier
"""

import numbers

from neatmark.errors import InvalidArgumentError

NEURON_PREFIX = "n"
SPLIT_PREFIX  = "ns"
LINK_PREFIX   = "l"

# number of identifiers following each prefix
_ARITY = {NEURON_PREFIX: 1, SPLIT_PREFIX: 2, LINK_PREFIX: 2}

def check_neuron_id(neuron_id, name: str = "neuron_id") -> int:
    """
    Validate a neuron identifier and return it as a plain 'int'.

    Parameters:
        neuron_id: the identifier to check
        name:      argument name, used in the error message

    Returns:
        the identifier, converted to 'int' (numpy integers are accepted)
    """
    if isinstance(neuron_id, bool) or not isinstance(neuron_id, numbers.Integral):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(neuron_id).__name__}")
    if neuron_id < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {neuron_id}")
    return int(neuron_id)

def produce_key_neuron(neuron_id: int) -> str:
    neuron_id = check_neuron_id(neuron_id)
    return f"{NEURON_PREFIX}:{neuron_id}"

def produce_key_neuron_split(from_id: int, to_id: int) -> str:
    from_id = check_neuron_id(from_id, "from_id")
    to_id   = check_neuron_id(to_id,   "to_id")
    return f"{SPLIT_PREFIX}:{from_id}:{to_id}"

def produce_key_link(from_id: int, to_id: int) -> str:
    from_id = check_neuron_id(from_id, "from_id")
    to_id   = check_neuron_id(to_id,   "to_id")
    return f"{LINK_PREFIX}:{from_id}:{to_id}"

def parse_key(key: str) -> tuple[str, tuple[int, ...]]:
    """
    Split a canonical key back into its prefix and identifiers.

    Parameters:
        key: a key produced by one of the 'produce_key_*' functions

    Returns:
        2-tuple (prefix, ids), e.g. ("l", (3, 7)) for "l:3:7"
    """
    if not isinstance(key, str):
        raise InvalidArgumentError(f"Innovation key must be a string, got {type(key).__name__}")

    prefix, *fields = key.split(":")
    if prefix not in _ARITY or len(fields) != _ARITY[prefix]:
        raise InvalidArgumentError(f"Malformed innovation key '{key}'")

    # only plain decimal digits; rules out '-1', '+1', ' 1' and friends
    if not all(f.isdigit() and f.isascii() for f in fields):
        raise InvalidArgumentError(f"Malformed innovation key '{key}'")

    ids = tuple(int(f) for f in fields)

    # reject non-canonical spellings such as "n:007"
    if ":".join([prefix, *map(str, ids)]) != key:
        raise InvalidArgumentError(f"Non-canonical innovation key '{key}'")

    return prefix, ids
