"""
NEAT Innovation Archive Module

Saves an innovation set to disk and loads it back. Crossover depends on
innovation numbers being stable, so a reload reproduces every canonical
key and every innovation number exactly, and moves the population's
counters past all identifiers found in the archive.

The archive is a numpy '.npz' file holding:
    keys:     canonical keys, in creation order
    records:  structured array, one row per innovation (see RECORD_DTYPE)
    counters: [next neuron ID, next innovation number] at save time

Functions:
    save_innovations: Write the innovations of a tracker to an archive
    load_innovations: Rebuild a tracker from an archive
"""

import logging
import numpy as np
from pathlib import Path
from typing  import TYPE_CHECKING

from neatmark.errors                    import ArchiveError, InvalidArgumentError
from neatmark.genotype.innovation       import Innovation, InnovationType, NeuronType
from neatmark.genotype.innovation_keys  import LINK_PREFIX, NEURON_PREFIX, SPLIT_PREFIX, parse_key
from neatmark.genotype.innovation_tracker import InnovationTracker

if TYPE_CHECKING:
    from neatmark.pool.population import PopulationLike

logger = logging.getLogger(__name__)

ARCHIVE_VERSION = 1

# Absent endpoints / neurons are flagged by 'has_endpoints' / 'has_neuron';
# the matching ID columns are then meaningless and stored as 0.
RECORD_DTYPE = np.dtype([('innovation_id',   np.int64),
                         ('innovation_type', 'U1'),
                         ('has_endpoints',   np.bool_),
                         ('from_neuron_id',  np.int64),
                         ('to_neuron_id',    np.int64),
                         ('has_neuron',      np.bool_),
                         ('neuron_id',       np.int64),
                         ('neuron_type',     'U1')])

def save_innovations(tracker: InnovationTracker, path: str | Path):
    """
    Write all innovations known to 'tracker' to 'path'.

    Parameters:
        tracker: the tracker to save
        path:    destination file (numpy appends '.npz' if missing)
    """
    items   = list(tracker.get_innovations().items())
    records = np.array([_to_row(innov) for _, innov in items], dtype=RECORD_DTYPE)
    keys    = np.array([key for key, _ in items], dtype=str)
    counters = np.array(_next_identifiers(tracker.population, records), dtype=np.int64)

    np.savez(path,
             version  = np.array(ARCHIVE_VERSION),
             keys     = keys,
             records  = records,
             counters = counters)

    logger.info(f"Saved {len(items)} innovations to '{path}'")

def load_innovations(path: str | Path, population: 'PopulationLike') -> InnovationTracker:
    """
    Rebuild an InnovationTracker from an archive written by 'save_innovations()'.
    The tracker is not re-seeded, and 'population' (if it supports 'resume()')
    has its counters moved past every identifier in the archive.

    Parameters:
        path:       archive file
        population: the population the restored tracker will draw identifiers from

    Returns:
        the restored tracker, attached to 'population'
    """
    try:
        with np.load(path, allow_pickle=False) as archive:
            version  = int(archive['version'])
            keys     = archive['keys']
            records  = archive['records']
            counters = archive['counters']
    except (OSError, KeyError, TypeError, ValueError) as e:
        raise ArchiveError(f"Cannot read innovation archive '{path}': {e}") from e

    if version != ARCHIVE_VERSION:
        raise ArchiveError(f"Unsupported innovation archive version {version}")
    if records.dtype != RECORD_DTYPE or len(keys) != len(records) or counters.shape != (2,):
        raise ArchiveError(f"Innovation archive '{path}' has an unexpected layout")

    pairs = [(str(key), _to_innovation(str(key), row)) for key, row in zip(keys, records)]

    innovation_ids = [innov.innovation_id for _, innov in pairs]
    if len(set(innovation_ids)) != len(innovation_ids):
        raise ArchiveError(f"Innovation archive '{path}' contains duplicate innovation numbers")

    tracker = InnovationTracker(population, seed=False)
    tracker.store.restore(pairs)

    # never resume below an identifier that a record already uses
    from_records = _next_identifiers(None, records)
    next_gene_id       = max(int(counters[0]), from_records[0])
    next_innovation_id = max(int(counters[1]), from_records[1])
    if hasattr(population, 'resume'):
        population.resume(next_gene_id, next_innovation_id)
    else:
        logger.warning("Population cannot resume its counters; identifiers may clash with the archive")

    logger.info(f"Loaded {len(pairs)} innovations from '{path}'")
    return tracker

def _next_identifiers(population, records: np.ndarray) -> tuple[int, int]:
    """
    Lowest neuron ID and innovation number guaranteed unused by the saved records.
    """
    next_gene_id       = 0
    next_innovation_id = 0
    if len(records):
        next_innovation_id = int(records['innovation_id'].max()) + 1
        neurons = records['neuron_id'][records['has_neuron']]
        if len(neurons):
            next_gene_id = int(neurons.max()) + 1

    # the population may already be further along than its innovations show
    if population is not None and hasattr(population, 'next_gene_id'):
        next_gene_id       = max(next_gene_id,       population.next_gene_id)
        next_innovation_id = max(next_innovation_id, population.next_innovation_id)

    return next_gene_id, next_innovation_id

def _to_row(innov: Innovation) -> tuple:
    has_endpoints = innov.from_neuron_id is not None
    has_neuron    = innov.neuron_id is not None
    return (innov.innovation_id,
            innov.innovation_type.value,
            has_endpoints,
            innov.from_neuron_id if has_endpoints else 0,
            innov.to_neuron_id   if has_endpoints else 0,
            has_neuron,
            innov.neuron_id if has_neuron else 0,
            innov.neuron_type.value)

def _to_innovation(key: str, row) -> Innovation:
    """
    Convert one archived row back into an Innovation, checking that it agrees with its key.
    """
    try:
        prefix, ids = parse_key(key)
        innov = Innovation(
            innovation_id   = int(row['innovation_id']),
            innovation_type = InnovationType(str(row['innovation_type'])),
            from_neuron_id  = int(row['from_neuron_id']) if row['has_endpoints'] else None,
            to_neuron_id    = int(row['to_neuron_id'])   if row['has_endpoints'] else None,
            neuron_id       = int(row['neuron_id'])      if row['has_neuron']    else None,
            neuron_type     = NeuronType(str(row['neuron_type'])))
    except (InvalidArgumentError, ValueError) as e:
        raise ArchiveError(f"Bad archived innovation '{key}': {e}") from e

    if prefix == NEURON_PREFIX:
        consistent = (innov.is_neuron and innov.neuron_type != NeuronType.HIDDEN
                      and innov.from_neuron_id is None and ids == (innov.neuron_id,))
    elif prefix == SPLIT_PREFIX:
        consistent = (innov.is_neuron and innov.neuron_type == NeuronType.HIDDEN
                      and innov.neuron_id is not None and ids == innov.endpoints)
    elif prefix == LINK_PREFIX:
        consistent = innov.is_link and innov.neuron_id is None and ids == innov.endpoints
    else:
        raise ArchiveError(f"Unknown innovation key family in '{key}'")

    if not consistent:
        raise ArchiveError(f"Archived innovation does not match its key '{key}': {innov}")
    return innov
