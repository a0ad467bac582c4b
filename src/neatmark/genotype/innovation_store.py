"""
NEAT Innovation Store Module

This module implements the InnovationStore, the thread-safe mapping from
canonical key to innovation record that backs the InnovationTracker.

Classes:
    InnovationStore: Lock-guarded key -> Innovation mapping with check-and-set insertion
"""

import threading
from types  import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping

from neatmark.errors              import ArchiveError
from neatmark.genotype.innovation import Innovation

class InnovationStore:
    """
    Owns every innovation record, keyed by canonical key.

    All mutation goes through 'insert_if_absent()' or 'insert_group_if_absent()',
    which run the full check / build / insert sequence while holding a single
    reentrant lock. Records are never replaced or removed once inserted.

    Public Methods:
        lookup(key):                          Return the record for 'key', or None
        insert_if_absent(key, factory):       Return the existing record, or build and insert a new one
        insert_group_if_absent(key, factory): Same, inserting several records at once
        snapshot():                           Read-only copy of the whole mapping
        restore(records):               Bulk-load records into an empty store
    """

    def __init__(self):
        self._lock   : threading.RLock        = threading.RLock()
        self._records: dict[str, Innovation] = {}

    def lookup(self, key: str) -> Innovation | None:
        """
        Return the record stored under 'key', or None.
        Does not take the lock: a record is only ever visible once fully built.
        """
        return self._records.get(key)

    def insert_if_absent(self, key: str,
                         factory: Callable[[], Innovation]) -> tuple[Innovation, bool]:
        """
        Atomically look up 'key', creating its record on a miss.

        Parameters:
            key:     canonical key of the innovation
            factory: called (under the lock, at most once) to build the new record

        Returns:
            2-tuple (record, created); 'created' is True only for the one
            caller that actually inserted the record
        """
        with self._lock:
            existing = self._records.get(key)
            if existing is not None:
                return existing, False

            # if the factory raises, nothing is inserted
            innovation = factory()
            self._records[key] = innovation
            return innovation, True

    def insert_group_if_absent(self, key: str,
                               factory: Callable[[], list[tuple[str, Innovation]]]) -> tuple[Innovation, bool]:
        """
        Like 'insert_if_absent()', but the factory builds several records at once,
        e.g. a split together with the links replacing the split link.
        Either all of them are inserted or, if the factory raises, none.

        Parameters:
            key:     canonical key of the main innovation; decides hit or miss
            factory: returns (key, record) pairs, the main one first;
                     called under the lock, and only on a miss

        Returns:
            2-tuple (main record, created)
        """
        with self._lock:
            existing = self._records.get(key)
            if existing is not None:
                return existing, False

            records = factory()
            if not records or records[0][0] != key:
                raise ValueError(f"factory must return the record for '{key}' first")
            for record_key, innovation in records:
                self._records.setdefault(record_key, innovation)
            return records[0][1], True

    def snapshot(self) -> Mapping[str, Innovation]:
        """
        Return a read-only view of a copy of all records, in insertion order.
        """
        with self._lock:
            return MappingProxyType(dict(self._records))

    def restore(self, records: Iterable[tuple[str, Innovation]]):
        """
        Load previously persisted records into an empty store.

        Parameters:
            records: (key, innovation) pairs, in creation order
        """
        with self._lock:
            if self._records:
                raise ArchiveError("Cannot restore into a non-empty innovation store")
            loaded = {}
            for key, innovation in records:
                if key in loaded:
                    raise ArchiveError(f"Duplicate innovation key '{key}'")
                loaded[key] = innovation
            self._records.update(loaded)

    def items(self) -> list[tuple[str, Innovation]]:
        with self._lock:
            return list(self._records.items())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[Innovation]:
        return iter(self.snapshot().values())
