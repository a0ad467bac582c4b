"""
Unit tests for saving and loading innovation archives.
"""

import numpy as np
import pytest

from neatmark.errors                      import ArchiveError
from neatmark.genotype.innovation_tracker import InnovationTracker
from neatmark.pool.population             import Population
from neatmark.run.archive                 import RECORD_DTYPE, load_innovations, save_innovations


@pytest.fixture
def archive_path(tmp_path):
    return tmp_path / "innovations.npz"


@pytest.fixture
def evolved_tracker(tracker):
    """Seeded tracker after a few structural mutations."""
    split = tracker.find_split_innovation(0, 0)
    tracker.find_link_innovation(2, split.neuron_id)
    tracker.find_split_innovation(1, split.neuron_id)
    return tracker


# ============================================================================
# Test: round trip
# ============================================================================

class TestArchiveRoundTrip:
    """Test that a reload reproduces keys and innovation numbers."""

    def test_keys_and_records_preserved(self, evolved_tracker, archive_path, make_config):
        save_innovations(evolved_tracker, archive_path)

        restored = load_innovations(archive_path, Population(make_config(2, 1)))

        assert dict(restored.get_innovations()) == dict(evolved_tracker.get_innovations())
        assert list(restored.get_innovations()) == list(evolved_tracker.get_innovations())

    def test_restored_tracker_is_not_reseeded(self, evolved_tracker, archive_path, make_config):
        save_innovations(evolved_tracker, archive_path)
        restored = load_innovations(archive_path, Population(make_config(2, 1)))

        assert len(restored) == len(evolved_tracker)

    def test_new_innovations_do_not_clash(self, evolved_tracker, archive_path, make_config):
        save_innovations(evolved_tracker, archive_path)
        population = Population(make_config(2, 1))
        restored   = load_innovations(archive_path, population)

        used_innovations = {i.innovation_id for i in restored}
        used_neurons     = {i.neuron_id for i in restored if i.neuron_id is not None}

        split = restored.find_split_innovation(2, 0)

        assert split.innovation_id > max(used_innovations)
        assert split.neuron_id not in used_neurons

    def test_existing_innovations_found_after_reload(self, evolved_tracker, archive_path, make_config):
        original = evolved_tracker.find_split_innovation(0, 0)
        save_innovations(evolved_tracker, archive_path)

        restored = load_innovations(archive_path, Population(make_config(2, 1)))

        assert restored.find_split_innovation(0, 0) == original
        assert len(restored) == len(evolved_tracker)

    def test_counters_saved_beyond_records(self, population, archive_path, make_config):
        """Identifiers consumed without producing a record are not handed out again."""
        tracker = population.innovations
        population.assign_gene_id()
        population.assign_innovation_id()
        save_innovations(tracker, archive_path)

        fresh = Population(make_config(2, 1))
        load_innovations(archive_path, fresh)

        assert fresh.next_gene_id == population.next_gene_id
        assert fresh.next_innovation_id == population.next_innovation_id

    def test_empty_tracker(self, archive_path, make_config):
        save_innovations(InnovationTracker(), archive_path)

        restored = load_innovations(archive_path, Population(make_config(2, 1)))

        assert len(restored) == 0


# ============================================================================
# Test: corrupt archives
# ============================================================================

class TestArchiveErrors:
    """Test rejection of unusable archives."""

    def _write(self, path, keys, rows, counters=(0, 0), version=1):
        np.savez(path,
                 version  = np.array(version),
                 keys     = np.array(keys, dtype=str),
                 records  = np.array(rows, dtype=RECORD_DTYPE),
                 counters = np.array(counters, dtype=np.int64))

    def test_missing_file(self, tmp_path, population):
        with pytest.raises(ArchiveError, match="Cannot read"):
            load_innovations(tmp_path / "missing.npz", population)

    def test_unsupported_version(self, archive_path, population):
        self._write(archive_path, [], [], version=99)
        with pytest.raises(ArchiveError, match="version"):
            load_innovations(archive_path, population)

    def test_key_does_not_match_record(self, archive_path, population):
        # a link record stored under a neuron key
        self._write(archive_path, ["n:0"], [(0, "L", True, 0, 1, False, 0, "H")])
        with pytest.raises(ArchiveError, match="does not match"):
            load_innovations(archive_path, population)

    def test_endpoints_do_not_match_key(self, archive_path, population):
        self._write(archive_path, ["l:0:2"], [(0, "L", True, 0, 1, False, 0, "H")])
        with pytest.raises(ArchiveError, match="does not match"):
            load_innovations(archive_path, population)

    def test_malformed_key(self, archive_path, population):
        self._write(archive_path, ["l:0"], [(0, "L", True, 0, 1, False, 0, "H")])
        with pytest.raises(ArchiveError, match="Bad archived innovation"):
            load_innovations(archive_path, population)

    def test_duplicate_innovation_ids(self, archive_path, population):
        self._write(archive_path, ["l:0:1", "l:1:0"],
                    [(0, "L", True, 0, 1, False, 0, "H"),
                     (0, "L", True, 1, 0, False, 0, "H")])
        with pytest.raises(ArchiveError, match="duplicate"):
            load_innovations(archive_path, population)

    def test_duplicate_keys(self, archive_path, population):
        self._write(archive_path, ["l:0:1", "l:0:1"],
                    [(0, "L", True, 0, 1, False, 0, "H"),
                     (1, "L", True, 0, 1, False, 0, "H")])
        with pytest.raises(ArchiveError, match="Duplicate innovation key"):
            load_innovations(archive_path, population)

    def test_mismatched_lengths(self, archive_path, population):
        self._write(archive_path, ["l:0:1", "l:1:0"], [(0, "L", True, 0, 1, False, 0, "H")])
        with pytest.raises(ArchiveError, match="unexpected layout"):
            load_innovations(archive_path, population)

    def test_non_scalar_version(self, archive_path, population):
        self._write(archive_path, [], [], version=[1, 2])
        with pytest.raises(ArchiveError, match="Cannot read"):
            load_innovations(archive_path, population)

    def test_unknown_key_family(self, archive_path, population, monkeypatch):
        self._write(archive_path, ["l:0:1"], [(0, "L", True, 0, 1, False, 0, "H")])
        monkeypatch.setattr("neatmark.run.archive.parse_key", lambda key: ("x", (0, 1)))

        with pytest.raises(ArchiveError, match="Unknown innovation key family"):
            load_innovations(archive_path, population)


# ============================================================================
# Test: counter resume
# ============================================================================

class TestArchiveCounters:
    """Test that loading never lets an archived identifier be handed out again."""

    def test_counters_below_records_are_raised(self, archive_path, make_config):
        # records use innovation numbers 0, 1 and neuron 4, but the counters claim nothing was used
        np.savez(archive_path,
                 version  = np.array(1),
                 keys     = np.array(["l:0:1", "ns:0:0"], dtype=str),
                 records  = np.array([(0, "L", True, 0, 1, False, 0, "H"),
                                      (1, "N", True, 0, 0, True, 4, "H")], dtype=RECORD_DTYPE),
                 counters = np.array([0, 0], dtype=np.int64))
        population = Population(make_config(2, 1))

        restored = load_innovations(archive_path, population)
        link  = restored.find_link_innovation(5, 6)
        split = restored.find_split_innovation(2, 0)

        assert link.innovation_id == 2
        assert split.neuron_id == 5

    def test_counters_above_records_are_kept(self, archive_path, make_config):
        np.savez(archive_path,
                 version  = np.array(1),
                 keys     = np.array(["l:0:1"], dtype=str),
                 records  = np.array([(0, "L", True, 0, 1, False, 0, "H")], dtype=RECORD_DTYPE),
                 counters = np.array([40, 30], dtype=np.int64))
        population = Population(make_config(2, 1))

        load_innovations(archive_path, population)

        assert population.next_gene_id == 40
        assert population.next_innovation_id == 30
