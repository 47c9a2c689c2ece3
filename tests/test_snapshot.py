"""Tests for read-only Snapshot views."""

from collections.abc import Mapping

import pytest

from snapkv import InvalidVersion, Snapshot, Versioned


@pytest.fixture
def history():
    s = Versioned()
    s.set("a", 1)
    s.set("b", 2)
    v1 = s.save()
    s.erase("a")
    s.set("c", 3)
    v2 = s.save()
    return s, v1, v2


class TestSnapshotMapping:
    def test_is_mapping(self, history):
        s, v1, _ = history
        snap = s.checkout(v1)
        assert isinstance(snap, Snapshot)
        assert isinstance(snap, Mapping)

    def test_as_dict(self, history):
        s, v1, v2 = history
        assert dict(s.checkout(v1)) == {"a": 1, "b": 2}
        assert dict(s.checkout(v2)) == {"b": 2, "c": 3}

    def test_getitem_missing_raises(self, history):
        s, v1, _ = history
        snap = s.checkout(v1)
        with pytest.raises(KeyError):
            snap["c"]

    def test_get_default(self, history):
        s, _, v2 = history
        snap = s.checkout(v2)
        assert snap.get("a") is None
        assert snap.get("a", "fallback") == "fallback"
        assert snap.get("b") == 2

    def test_get_ignores_store_default(self):
        s = Versioned(default_factory=list)
        snap = s.checkout(0)
        assert snap.get("nope") is None

    def test_contains_and_exists(self, history):
        s, v1, v2 = history
        assert "a" in s.checkout(v1)
        assert "a" not in s.checkout(v2)
        assert s.checkout(v2).exists("c")

    def test_len(self, history):
        s, v1, v2 = history
        assert len(s.checkout(v1)) == 2
        assert len(s.checkout(v2)) == 2

    def test_repr(self, history):
        s, v1, _ = history
        assert repr(s.checkout(v1)) == "Snapshot(version=0, size=2)"


class TestSnapshotVersions:
    def test_sealed_snapshot_is_stable(self, history):
        s, v1, _ = history
        snap = s.checkout(v1)
        s.set("a", 100)
        s.erase("b")
        s.save()
        assert dict(snap) == {"a": 1, "b": 2}

    def test_open_version_snapshot_sees_writes(self):
        s = Versioned()
        snap = s.checkout(s.max_version())
        s.set("k", "v")
        assert snap["k"] == "v"
        s.save()
        s.set("k", "later")
        assert snap["k"] == "v"

    def test_future_version_clamped(self, history):
        s, _, _ = history
        snap = s.checkout(s.max_version() + 10)
        assert snap.version == s.max_version()

    def test_negative_version_clamped(self, history):
        s, _, _ = history
        snap = s.checkout(-1)
        assert snap.version == s.max_version()
        assert dict(snap) == {"b": 2, "c": 3}

    def test_non_int_version_raises(self, history):
        s, _, _ = history
        with pytest.raises(InvalidVersion):
            s.checkout("0")

    def test_version_fixed_after_clear(self, history):
        s, _, v2 = history
        snap = s.checkout(v2)
        s.clear()
        s.set("z", 26)
        assert snap.version == v2
        assert s.max_version() < v2
        assert dict(snap) == {"z": 26}


class TestSnapshotReads:
    def test_get_uses_one_lookup(self):
        s = Versioned(default_factory=list)
        s.set("k", "v")
        snap = s.checkout(s.max_version())
        s.get = s.exists = None  # only lookup() may be used
        assert snap.get("k", "fallback") == "v"
        assert snap["k"] == "v"
        assert snap.get("nope", "fallback") == "fallback"
        with pytest.raises(KeyError):
            snap["nope"]

    def test_missing_key_ignores_store_default(self):
        s = Versioned(default_factory=list)
        s.set("k", "v")
        s.erase("k")
        snap = s.checkout(0)
        assert snap.get("k", "fallback") == "fallback"
        with pytest.raises(KeyError):
            snap["k"]
