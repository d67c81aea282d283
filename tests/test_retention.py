"""Tests for RetentionPolicy."""

import pytest

from artifact_deploy.core.retention import RetentionPolicy


class TestSelect:
    @pytest.mark.parametrize("keep,expected", [
        (0, ["1", "2", "3"]),
        (1, ["1", "2"]),
        (2, ["1"]),
        (3, []),
        (10, []),
    ])
    def test_oldest_first(self, keep, expected):
        assert RetentionPolicy(keep).select(["1", "2", "3"]) == expected

    def test_negative_keep(self):
        with pytest.raises(ValueError):
            RetentionPolicy(-1)


class TestApply:
    def test_removes_oldest_and_never_current(self, memory_store):
        for version in ("1.0", "1.1", "1.2", "2.0"):
            memory_store.add_release(version, {"f": version})
        memory_store.current = "1.0"

        removed = memory_store.prune(keep=1)

        assert removed == ["1.1", "1.2"]
        assert list(memory_store.files) == ["1.0", "2.0"]
        assert memory_store.current == "1.0"

    def test_keep_zero_leaves_only_current(self, memory_store):
        for version in ("1", "2", "3"):
            memory_store.add_release(version, {})
        memory_store.current = "3"

        RetentionPolicy(0).apply(memory_store)

        assert list(memory_store.files) == ["3"]

    def test_nothing_to_remove(self, memory_store):
        memory_store.add_release("1", {})
        memory_store.current = "1"

        assert memory_store.prune(keep=2) == []
        assert memory_store.removed == []

    def test_logs_deletions(self, memory_store, caplog):
        caplog.set_level("INFO", logger="artifact_deploy.core.retention")
        for version in ("1", "2", "3", "4"):
            memory_store.add_release(version, {})
        memory_store.current = "4"

        memory_store.prune(keep=2)

        assert "Deleting 1 of 3 old versions (keeping: 2)" in caplog.text
        assert "Version 1 deleted" in caplog.text
