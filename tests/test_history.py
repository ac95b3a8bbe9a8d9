"""Tests for the bounded history log."""

import dataclasses

import pytest

from backend.history import HistoryEntry, HistoryLog


def make_entries(count):
    return [HistoryEntry(f"{i} + 0", str(i)) for i in range(count)]


def test_empty_log():
    log = HistoryLog()
    assert len(log) == 0
    assert log.latest is None
    assert log.capacity == 30


def test_append_keeps_order():
    log = HistoryLog(5)
    for entry in make_entries(3):
        log.append(entry)
    assert [e.result for e in log] == ["0", "1", "2"]
    assert log.latest.result == "2"


def test_oldest_evicted_first():
    log = HistoryLog(3)
    for entry in make_entries(5):
        log.append(entry)
    assert [e.result for e in log] == ["2", "3", "4"]
    assert log[0].expression == "2 + 0"


def test_clear():
    log = HistoryLog(3)
    log.append(HistoryEntry("1 + 1", "2"))
    log.clear()
    assert len(log) == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        HistoryLog(0)


def test_entries_are_immutable():
    entry = HistoryEntry("1 + 1", "2")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.result = "3"
