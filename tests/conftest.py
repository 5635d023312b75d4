# tests/conftest.py

from __future__ import annotations

import itertools

import pytest

from taskpulse.store.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def id_factory():
    counter = itertools.count(1)
    return lambda: f"t{next(counter)}"


@pytest.fixture()
def store(clock, id_factory) -> TaskStore:
    """Empty, already-bootstrapped store with deterministic ids and clock."""
    return TaskStore([], id_factory=id_factory, clock=clock)
