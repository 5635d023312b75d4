# tests/test_bootstrap.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskpulse.bootstrap.generator import SalesTaskGenerator
from taskpulse.bootstrap.loader import BootstrapError, TaskLoader, load_snapshot, save_snapshot
from taskpulse.models.task import Priority, Status
from taskpulse.store.task_store import TaskStore

from .fakes import T0, make_input, make_task


def _loader(path: Path, seed_count: int = 5) -> TaskLoader:
    return TaskLoader({'bootstrap': {'snapshot_path': str(path), 'seed_count': seed_count, 'seed': 7}})


def test_generator_is_deterministic() -> None:
    first = SalesTaskGenerator(seed=3).generate_tasks(20, now=T0)
    second = SalesTaskGenerator(seed=3).generate_tasks(20, now=T0)
    assert first == second
    assert len({t.id for t in first}) == 20


def test_generated_tasks_are_well_formed() -> None:
    for task in SalesTaskGenerator(seed=1).generate_tasks(100, now=T0):
        assert 100 <= task.revenue <= 10_000
        assert 1 <= task.time_taken <= 40
        assert task.created_at <= T0
        assert (task.completed_at is not None) == (task.status is Status.DONE)


def test_snapshot_round_trip(tmp_path: Path) -> None:
    tasks = [make_task("a", status=Status.DONE), make_task("b", priority=Priority.HIGH)]
    path = save_snapshot(tasks, tmp_path / "out" / "tasks.json")
    assert load_snapshot(path) == tasks


def test_snapshot_records_in_display_format(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([
        {
            "id": "1",
            "title": "Quote",
            "revenue": 1200,
            "timeTaken": 3,
            "priority": "High",
            "status": "In Progress",
            "createdAt": "2024-05-01T09:00:00.000Z",
        },
        {"title": "No id", "revenue": 10, "timeTaken": 1, "priority": "Low", "status": "Done"},
    ]))

    tasks = load_snapshot(path)

    assert tasks[0].status is Status.IN_PROGRESS
    assert tasks[0].created_at == T0
    assert tasks[1].id
    assert tasks[1].created_at is not None


def test_yaml_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "tasks.yaml"
    path.write_text(
        "- id: y1\n"
        "  title: Renewal\n"
        "  revenue: 500\n"
        "  timeTaken: 2\n"
        "  priority: Medium\n"
        "  status: Todo\n"
        "  createdAt: '2024-05-01T09:00:00Z'\n"
    )
    (task,) = load_snapshot(path)
    assert task.id == "y1"
    assert task.priority is Priority.MEDIUM


def test_missing_snapshot_falls_back_to_generation(tmp_path: Path) -> None:
    tasks = _loader(tmp_path / "missing.json", seed_count=7).load()
    assert len(tasks) == 7


def test_empty_snapshot_falls_back_to_generation(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[]")
    assert len(_loader(path, seed_count=4).load()) == 4


def test_snapshot_is_used_when_present(tmp_path: Path) -> None:
    path = save_snapshot([make_task("a")], tmp_path / "tasks.json")
    assert [t.id for t in _loader(path).load()] == ["a"]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"id": "a"}',
        '[1, 2]',
        '[{"id": "a", "priority": "Urgent"}]',
        '[{"id": "a", "createdAt": "2024-05-01T09:00:00Z"}, {"id": "a", "createdAt": "2024-05-01T09:00:00Z"}]',
    ],
)
def test_invalid_snapshot_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content)
    with pytest.raises(BootstrapError):
        _loader(path).load()


def test_store_reports_load_error(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{not json")
    store = TaskStore()
    store.bootstrap(_loader(path))
    assert store.error == "Failed to load tasks"
    assert store.tasks == ()


def test_store_bootstraps_from_generation(tmp_path: Path) -> None:
    store = TaskStore()
    store.bootstrap(_loader(tmp_path / "missing.json", seed_count=12))
    assert store.error is None
    assert len(store.tasks) == 12
    assert len(store.derived_sorted) == 12
    assert store.metrics.total_revenue == sum(t.revenue for t in store.tasks)


def test_store_created_task_survives_snapshot_round_trip(tmp_path: Path) -> None:
    store = TaskStore([])
    added = [
        store.add(make_input(title="Quote", status=Status.DONE, notes="signed")),
        store.add(make_input(title="Follow up")),
    ]
    path = save_snapshot(store.tasks, tmp_path / "tasks.json")
    assert load_snapshot(path) == added


@pytest.mark.parametrize(
    "numbers",
    ['"revenue": NaN, "timeTaken": 1', '"revenue": 10, "timeTaken": Infinity', '"revenue": -Infinity, "timeTaken": 1'],
)
def test_non_finite_numbers_are_rejected(tmp_path: Path, numbers: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text('[{"id": "a", "createdAt": "2024-05-01T09:00:00Z", ' + numbers + '}]')
    with pytest.raises(BootstrapError):
        load_snapshot(path)
