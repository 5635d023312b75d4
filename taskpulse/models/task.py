"""Task, task input and derived task data models."""

import math
from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..utils.datetime_utils import format_timestamp, parse_timestamp


class Priority(str, Enum):
    """Task priority."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, raw: Any) -> "Priority":
        """Parse a priority from its display value or member name."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValueError(f"Unknown priority: {raw!r}")


class Status(str, Enum):
    """Task lifecycle status."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: Any) -> "Status":
        """Parse a status; accepts "In Progress", "InProgress" and "in_progress"."""
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().replace(" ", "").replace("_", "").replace("-", "").lower()
        for member in cls:
            if key == member.value.replace(" ", "").lower():
                return member
        raise ValueError(f"Unknown status: {raw!r}")


# camelCase record keys used by snapshots
_WIRE_KEYS = {
    'time_taken': 'timeTaken',
    'created_at': 'createdAt',
    'completed_at': 'completedAt',
}


def field_name(key: str) -> str:
    """Map a camelCase record key to the Task attribute name."""
    for attr, wire in _WIRE_KEYS.items():
        if key == wire:
            return attr
    return key


def _number(record: Mapping[str, Any], name: str) -> float:
    value = float(_read(record, name, 0) or 0)
    if not math.isfinite(value):
        raise ValueError(f"{_WIRE_KEYS.get(name, name)} must be a finite number, got {value}")
    return value


def _read(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    if name in record:
        return record[name]
    return record.get(_WIRE_KEYS.get(name, name), default)


@dataclass(frozen=True)
class Task:
    """A unit of sales work."""

    id: str
    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: Status
    created_at: datetime
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a snapshot record; absent optional fields are omitted."""
        record: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, datetime):
                value = format_timestamp(value)
            record[_WIRE_KEYS.get(f.name, f.name)] = value
        return record

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], *, default_id: Optional[str] = None,
                  default_created_at: Optional[datetime] = None) -> "Task":
        """Build a task from a snapshot record (camelCase or snake_case keys)."""
        task_id = _read(record, 'id') or default_id
        if not task_id:
            raise ValueError("Task record has no id")

        created_raw = _read(record, 'created_at')
        created_at = parse_timestamp(created_raw) if created_raw else default_created_at
        if created_at is None:
            raise ValueError(f"Task record {task_id} has no createdAt")

        completed_raw = _read(record, 'completed_at')
        notes = _read(record, 'notes')

        return cls(
            id=str(task_id),
            title=str(_read(record, 'title', '')),
            revenue=_number(record, 'revenue'),
            time_taken=_number(record, 'time_taken'),
            priority=Priority.parse(_read(record, 'priority', Priority.MEDIUM)),
            status=Status.parse(_read(record, 'status', Status.TODO)),
            created_at=created_at,
            notes=None if notes is None else str(notes),
            completed_at=parse_timestamp(completed_raw) if completed_raw else None,
        )


@dataclass(frozen=True)
class TaskInput:
    """Creation payload; id is generated when absent, timestamps always are."""

    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: Status
    notes: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Coerce string priority/status values to the enumerations."""
        object.__setattr__(self, 'priority', Priority.parse(self.priority))
        object.__setattr__(self, 'status', Status.parse(self.status))


@dataclass(frozen=True)
class DerivedTask:
    """Read-only projection of a task with ranking fields."""

    task: Task
    roi: float
    priority_weight: int

    def __getattr__(self, name: str) -> Any:
        # Expose the underlying task fields directly (derived.title, ...).
        if name == 'task':
            raise AttributeError(name)
        return getattr(self.task, name)

    def to_dict(self) -> Dict[str, Any]:
        """Task record plus roi and priorityWeight."""
        record = self.task.to_dict()
        record['roi'] = self.roi
        record['priorityWeight'] = self.priority_weight
        return record
