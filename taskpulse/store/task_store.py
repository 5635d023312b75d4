"""In-memory task store."""

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..engine.derivation import derive_sorted
from ..engine.metrics import aggregate, grade_cut_points
from ..models.metrics import EMPTY_METRICS, Metrics
from ..models.task import DerivedTask, Priority, Status, Task, TaskInput, field_name
from ..utils.datetime_utils import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load tasks"

# Fields an update may never touch.
_IMMUTABLE_FIELDS = frozenset({'id', 'created_at'})
_TASK_FIELDS = frozenset(f.name for f in dataclasses.fields(Task))


class DuplicateTaskError(ValueError):
    """A task with the same id is already in the collection."""


def _coerce(name: str, value: Any) -> Any:
    if name == 'priority':
        return Priority.parse(value)
    if name == 'status':
        return Status.parse(value)
    if name in ('revenue', 'time_taken'):
        return float(value)
    if name == 'completed_at' and value is not None:
        return parse_timestamp(value)
    return value


class TaskStore:
    """
    Single source of truth for the task collection.

    Every successful mutation replaces the collection and recomputes the
    ranked view and metrics before returning, so readers never see derived
    state that lags behind the collection. Tasks, derived tasks and metrics
    are immutable, so callers may keep them across later mutations.

    The undo buffer holds exactly one task: a second delete before an undo
    discards the earlier one.
    """
    
    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        config: Optional[Dict[str, Any]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the store.

        Without an initial collection the store starts in the loading state
        and waits for bootstrap(); with one, bootstrapping is already done.
        Raises ValueError if the grading cut points are out of order.
        """
        self.config = config or {}
        self.grading = self.config.get('grading', {})
        grade_cut_points(self.grading)
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or utc_now
        
        self._tasks: Tuple[Task, ...] = ()
        self._derived_sorted: Tuple[DerivedTask, ...] = ()
        self._metrics: Metrics = EMPTY_METRICS
        self._last_deleted: Optional[Task] = None
        self._error: Optional[str] = None
        
        if tasks is None:
            self._loading = True
            self._bootstrapped = False
        else:
            self._loading = False
            self._bootstrapped = True
            self._commit(self._check_unique(tasks))
    
    # ---- read side ----
    
    @property
    def tasks(self) -> Tuple[Task, ...]:
        """The live collection in insertion order."""
        return self._tasks
    
    @property
    def derived_sorted(self) -> Tuple[DerivedTask, ...]:
        """The ranked derived view of the collection."""
        return self._derived_sorted
    
    @property
    def metrics(self) -> Metrics:
        """The metrics summary of the collection."""
        return self._metrics
    
    @property
    def last_deleted(self) -> Optional[Task]:
        """The task held by the undo buffer, if any."""
        return self._last_deleted
    
    @property
    def loading(self) -> bool:
        return self._loading
    
    @property
    def error(self) -> Optional[str]:
        return self._error
    
    def get(self, task_id: str) -> Optional[Task]:
        """Look up a live task by id."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None
    
    def snapshot(self) -> Dict[str, Any]:
        """Consumer-facing state as plain data."""
        return {
            'tasks': [t.to_dict() for t in self._tasks],
            'loading': self._loading,
            'error': self._error,
            'derivedSorted': [d.to_dict() for d in self._derived_sorted],
            'metrics': self._metrics.to_dict(),
            'lastDeleted': self._last_deleted.to_dict() if self._last_deleted else None,
        }
    
    # ---- bootstrap ----
    
    def bootstrap(self, loader: Callable[[], Iterable[Task]]) -> bool:
        """
        Populate the store from loader, at most once per store.

        Returns False if bootstrap already ran. Any loader failure leaves the
        collection empty and sets the error message.
        """
        if self._bootstrapped:
            logger.debug("Bootstrap already ran; ignoring")
            return False
        self._bootstrapped = True
        self._loading = True
        
        try:
            tasks = self._check_unique(loader())
        except Exception:
            logger.exception("Bootstrap failed")
            self._error = LOAD_ERROR_MESSAGE
            self._commit([])
        else:
            self._error = None
            self._commit(tasks)
            logger.info("Bootstrapped %d tasks", len(self._tasks))
        finally:
            self._loading = False
        
        return True
    
    # ---- mutations ----
    
    def add(self, task_input: TaskInput) -> Task:
        """Append a new task; completedAt is stamped only when created as Done."""
        if task_input.id is not None:
            if self.get(task_input.id) is not None:
                raise DuplicateTaskError(f"Task {task_input.id} already exists")
            task_id = task_input.id
        else:
            task_id = self._new_id()
        
        created_at = self._clock()
        completed_at = created_at if task_input.status == Status.DONE else None
        
        task = Task(
            id=task_id,
            title=task_input.title,
            revenue=task_input.revenue,
            time_taken=task_input.time_taken,
            priority=task_input.priority,
            status=task_input.status,
            created_at=created_at,
            notes=task_input.notes,
            completed_at=completed_at,
        )
        self._commit(self._tasks + (task,))
        logger.debug("Task added id=%s status=%s", task.id, task.status.value)
        return task
    
    def update(self, task_id: str, patch: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """
        Merge patch fields over an existing task; unknown ids are ignored.

        id and createdAt are never changed. A status change to Done does not
        stamp completedAt.
        """
        index = self._index_of(task_id)
        if index is None:
            logger.debug("Update ignored; task %s not found", task_id)
            return
        
        changes = {}
        for key, value in {**(patch or {}), **fields}.items():
            name = field_name(key)
            if name not in _TASK_FIELDS:
                raise TypeError(f"Task has no field {key!r}")
            if name in _IMMUTABLE_FIELDS:
                continue
            changes[name] = _coerce(name, value)
        
        updated = dataclasses.replace(self._tasks[index], **changes)
        tasks = list(self._tasks)
        tasks[index] = updated
        self._commit(tasks)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
    
    def delete(self, task_id: str) -> None:
        """Remove a task and hold it in the undo buffer; unknown ids are ignored."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("Delete ignored; task %s not found", task_id)
            return
        
        removed = self._tasks[index]
        if self._last_deleted is not None:
            logger.debug("Discarding buffered task id=%s", self._last_deleted.id)
        self._last_deleted = removed
        self._commit(self._tasks[:index] + self._tasks[index + 1:])
        logger.debug("Task deleted id=%s", task_id)
    
    def undo_delete(self) -> None:
        """Re-append the buffered task to the end of the collection."""
        task = self._last_deleted
        if task is None:
            return
        if self.get(task.id) is not None:
            raise DuplicateTaskError(f"Cannot restore {task.id}: id is in use")
        
        self._last_deleted = None
        self._commit(self._tasks + (task,))
        logger.debug("Task restored id=%s", task.id)
    
    # ---- internals ----
    
    def _commit(self, tasks: Iterable[Task]) -> None:
        # Compute everything first, then publish together.
        new_tasks = tuple(tasks)
        derived = tuple(derive_sorted(new_tasks))
        metrics = aggregate(new_tasks, self.grading)
        self._tasks, self._derived_sorted, self._metrics = new_tasks, derived, metrics
    
    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
    
    def _new_id(self) -> str:
        while True:
            candidate = self._id_factory()
            if self.get(candidate) is None:
                return candidate
    
    @staticmethod
    def _check_unique(tasks: Iterable[Task]) -> List[Task]:
        tasks = list(tasks)
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise DuplicateTaskError(f"Duplicate task id {task.id}")
            seen.add(task.id)
        return tasks
