"""Per-task derivation: ROI, priority weight and ranking order."""

from typing import Dict, Iterable, List

from ..models.task import DerivedTask, Priority, Task


PRIORITY_WEIGHTS: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def compute_roi(task: Task) -> float:
    """Revenue per hour of the task; 0 when no time was invested."""
    if task.time_taken and task.time_taken > 0:
        return task.revenue / task.time_taken
    return 0.0


def derive_one(task: Task) -> DerivedTask:
    """Project a task into its ranked view."""
    return DerivedTask(
        task=task,
        roi=compute_roi(task),
        priority_weight=PRIORITY_WEIGHTS[task.priority],
    )


def sort_all(derived: Iterable[DerivedTask]) -> List[DerivedTask]:
    """
    Order derived tasks by priority weight, then ROI, both descending.

    sorted() is stable, so equal keys keep their input order.
    """
    def sort_key(item: DerivedTask):
        return (-item.priority_weight, -item.roi)
    
    return sorted(derived, key=sort_key)


def derive_sorted(tasks: Iterable[Task]) -> List[DerivedTask]:
    """Derive every task and return the ranked view."""
    return sort_all(derive_one(task) for task in tasks)
