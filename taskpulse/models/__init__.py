"""Task and metrics data models."""

from .task import DerivedTask, Priority, Status, Task, TaskInput
from .metrics import Metrics, PerformanceGrade

__all__ = ['Task', 'TaskInput', 'DerivedTask', 'Priority', 'Status', 'Metrics', 'PerformanceGrade']
