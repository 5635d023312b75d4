"""Fleet-level metrics aggregation."""

from typing import Any, Dict, Optional, Sequence, Tuple

from ..models.metrics import EMPTY_METRICS, Metrics, PerformanceGrade
from ..models.task import Status, Task
from .derivation import compute_roi


DEFAULT_EXCELLENT_ROI = 500.0
DEFAULT_GOOD_ROI = 200.0


def compute_total_revenue(tasks: Sequence[Task]) -> float:
    """Sum of revenue over all tasks."""
    return sum(t.revenue for t in tasks)


def compute_total_time(tasks: Sequence[Task]) -> float:
    """Sum of hours over all tasks."""
    return sum(t.time_taken for t in tasks)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Share of tasks in Done status, as a percentage."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.status == Status.DONE)
    return done / len(tasks) * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """Total revenue divided by total hours; 0 when no time was logged."""
    total_time = compute_total_time(tasks)
    if total_time > 0:
        return compute_total_revenue(tasks) / total_time
    return 0.0


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """Mean of per-task ROI."""
    if not tasks:
        return 0.0
    return sum(compute_roi(t) for t in tasks) / len(tasks)


def compute_performance_grade(
    average_roi: float,
    excellent_roi: float = DEFAULT_EXCELLENT_ROI,
    good_roi: float = DEFAULT_GOOD_ROI,
) -> PerformanceGrade:
    """Map average ROI onto the grade scale using two fixed cut points."""
    if good_roi > excellent_roi:
        raise ValueError(
            f"good_roi ({good_roi}) must not exceed excellent_roi ({excellent_roi})"
        )
    if average_roi >= excellent_roi:
        return PerformanceGrade.EXCELLENT
    if average_roi >= good_roi:
        return PerformanceGrade.GOOD
    return PerformanceGrade.NEEDS_IMPROVEMENT


def grade_cut_points(grading: Optional[Dict[str, Any]] = None) -> Tuple[float, float]:
    """Read (excellent_roi, good_roi) from a grading config section and check their order."""
    grading = grading or {}
    excellent_roi = float(grading.get('excellent_roi', DEFAULT_EXCELLENT_ROI))
    good_roi = float(grading.get('good_roi', DEFAULT_GOOD_ROI))
    if good_roi > excellent_roi:
        raise ValueError(
            f"good_roi ({good_roi}) must not exceed excellent_roi ({excellent_roi})"
        )
    return excellent_roi, good_roi


def aggregate(tasks: Sequence[Task], grading: Optional[Dict[str, Any]] = None) -> Metrics:
    """Compute the metrics summary for the whole collection."""
    if not tasks:
        return EMPTY_METRICS
    
    excellent_roi, good_roi = grade_cut_points(grading)
    average_roi = compute_average_roi(tasks)
    
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(
            average_roi,
            excellent_roi=excellent_roi,
            good_roi=good_roi,
        ),
    )
