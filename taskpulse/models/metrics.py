"""Fleet-level metrics summary model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class PerformanceGrade(str, Enum):
    """Three-way grade derived from average ROI."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


@dataclass(frozen=True)
class Metrics:
    """Aggregate snapshot over the whole task collection."""

    total_revenue: float = 0.0
    total_time_taken: float = 0.0
    time_efficiency_pct: float = 0.0
    revenue_per_hour: float = 0.0
    average_roi: float = 0.0
    performance_grade: PerformanceGrade = PerformanceGrade.NEEDS_IMPROVEMENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            'totalRevenue': self.total_revenue,
            'totalTimeTaken': self.total_time_taken,
            'timeEfficiencyPct': self.time_efficiency_pct,
            'revenuePerHour': self.revenue_per_hour,
            'averageROI': self.average_roi,
            'performanceGrade': self.performance_grade.value,
        }

    def to_human_readable(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "=== Performance Summary ===",
            f"Total revenue: {self.total_revenue:,.2f}",
            f"Total time: {self.total_time_taken:.1f} h",
            f"Time efficiency: {self.time_efficiency_pct:.1f}%",
            f"Revenue per hour: {self.revenue_per_hour:,.2f}",
            f"Average ROI: {self.average_roi:,.2f}",
            f"Grade: {self.performance_grade.value}",
            "=" * 27,
        ]
        return "\n".join(lines)


EMPTY_METRICS = Metrics()
