import logging
from dataclasses import dataclass

from pert_utils.analysis import compute_critical_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectSummary:
    total_cost: float
    total_duration: int
    critical_path: tuple[str, ...]


def compute_summary(activities) -> ProjectSummary:
    """Project-level totals, recomputed from the given activities on every call."""
    activities = list(activities)
    critical_path, total_duration = compute_critical_path(activities)
    total_cost = sum((activity.cost for activity in activities), 0.0)

    logger.debug("Summary: duration %s, cost %s, critical path %s", total_duration, total_cost, critical_path)
    return ProjectSummary(total_cost=total_cost,
                          total_duration=total_duration,
                          critical_path=tuple(critical_path))
