import math
from typing import Iterable

from reqdash.schemas.requirement import RequirementRead
from reqdash.schemas.stats import CostSummary


def normalize(value) -> float:
    """Negative, non-finite or missing figures count as zero."""
    try:
        value = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def cost_of(hours, rate) -> float:
    return normalize(hours) * normalize(rate)


def aggregate_cost(requirements: Iterable[RequirementRead], rate) -> CostSummary:
    total_hours = sum(normalize(r.estimated_time) for r in requirements)
    return CostSummary(total_hours=total_hours, total_cost=cost_of(total_hours, rate))
