from typing import Iterable

from reqdash.schemas.requirement import RequirementRead
from reqdash.schemas.stats import StatsSummary


def summarize_statuses(requirements: Iterable[RequirementRead]) -> StatsSummary:
    """Count requirements per status. Draft is only counted in ``total``."""
    summary = StatsSummary()
    for r in requirements:
        summary.total += 1
        if r.status == "Approved":
            summary.approved += 1
        elif r.status == "Review":
            summary.in_review += 1
        elif r.status == "Disapproved":
            summary.disapproved += 1
    return summary
