import re
from datetime import timezone
from typing import List, Optional

from reqdash.schemas.dashboard import ExportDocument
from reqdash.schemas.project import ProjectRead
from reqdash.schemas.requirement import RequirementRead
from reqdash.services.cost import aggregate_cost, cost_of, normalize

HEADER = ["ID", "Requirement", "Status", "Priority", "Complexity", "Author", "Date",
          "Hours", "Cost", "Cost/Hour"]

UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


def _money(value: float) -> str:
    return f"${value:.2f}"


def _number(value) -> str:
    # integral hours print as "2", not "2.0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _quote(text: str) -> str:
    return '"' + (text or "").replace('"', '""') + '"'


def _iso_date(req: RequirementRead) -> str:
    d = req.date
    if d.tzinfo is not None:
        d = d.astimezone(timezone.utc)
    return d.date().isoformat()


def export_filename(project_name: str) -> str:
    return f"requirements_{UNSAFE_FILENAME_CHARS.sub('_', project_name)}_export.csv"


def build_export(
    project: Optional[ProjectRead],
    requirements: List[RequirementRead],
    hourly_rate: Optional[float] = None,
) -> Optional[ExportDocument]:
    """Render the visible requirement set as a CSV document.

    Returns ``None`` when there is no project selected or nothing to export.
    """
    if project is None or not requirements:
        return None

    rate = project.hourly_rate if hourly_rate is None else hourly_rate
    rate = normalize(rate)
    totals = aggregate_cost(requirements, rate)

    rows: List[List[str]] = [
        ["Project Name", project.name],
        ["Hourly Rate", _money(rate)],
        [],
        HEADER,
    ]
    for req in requirements:
        rows.append([
            req.id,
            _quote(req.text),
            req.status,
            req.priority,
            req.complexity,
            req.author,
            _iso_date(req),
            _number(req.estimated_time),
            _money(cost_of(req.estimated_time, rate)),
            _money(rate),
        ])
    rows.append([])
    rows.append(["Total Hours", _number(totals.total_hours)])
    rows.append(["Total Cost", _money(totals.total_cost)])

    content = "\n".join(",".join(row) for row in rows)
    return ExportDocument(filename=export_filename(project.name), content=content)
