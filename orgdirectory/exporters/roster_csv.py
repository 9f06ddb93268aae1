from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable

import pandas as pd

from orgdirectory.domain import Company, Employee

COLUMNS = ["id", "name", "department", "department_label", "status", "company_id", "company_name", "created_at"]


def roster_frame(employees: Iterable[Employee], companies: Iterable[Company]) -> pd.DataFrame:
    names = {company.id: company.name for company in companies}
    records = []
    for employee in employees:
        records.append({
            "id": employee.id,
            "name": employee.name,
            "department": employee.department.value,
            "department_label": employee.department.label,
            "status": employee.status.value,
            "company_id": employee.company_id or "",
            "company_name": names.get(employee.company_id or "", ""),
            "created_at": employee.created_at.isoformat(),
        })
    return pd.DataFrame(records, columns=COLUMNS)


def export_roster(target: Path | IO[str], employees: Iterable[Employee], companies: Iterable[Company]) -> None:
    """Write the roster to a file path or an open text buffer."""

    df = roster_frame(employees, companies)
    if isinstance(target, Path):
        target.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(target, index=False)
