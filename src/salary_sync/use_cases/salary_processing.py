"""Employee salary processing.

This is the "middle layer" between:
- Integrations (reading/writing Google Sheets, calling the salary API)
- The HTTP endpoint that sequences them

No direct network calls here: the salary lookup is delegated to the client
passed in by the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol

logger = logging.getLogger(__name__)

ACTIVE_FLAG = "TRUE"
FAILED_SALARY = "0"
SALARY_SHEET_HEADER = ["id", "name", "position", "isActive", "salary"]


class SalaryLookup(Protocol):
    async def fetch_salary(self, employee_id: str | None, *, access_token: str) -> Any: ...


@dataclass(frozen=True, slots=True)
class EmployeeRecord:
    id: str | None
    name: str | None
    position: str | None
    is_active: str | None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "EmployeeRecord":
        return cls(
            id=row.get("id"),
            name=row.get("name"),
            position=row.get("position"),
            is_active=row.get("isActive"),
        )

    @property
    def active(self) -> bool:
        return self.is_active == ACTIVE_FLAG


@dataclass(frozen=True, slots=True)
class SalaryResult:
    employee: EmployeeRecord
    salary: Any
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.employee.id,
            "name": self.employee.name,
            "position": self.employee.position,
            "isActive": self.employee.is_active,
            "salary": self.salary,
        }
        if self.error is not None:
            out["error"] = self.error
        return out

    def as_sheet_row(self) -> list[Any]:
        row = self.as_dict()
        return ["" if row[k] is None else row[k] for k in SALARY_SHEET_HEADER]


def filter_active_employees(
    records: Iterable[Mapping[str, Any]],
) -> list[EmployeeRecord]:
    """Keep only records whose `isActive` cell is exactly "TRUE"."""

    employees = [EmployeeRecord.from_mapping(r) for r in records]
    return [e for e in employees if e.active]


async def _fetch_one(
    employee: EmployeeRecord,
    *,
    salary_api: SalaryLookup,
    access_token: str,
) -> SalaryResult:
    try:
        salary = await salary_api.fetch_salary(employee.id, access_token=access_token)
    except Exception as e:
        logger.error(f"Error fetching salary for {employee.id}: {e}")
        return SalaryResult(
            employee=employee,
            salary=FAILED_SALARY,
            error=f"Failed to fetch salary: {e}",
        )

    logger.info(f"Salary API response for {employee.id} received")
    return SalaryResult(employee=employee, salary=salary)


async def collect_salaries(
    employees: list[EmployeeRecord],
    *,
    salary_api: SalaryLookup,
    access_token: str,
) -> list[SalaryResult]:
    """Look up every employee's salary concurrently and wait for all of them.

    A failed lookup degrades that row (salary "0" plus an error message) and
    never aborts the batch. Results keep the input order.
    """

    results = await asyncio.gather(
        *(
            _fetch_one(e, salary_api=salary_api, access_token=access_token)
            for e in employees
        )
    )
    failed = sum(1 for r in results if r.error is not None)
    logger.info(f"Fetched salaries for {len(results)} employees ({failed} failed)")
    return list(results)


def build_sheet_values(results: Iterable[SalaryResult]) -> list[list[Any]]:
    """Header row followed by one row per result, in the sheet's column order."""

    return [list(SALARY_SHEET_HEADER), *(r.as_sheet_row() for r in results)]
