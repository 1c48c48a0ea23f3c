"""
Configuration settings for the salary sync service.
Loads `.env` once and exposes the app-level knobs (server, logging, sheet names).

Integration clients read their own credentials in their `from_env()` constructors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=False)

# Convenience: allow local runs with only `.env.example` filled.
if not os.environ.get("SPREADSHEET_ID"):
    load_dotenv(dotenv_path=os.path.abspath(".env.example"), override=False)


DEFAULT_EMPLOYEE_RANGE = "Employee Data!A:D"
DEFAULT_SALARY_SHEET_TITLE = "Employee Salaries"
DEFAULT_QUIET_LOGGERS = "googleapiclient.discovery_cache,httpx,httpcore,urllib3"


@dataclass(frozen=True, slots=True)
class AppSettings:
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    quiet_loggers: tuple[str, ...] = ()
    employee_range: str = DEFAULT_EMPLOYEE_RANGE
    salary_sheet_title: str = DEFAULT_SALARY_SHEET_TITLE

    @classmethod
    def from_env(cls) -> "AppSettings":
        quiet = os.environ.get("SALARY_SYNC_QUIET_LOGGERS") or DEFAULT_QUIET_LOGGERS
        return cls(
            host=os.environ.get("SALARY_SYNC_HOST") or "127.0.0.1",
            port=int(os.environ.get("SALARY_SYNC_PORT") or "3000"),
            log_level=os.environ.get("SALARY_SYNC_LOG_LEVEL") or "INFO",
            quiet_loggers=tuple(p.strip() for p in quiet.split(",") if p.strip()),
            employee_range=os.environ.get("EMPLOYEE_RANGE") or DEFAULT_EMPLOYEE_RANGE,
            salary_sheet_title=(
                os.environ.get("SALARY_SHEET_TITLE") or DEFAULT_SALARY_SHEET_TITLE
            ),
        )
