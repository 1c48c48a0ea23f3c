"""Salary Processing API Router.

This module handles the `/process` endpoint: read employees from Google Sheets,
look up each active employee's salary, and write the merged rows back to a
fresh tab in the same spreadsheet.
"""

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.salary_sync.config.settings import AppSettings
from src.salary_sync.integrations.google_sheets_client import (
    GoogleSheetsClient,
    a1_block_range,
)
from src.salary_sync.integrations.salary_client import SalaryApiClient
from src.salary_sync.integrations.token_client import AccessTokenClient
from src.salary_sync.use_cases.salary_processing import (
    SALARY_SHEET_HEADER,
    build_sheet_values,
    collect_salaries,
    filter_active_employees,
)

logger = logging.getLogger(__name__)

salary_router = APIRouter(tags=["Salary Processing"])


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------


class ProcessSalariesResponse(BaseModel):
    message: str
    salaries: list[dict[str, Any]]


class ProcessSalariesError(BaseModel):
    message: str
    error: str | None = None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@salary_router.get(
    "/process",
    response_model=ProcessSalariesResponse,
    responses={404: {"model": ProcessSalariesError}, 500: {"model": ProcessSalariesError}},
)
async def process_employee_salaries():
    """Sync active employees' salaries into the salary tab.

    Stages run strictly in order; only the salary lookups run concurrently.
    Any failure outside a single salary lookup aborts the request with 500.
    """

    try:
        settings = AppSettings.from_env()

        # 1. Employee rows from the source range
        sheets = GoogleSheetsClient.from_env()
        records = sheets.read_records(a1_range=settings.employee_range)
        if not records:
            return JSONResponse(
                status_code=404,
                content={"message": "No employee data found in the Google Sheet."},
            )

        # 2. Active employees only
        active = filter_active_employees(records)
        logger.info(f"{len(active)} of {len(records)} employees are active")

        # 3. Access token for the salary API
        access_token = AccessTokenClient.from_env().get_access_token()

        # 4. Salary lookups, one per active employee
        async with SalaryApiClient.from_env() as salary_api:
            results = await collect_salaries(
                active,
                salary_api=salary_api,
                access_token=access_token,
            )

        # 5. Fresh tab with the processed rows
        title = settings.salary_sheet_title
        sheets.recreate_sheet(title)
        values = build_sheet_values(results)
        sheets.update_values(
            a1_range=a1_block_range(
                sheet_title=title,
                n_rows=len(values),
                n_cols=len(SALARY_SHEET_HEADER),
            ),
            values=values,
        )
    except Exception as e:
        logger.exception(f"Error in /process route: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "An error occurred while processing employee salaries",
                "error": str(e),
            },
        )

    logger.info(f"Salary processing complete: {len(results)} rows written to {title!r}")

    return ProcessSalariesResponse(
        message="Employee salary processing complete",
        salaries=[r.as_dict() for r in results],
    )


@salary_router.get("/health")
async def health():
    return {"status": "ok"}
