"""Read-only check: can the service account see the employee sheet?

Env vars:
- SPREADSHEET_ID
- GOOGLE_SA_FILE (optional)   [default: ./service-account.json]
- EMPLOYEE_RANGE (optional)   [default: Employee Data!A:D]

Run:
  python -m scripts.sheets_access_check
"""

from __future__ import annotations

import sys

from src.salary_sync.config.settings import AppSettings
from src.salary_sync.integrations.google_sheets_client import GoogleSheetsClient
from src.salary_sync.use_cases.salary_processing import filter_active_employees


def main() -> int:
    settings = AppSettings.from_env()
    try:
        client = GoogleSheetsClient.from_env()
    except ValueError as e:
        print(f"ERROR: {e}. Export SPREADSHEET_ID=<id> or add it to your .env file.", file=sys.stderr)
        return 3

    try:
        titles = [p.get("title") for p in client.list_sheets()]
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print("Set GOOGLE_SA_FILE to the path of your service-account.json", file=sys.stderr)
        return 2
    print(f"Available sheets: {titles}")

    records = client.read_records(a1_range=settings.employee_range)
    print(f"Fetched {len(records)} employee rows from {settings.employee_range!r}")
    if records:
        print(f"Headers: {list(records[0].keys())}")

    active = filter_active_employees(records)
    print(f"Active employees: {len(active)}")

    if settings.salary_sheet_title in titles:
        print(f"Target tab {settings.salary_sheet_title!r} exists and will be replaced on /process")
    else:
        print(f"Target tab {settings.salary_sheet_title!r} will be created on /process")
    return 0


if __name__ == "__main__":
    sys.exit(main())
