"""Async client for the external salary-lookup API.

One `httpx.AsyncClient` is shared by every lookup issued inside an
`async with SalaryApiClient(...)` block, so a batch of lookups can be
dispatched concurrently over the same connection pool.

It does NOT know about spreadsheets or employee records.
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_SALARY_API_BASE_URL = (
    "https://sleeve-stars-automation-2-32676f7875b4.herokuapp.com/welcome/salaryData"
)


class SalaryApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_env(cls) -> "SalaryApiClient":
        base_url = os.environ.get("SALARY_API_BASE_URL") or DEFAULT_SALARY_API_BASE_URL
        raw_timeout = os.environ.get("SALARY_HTTP_TIMEOUT_SECONDS", "").strip()
        timeout_seconds = float(raw_timeout) if raw_timeout else None
        return cls(base_url=base_url, timeout_seconds=timeout_seconds)

    async def __aenter__(self) -> "SalaryApiClient":
        self._client = httpx.AsyncClient(
            timeout=self._timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_salary(self, employee_id: str | None, *, access_token: str) -> Any:
        """Return the `salary` field for one employee.

        Raises `httpx.HTTPError` on transport failures and `RuntimeError` on
        replies with status >= 400.
        """

        if self._client is None:
            raise RuntimeError("SalaryApiClient must be used inside 'async with'")

        resp = await self._client.get(
            self._base_url,
            params={"empid": employee_id if employee_id is not None else ""},
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            },
        )
        if resp.status_code >= 400:
            raise RuntimeError(f"Request failed with status code {resp.status_code}")
        payload = resp.json()
        return payload.get("salary") if isinstance(payload, dict) else None
