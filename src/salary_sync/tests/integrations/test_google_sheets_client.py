from __future__ import annotations

import pytest

from src.salary_sync.integrations.google_sheets_client import (
    GoogleSheetsClient,
    SheetsError,
    a1_block_range,
    col_to_a1,
    rows_to_records,
)


class _FakeRequest:
    def __init__(self, service: "_FakeSheetsService", op: str, kwargs: dict) -> None:
        self._service = service
        self._op = op
        self._kwargs = kwargs

    def execute(self):
        self._service.calls.append((self._op, self._kwargs))
        result = self._service.responses.get(self._op, {})
        if isinstance(result, Exception):
            raise result
        return result


class _FakeValues:
    def __init__(self, service: "_FakeSheetsService") -> None:
        self._service = service

    def get(self, **kwargs):
        return _FakeRequest(self._service, "values.get", kwargs)

    def update(self, **kwargs):
        return _FakeRequest(self._service, "values.update", kwargs)


class _FakeSpreadsheets:
    def __init__(self, service: "_FakeSheetsService") -> None:
        self._service = service

    def get(self, **kwargs):
        return _FakeRequest(self._service, "get", kwargs)

    def batchUpdate(self, **kwargs):
        return _FakeRequest(self._service, "batchUpdate", kwargs)

    def values(self):
        return _FakeValues(self._service)


class _FakeSheetsService:
    def __init__(self, responses: dict) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict]] = []

    def spreadsheets(self):
        return _FakeSpreadsheets(self)


def _client_with(monkeypatch, service: _FakeSheetsService) -> GoogleSheetsClient:
    client = GoogleSheetsClient(spreadsheet_id="sheet-123", service_account_path="/nope.json")
    monkeypatch.setattr(client, "_build_sheets_service", lambda: service)
    return client


def test_col_to_a1() -> None:
    assert col_to_a1(0) == "A"
    assert col_to_a1(4) == "E"
    assert col_to_a1(25) == "Z"
    assert col_to_a1(26) == "AA"
    with pytest.raises(ValueError):
        col_to_a1(-1)


def test_a1_block_range_quotes_title() -> None:
    assert a1_block_range(sheet_title="Employee Salaries", n_rows=4, n_cols=5) == (
        "'Employee Salaries'!A1:E4"
    )
    assert a1_block_range(sheet_title="Bob's", n_rows=1, n_cols=1) == "'Bob''s'!A1:A1"


def test_rows_to_records_maps_by_header_position() -> None:
    rows = [
        ["id", "name", "position", "isActive"],
        ["1", "Ann", "Engineer", "TRUE"],
        ["2", "Bo"],
    ]

    records = rows_to_records(rows)
    assert records == [
        {"id": "1", "name": "Ann", "position": "Engineer", "isActive": "TRUE"},
        {"id": "2", "name": "Bo", "position": None, "isActive": None},
    ]


def test_rows_to_records_follows_header_order() -> None:
    rows = [["isActive", "id"], ["FALSE", "9"]]
    assert rows_to_records(rows) == [{"isActive": "FALSE", "id": "9"}]


def test_rows_to_records_empty_and_header_only() -> None:
    assert rows_to_records([]) == []
    assert rows_to_records([["id", "name"]]) == []


def test_read_records_uses_range(monkeypatch) -> None:
    service = _FakeSheetsService(
        {"values.get": {"values": [["id", "isActive"], ["7", "TRUE"]]}}
    )
    client = _client_with(monkeypatch, service)

    records = client.read_records(a1_range="Employee Data!A:D")
    assert records == [{"id": "7", "isActive": "TRUE"}]
    op, kwargs = service.calls[0]
    assert op == "values.get"
    assert kwargs == {"spreadsheetId": "sheet-123", "range": "Employee Data!A:D"}


def test_read_records_no_values_returns_empty(monkeypatch) -> None:
    client = _client_with(monkeypatch, _FakeSheetsService({"values.get": {}}))
    assert client.read_records(a1_range="Employee Data!A:D") == []


def test_read_records_wraps_api_errors(monkeypatch) -> None:
    service = _FakeSheetsService({"values.get": RuntimeError("403 forbidden")})
    client = _client_with(monkeypatch, service)

    with pytest.raises(SheetsError, match="Failed to retrieve employee data"):
        client.read_records(a1_range="Employee Data!A:D")


def test_recreate_sheet_deletes_existing_tab_first(monkeypatch) -> None:
    service = _FakeSheetsService(
        {
            "get": {
                "sheets": [
                    {"properties": {"sheetId": 0, "title": "Employee Data"}},
                    {"properties": {"sheetId": 77, "title": "Employee Salaries"}},
                ]
            },
            "batchUpdate": {"replies": [{"addSheet": {"properties": {"sheetId": 88}}}]},
        }
    )
    client = _client_with(monkeypatch, service)

    assert client.recreate_sheet("Employee Salaries") == 88

    batch_bodies = [kw["body"] for op, kw in service.calls if op == "batchUpdate"]
    assert batch_bodies == [
        {"requests": [{"deleteSheet": {"sheetId": 77}}]},
        {"requests": [{"addSheet": {"properties": {"title": "Employee Salaries"}}}]},
    ]


def test_recreate_sheet_handles_omitted_zero_sheet_id(monkeypatch) -> None:
    service = _FakeSheetsService(
        {
            "get": {"sheets": [{"properties": {"title": "Employee Salaries"}}]},
            "batchUpdate": {"replies": [{"addSheet": {"properties": {"sheetId": 5}}}]},
        }
    )
    client = _client_with(monkeypatch, service)

    client.recreate_sheet("Employee Salaries")
    first_batch = next(kw["body"] for op, kw in service.calls if op == "batchUpdate")
    assert first_batch == {"requests": [{"deleteSheet": {"sheetId": 0}}]}


def test_recreate_sheet_only_adds_when_missing(monkeypatch) -> None:
    service = _FakeSheetsService(
        {
            "get": {"sheets": [{"properties": {"sheetId": 0, "title": "Employee Data"}}]},
            "batchUpdate": {"replies": [{"addSheet": {"properties": {"sheetId": 9}}}]},
        }
    )
    client = _client_with(monkeypatch, service)

    assert client.recreate_sheet("Employee Salaries") == 9
    assert [op for op, _ in service.calls] == ["get", "batchUpdate"]


def test_recreate_sheet_wraps_errors(monkeypatch) -> None:
    service = _FakeSheetsService({"get": {"sheets": []}, "batchUpdate": RuntimeError("boom")})
    client = _client_with(monkeypatch, service)

    with pytest.raises(SheetsError, match="Failed to create or delete sheet."):
        client.recreate_sheet("Employee Salaries")


def test_update_values_uses_user_entered(monkeypatch) -> None:
    service = _FakeSheetsService({"values.update": {"updatedRows": 2}})
    client = _client_with(monkeypatch, service)

    values = [["id", "salary"], ["1", "100"]]
    client.update_values(a1_range="'Employee Salaries'!A1:B2", values=values)

    op, kwargs = service.calls[0]
    assert op == "values.update"
    assert kwargs["valueInputOption"] == "USER_ENTERED"
    assert kwargs["range"] == "'Employee Salaries'!A1:B2"
    assert kwargs["body"] == {"values": values}


def test_from_env_requires_spreadsheet_id(monkeypatch) -> None:
    monkeypatch.delenv("SPREADSHEET_ID", raising=False)
    with pytest.raises(ValueError, match="SPREADSHEET_ID"):
        GoogleSheetsClient.from_env()


def test_missing_service_account_file_raises(tmp_path) -> None:
    client = GoogleSheetsClient(
        spreadsheet_id="sheet-123",
        service_account_path=str(tmp_path / "missing.json"),
    )
    with pytest.raises(FileNotFoundError):
        client.list_sheets()
