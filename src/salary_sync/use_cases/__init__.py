"""Use-case level logic.

These modules combine data returned by integrations (Google Sheets, salary API)
into the rows written back to the spreadsheet.

They should be:
- deterministic (apart from the injected salary client)
- unit-testable
- free of web/framework code
"""
