"""Integration adapters for external systems (Google Sheets, token and salary APIs).

Keep these modules small and testable:
- No FastAPI request/response objects
- No orchestration concerns
- Pure IO + parsing helpers
"""
