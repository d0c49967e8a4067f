"""
Records API — Application Package Initializer
==============================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn app.main:app`), pytest, and the
      `records-api` console script.

Architecture Note:
    The service follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Records, API description
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic models
    ├─────────────────────────────────────┤
    │        Storage Root (Persistence)   │  ← One JSON file per record
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services raise application
    exceptions which the global handlers in `app.main` turn into
    `{"error": ...}` responses.
"""

__version__ = "1.0.0"
