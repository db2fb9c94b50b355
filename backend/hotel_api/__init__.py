"""
Hotel Listings API: Application Package Initializer
=====================================================

What: Marks the `hotel_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Validation, Orchestration)│  ← Business rules, file area
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Pydantic hotel/room models
    ├─────────────────────────────────────┤
    │   Record Store (Persistence)        │  ← One JSON file, full reload
    └─────────────────────────────────────┘

    Routes handle status codes and multipart parsing; services can be tested
    without HTTP; the record store is injected per request so tests can point
    it at a temporary file.
"""

__version__ = "1.0.0"
