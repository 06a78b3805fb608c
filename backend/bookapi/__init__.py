"""
Book API - Application Package Initializer
==========================================

What: Marks the `bookapi` directory as a Python package.
Who:  Used by uvicorn (`bookapi.main:app`), pytest and the console script.

Architecture Note:
    The service follows a small layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (BookStore, CRUD)      │  ← Lock-guarded in-memory list
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Stored record + JSON contracts
    └─────────────────────────────────────┘

    Routes translate HTTP into store calls; the store knows nothing about HTTP
    and raises application exceptions that main.py maps to status codes.
"""

__version__ = "1.0.0"
