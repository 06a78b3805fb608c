"""
Book API - Request Dependencies
===============================

What:  FastAPI dependencies that hand per-application state to route handlers.
How:   create_app() stores the BookStore and the Settings on app.state; these
       functions read them back from the incoming request.
Who:   Injected into route handlers via FastAPI's Depends() system.

Example usage in a route:
    @router.get("/books")
    async def list_books(store: BookStore = Depends(get_book_store)):
        return store.list_books()
"""

from fastapi import Request

from bookapi.config import Settings
from bookapi.services.book_store import BookStore


def get_book_store(request: Request) -> BookStore:
    """The BookStore owned by the application serving this request."""
    return request.app.state.book_store


def get_settings(request: Request) -> Settings:
    """The Settings the application was created with."""
    return request.app.state.settings
