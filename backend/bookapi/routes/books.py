"""
Book API - Book Route Handlers
==============================

What:  The five CRUD endpoints under /books.
How:   `book_payload` decodes the raw body as JSON into BookPayload whatever
       the Content-Type says (a malformed body becomes 400 {"error": ...}),
       `book_id_param` parses the path id, and the work is delegated to the
       BookStore.
Who:   Any HTTP client; the generated docs under /swagger describe them.

Route Inventory:
    GET    /books           list all books
    GET    /books/{id}      get one book
    POST   /books           create a book (server assigns the id)
    PUT    /books/{id}      replace a book (path id wins over body id)
    DELETE /books/{id}      delete a book

Path ids:
    An id that is not an optionally signed decimal integer matches no book,
    so the request ends in the usual 404. With STRICT_BOOK_IDS enabled it is
    rejected with 400 instead.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Request
from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadError

from bookapi.config import Settings
from bookapi.dependencies import get_book_store, get_settings
from bookapi.exceptions import ValidationError, describe_validation_errors
from bookapi.schemas.book import (
    BookPayload,
    BookResponse,
    ErrorResponse,
    MessageResponse,
)
from bookapi.services.book_store import BookStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])

_BOOK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

_NOT_FOUND = {404: {"description": "Book not found", "model": MessageResponse}}
_BAD_BODY = {400: {"description": "Malformed request body", "model": ErrorResponse}}

# The body is read by book_payload, so its schema is declared by hand
_BOOK_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": BookPayload.model_json_schema()}},
    }
}

# A JSON null body decodes to an empty book
_PAYLOAD_ADAPTER = TypeAdapter(Optional[BookPayload])


def parse_book_id(raw: str) -> Optional[int]:
    """Return the integer value of `raw`, or None when it is not a decimal integer."""
    if _BOOK_ID_PATTERN.fullmatch(raw):
        return int(raw)
    return None


def book_id_param(
    book_id: str = Path(..., description="Book ID"),
    settings: Settings = Depends(get_settings),
) -> Optional[int]:
    """Path id dependency. None means "matches no book"."""
    parsed = parse_book_id(book_id)
    if parsed is None:
        if settings.strict_book_ids:
            raise ValidationError(message=f"invalid book id '{book_id}'", field="id")
        logger.debug("Unparseable book id %r treated as no match", book_id)
    return parsed


async def book_payload(request: Request) -> BookPayload:
    """
    Body dependency: decode the raw request body as a book.

    The Content-Type header is not consulted. An empty body, invalid JSON or
    a wrong field type raises ValidationError carrying the decoder text.
    """
    body = await request.body()
    try:
        payload = _PAYLOAD_ADAPTER.validate_json(body)
    except PayloadError as exc:
        raise ValidationError(
            message=describe_validation_errors(exc.errors(include_url=False)),
            field="body",
        )
    return payload or BookPayload()


@router.get(
    "",
    response_model=List[BookResponse],
    summary="Get all books",
    description="Retrieve the list of books",
)
async def list_books(store: BookStore = Depends(get_book_store)) -> List[BookResponse]:
    return [BookResponse.model_validate(book) for book in store.list_books()]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses=_NOT_FOUND,
    summary="Get book by ID",
    description="Retrieve a book by its ID",
)
async def get_book(
    book_id: Optional[int] = Depends(book_id_param),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    return BookResponse.model_validate(store.get_book(book_id))


@router.post(
    "",
    status_code=201,
    response_model=BookResponse,
    responses=_BAD_BODY,
    openapi_extra=_BOOK_BODY,
    summary="Create a new book",
    description="Add a new book to the collection",
)
async def create_book(
    payload: BookPayload = Depends(book_payload),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """Any id in the body is ignored; the store assigns the next one."""
    book = store.create_book(title=payload.title, author=payload.author)
    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={**_BAD_BODY, **_NOT_FOUND},
    openapi_extra=_BOOK_BODY,
    summary="Update a book",
    description="Update a book by ID",
)
async def update_book(
    payload: BookPayload = Depends(book_payload),
    book_id: Optional[int] = Depends(book_id_param),
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    """
    Replace title and author of an existing book.

    The body is bound before the lookup runs, so a malformed body is a 400
    even when the id does not exist. The stored record always keeps the
    path id, whatever id the body carries.
    """
    book = store.update_book(book_id, title=payload.title, author=payload.author)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a book",
    description="Delete a book by ID",
)
async def delete_book(
    book_id: Optional[int] = Depends(book_id_param),
    store: BookStore = Depends(get_book_store),
) -> MessageResponse:
    store.delete_book(book_id)
    return MessageResponse(message="Book deleted")
