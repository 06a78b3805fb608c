"""
Book API - Book Store (In-Memory CRUD)
======================================

What:  The single shared, ordered collection of books and the counter that
       hands out ids.
How:   A plain list guarded by one threading.Lock. Every public method takes
       the lock for its whole read-modify-write, so concurrent requests can
       neither lose an update nor see a half-applied delete.
Who:   One instance per application (app.state.book_store), reached from the
       routes through the get_book_store dependency.

Semantics:
    - Ids come from a counter starting at max(seed ids) + 1; deleted ids are
      never reused.
    - create appends, update replaces in place, delete removes by index and
      keeps the order of the remaining books.
    - Lookups are a linear scan for the first matching id; the collection is
      small and unindexed.
    - A miss raises NotFoundError, which main.py renders as
      404 {"message": "Book not found"}.
"""

import logging
import threading
from typing import Iterable, List, Optional

from bookapi.exceptions import NotFoundError
from bookapi.models.book import Book, SEED_BOOKS

logger = logging.getLogger(__name__)


class BookStore:
    """
    Lock-guarded ordered collection of Book records.

    The store is framework-agnostic: it takes and returns plain values and
    Book records, and signals a missing id with NotFoundError.
    """

    def __init__(self, seed: Optional[Iterable[Book]] = SEED_BOOKS):
        self._lock = threading.Lock()
        self._books: List[Book] = []
        self._next_id = 1
        self.reset(seed)

    def reset(self, seed: Optional[Iterable[Book]] = SEED_BOOKS) -> None:
        """Replace the whole collection with `seed` and restart the counter after it."""
        books = list(seed or ())
        with self._lock:
            self._books = books
            self._next_id = max((book.id for book in books), default=0) + 1
        logger.debug("Book store reset with %d books, next id %d", len(books), self._next_id)

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def list_books(self) -> List[Book]:
        """Return a snapshot of all books in stored order."""
        with self._lock:
            return list(self._books)

    def get_book(self, book_id: Optional[int]) -> Book:
        """
        Return the first book whose id equals `book_id`.

        A `book_id` of None (an unparseable path id) matches nothing.

        Raises:
            NotFoundError: no stored book has that id
        """
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise self._not_found(book_id)
            return self._books[index]

    def create_book(self, title: str, author: str) -> Book:
        """Store a new book under the next counter value and return it."""
        with self._lock:
            book = Book(id=self._next_id, title=title, author=author)
            self._next_id += 1
            self._books.append(book)
        logger.info("Created book %d", book.id)
        return book

    def update_book(self, book_id: Optional[int], title: str, author: str) -> Book:
        """
        Replace the book with id `book_id`, keeping its position and its id.

        Raises:
            NotFoundError: no stored book has that id
        """
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise self._not_found(book_id)
            book = Book(id=book_id, title=title, author=author)
            self._books[index] = book
        logger.info("Updated book %d", book.id)
        return book

    def delete_book(self, book_id: Optional[int]) -> None:
        """
        Remove the book with id `book_id`; the remaining books keep their order.

        Raises:
            NotFoundError: no stored book has that id
        """
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise self._not_found(book_id)
            del self._books[index]
        logger.info("Deleted book %d", book_id)

    # Callers must hold self._lock
    def _index_of(self, book_id: Optional[int]) -> Optional[int]:
        if book_id is None:
            return None
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    @staticmethod
    def _not_found(book_id: Optional[int]) -> NotFoundError:
        logger.debug("Book %s not found", book_id)
        return NotFoundError(resource="book", resource_id=book_id)
