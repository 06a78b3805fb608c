"""
Book API - Stored Book Record
=============================

What:  The record type kept in the in-memory book store, plus the seed data
       present at process start.
How:   A frozen dataclass; updates replace the whole record at its index
       instead of mutating it, so a snapshot handed out by the store never
       changes underneath the caller.
Who:   Created and replaced by BookStore; converted to BookResponse by the
       routes.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Book:
    """
    A single book in the collection.

    Invariants:
        - id is assigned by the store from a monotonic counter
        - ids of deleted books are never handed out again
    """

    id: int
    title: str
    author: str


# Records loaded when the application starts (SEED_BOOKS=true)
SEED_BOOKS: Tuple[Book, ...] = (
    Book(id=1, title="Go Programming", author="John Doe"),
    Book(id=2, title="REST APIs with Gin", author="Jane Doe"),
)
