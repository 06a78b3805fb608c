"""
Book API - Book Store Unit Tests
================================

What:  Tests for BookStore semantics without any HTTP in the way.

What we test:
    ✅ Seed data and counter start
    ✅ Monotonic ids that ignore deletions
    ✅ In-place update keeps position and id
    ✅ Order-preserving delete
    ✅ NotFoundError for absent and unparseable (None) ids
    ✅ Concurrent creates never share an id
"""

import threading

import pytest

from bookapi.exceptions import NotFoundError
from bookapi.models.book import Book, SEED_BOOKS
from bookapi.services.book_store import BookStore


class TestBookStoreSeed:
    """Tests for the initial state of the store."""

    def test_default_seed(self):
        """A new store holds the two seed books in order."""
        store = BookStore()
        assert store.list_books() == list(SEED_BOOKS)
        assert store.list_books()[0] == Book(1, "Go Programming", "John Doe")
        assert store.list_books()[1] == Book(2, "REST APIs with Gin", "Jane Doe")

    def test_counter_starts_after_seed(self):
        """With the two seed books the first created id is 3."""
        store = BookStore()
        assert store.create_book("X", "Y").id == 3

    def test_empty_seed_starts_at_one(self):
        store = BookStore(seed=())
        assert store.count() == 0
        assert store.create_book("X", "Y").id == 1

    def test_counter_follows_highest_seed_id(self):
        store = BookStore(seed=[Book(7, "a", "b"), Book(2, "c", "d")])
        assert store.create_book("X", "Y").id == 8

    def test_reset_restores_seed(self):
        store = BookStore()
        store.create_book("X", "Y")
        store.delete_book(1)

        store.reset()

        assert store.list_books() == list(SEED_BOOKS)
        assert store.create_book("Z", "W").id == 3


class TestBookStoreCreate:
    """Tests for create_book."""

    def setup_method(self):
        self.store = BookStore()

    def test_ids_strictly_increase(self):
        ids = [self.store.create_book(f"t{i}", f"a{i}").id for i in range(5)]
        assert ids == [3, 4, 5, 6, 7]

    def test_created_book_appended_once_at_end(self):
        book = self.store.create_book("X", "Y")
        books = self.store.list_books()
        assert books[-1] == book
        assert books.count(book) == 1

    def test_deleted_ids_not_reused(self):
        book = self.store.create_book("X", "Y")
        self.store.delete_book(book.id)
        assert self.store.create_book("X", "Y").id == book.id + 1

    def test_list_returns_snapshot(self):
        """Mutating the returned list does not touch the store."""
        books = self.store.list_books()
        books.clear()
        assert self.store.count() == 2


class TestBookStoreLookup:
    """Tests for get_book."""

    def setup_method(self):
        self.store = BookStore()

    def test_get_existing(self):
        assert self.store.get_book(2).title == "REST APIs with Gin"

    def test_get_missing_raises(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.store.get_book(99)
        assert exc_info.value.message == "Book not found"
        assert exc_info.value.context["resource_id"] == 99

    def test_get_none_raises(self):
        """An unparseable path id arrives as None and matches nothing."""
        with pytest.raises(NotFoundError):
            self.store.get_book(None)

    def test_get_zero_raises(self):
        with pytest.raises(NotFoundError):
            self.store.get_book(0)


class TestBookStoreUpdate:
    """Tests for update_book."""

    def setup_method(self):
        self.store = BookStore()

    def test_update_replaces_in_place(self):
        updated = self.store.update_book(1, title="New", author="Someone")

        assert updated == Book(1, "New", "Someone")
        assert self.store.list_books()[0] == updated
        assert self.store.count() == 2

    def test_update_missing_raises(self):
        with pytest.raises(NotFoundError):
            self.store.update_book(42, title="New", author="Someone")
        assert self.store.list_books() == list(SEED_BOOKS)

    def test_update_does_not_advance_counter(self):
        self.store.update_book(2, title="Z", author="Jane Doe")
        assert self.store.create_book("X", "Y").id == 3


class TestBookStoreDelete:
    """Tests for delete_book."""

    def setup_method(self):
        self.store = BookStore()
        for i in range(3):
            self.store.create_book(f"t{i}", f"a{i}")

    def test_delete_preserves_order(self):
        self.store.delete_book(3)
        assert [book.id for book in self.store.list_books()] == [1, 2, 4, 5]

    def test_delete_removes_exactly_one(self):
        before = self.store.count()
        self.store.delete_book(1)
        assert self.store.count() == before - 1
        with pytest.raises(NotFoundError):
            self.store.get_book(1)

    def test_delete_missing_raises(self):
        with pytest.raises(NotFoundError):
            self.store.delete_book(100)
        assert self.store.count() == 5


class TestBookStoreConcurrency:
    """The lock keeps concurrent writers from losing updates."""

    def test_concurrent_creates_get_unique_ids(self):
        store = BookStore(seed=())
        per_thread = 200

        def worker():
            for _ in range(per_thread):
                store.create_book("t", "a")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [book.id for book in store.list_books()]
        assert len(ids) == 8 * per_thread
        assert sorted(ids) == list(range(1, 8 * per_thread + 1))
