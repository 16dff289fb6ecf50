"""Tests for bulk wishlist add and remove."""

import pytest
from sqlalchemy import text
from sqlmodel import select

from bookstore_orders.exceptions import InvalidRequest, WishlistNotFound
from bookstore_orders.models.wishlist import WishlistBook
from bookstore_orders.schemas.wishlist_schemas import BulkStatus
from bookstore_orders.services import bulk_wishlist, catalog, wishlist_service
from conftest import ALICE, BOB, BOOK_A, BOOK_B, BOOK_C, MISSING_BOOK, RETIRED_BOOK


@pytest.fixture
def wishlist(session):
    return wishlist_service.create_wishlist(session, ALICE, "Bulk")


def members(inspect, wishlist_id):
    return inspect(
        lambda s: sorted(
            s.exec(select(WishlistBook.book_id).where(WishlistBook.wishlist_id == wishlist_id)).all()
        )
    )


class TestBulkAdd:
    def test_partial_failure(self, session, inspect, wishlist) -> None:
        """One new, one existing and one unknown book give 1/1/1."""
        wishlist_service.add_book_to_wishlist(session, ALICE, wishlist.id, BOOK_B)

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_B, MISSING_BOOK])

        assert result.success is True
        assert result.total_requested == 3
        assert (result.successfully_processed, result.skipped, result.failed) == (1, 1, 1)
        assert result.message == "Processed 3 books: 1 added, 1 skipped, 1 failed"
        assert [d.status for d in result.details] == [
            BulkStatus.SUCCESS, BulkStatus.SKIPPED, BulkStatus.FAILED,
        ]
        assert result.details[0].book_description == "Book A"
        assert result.details[0].reason == "Book added successfully"
        assert result.details[1].book_description == "Book B"
        assert result.details[1].reason == "Book already exists in wishlist"
        assert result.details[2].reason == "Book not found"
        assert result.details[2].book_description == "Unknown Book"
        assert members(inspect, wishlist.id) == [BOOK_A, BOOK_B]

    def test_details_follow_request_order(self, session, wishlist) -> None:
        """One detail per id, in the order requested."""
        ids = [BOOK_C, MISSING_BOOK, BOOK_A, RETIRED_BOOK]

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, ids)

        assert [d.book_id for d in result.details] == ids
        assert result.total_requested == len(ids)

    def test_duplicate_ids_skip_second(self, session, inspect, wishlist) -> None:
        """A repeated id is added once and skipped after that."""
        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_A])

        assert [d.status for d in result.details] == [BulkStatus.SUCCESS, BulkStatus.SKIPPED]
        assert members(inspect, wishlist.id) == [BOOK_A]

    def test_all_skipped_is_success(self, session, wishlist) -> None:
        """Nothing to do still counts as success when nothing failed."""
        wishlist_service.add_book_to_wishlist(session, ALICE, wishlist.id, BOOK_A)

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A])

        assert result.success is True
        assert result.skipped == 1

    def test_all_failed_is_failure(self, session, inspect, wishlist) -> None:
        """A batch where nothing succeeded and something failed is unsuccessful."""
        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [MISSING_BOOK])

        assert result.success is False
        assert result.failed == 1
        assert members(inspect, wishlist.id) == []

    def test_every_outcome_has_a_reason(self, session, wishlist) -> None:
        """Each detail explains its outcome."""
        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_A, MISSING_BOOK])

        assert all(d.reason for d in result.details)

    def test_database_error_fails_only_that_item(
        self, session, inspect, wishlist, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed statement for one book does not lose the rest of the batch."""
        real_lookup = catalog.lookup_book

        def broken_for_b(session, book_id):
            if book_id == BOOK_B:
                session.exec(text("SELECT missing_column FROM book"))
            return real_lookup(session, book_id)

        monkeypatch.setattr(catalog, "lookup_book", broken_for_b)

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_B, BOOK_C])

        assert [d.status for d in result.details] == [
            BulkStatus.SUCCESS, BulkStatus.FAILED, BulkStatus.SUCCESS,
        ]
        assert result.details[1].reason.startswith("Unexpected error: ")
        assert members(inspect, wishlist.id) == [BOOK_A, BOOK_C]

    def test_unexpected_error_becomes_failed_detail(
        self, session, inspect, wishlist, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unexpected per-item error fails only that item."""
        real_lookup = catalog.lookup_book

        def flaky(session, book_id):
            if book_id == BOOK_B:
                raise RuntimeError("catalog hiccup")
            return real_lookup(session, book_id)

        monkeypatch.setattr(catalog, "lookup_book", flaky)

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_B])

        assert result.details[1].status is BulkStatus.FAILED
        assert result.details[1].reason == "Unexpected error: catalog hiccup"
        assert members(inspect, wishlist.id) == [BOOK_A]


class TestBulkValidation:
    def test_empty_list(self, session, wishlist) -> None:
        """At least one id is required."""
        with pytest.raises(InvalidRequest):
            bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [])

    def test_fifty_one_ids(self, session, inspect, wishlist) -> None:
        """More than fifty ids are rejected before any change."""
        with pytest.raises(InvalidRequest):
            bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A] * 51)

        assert members(inspect, wishlist.id) == []

    def test_fifty_ids_accepted(self, session, wishlist) -> None:
        """Exactly fifty ids is within the limit."""
        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A] * 50)

        assert result.total_requested == 50
        assert result.successfully_processed == 1
        assert result.skipped == 49

    def test_non_positive_ids(self, session, wishlist) -> None:
        """Ids must be positive."""
        with pytest.raises(InvalidRequest):
            bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, 0])

    def test_missing_wishlist_aborts(self, session) -> None:
        """An unknown wishlist aborts the whole batch."""
        with pytest.raises(WishlistNotFound):
            bulk_wishlist.bulk_add_books(session, ALICE, 4242, [BOOK_A])

    def test_foreign_wishlist_aborts(self, session, wishlist) -> None:
        """Another owner's wishlist is not found."""
        with pytest.raises(WishlistNotFound):
            bulk_wishlist.bulk_add_books(session, BOB, wishlist.id, [BOOK_A])


class TestBulkRemove:
    def test_remove_members(self, session, inspect, wishlist) -> None:
        """Members are removed, non-members skipped, unknown books failed."""
        bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_B])

        result = bulk_wishlist.bulk_remove_books(
            session, ALICE, wishlist.id, [BOOK_A, BOOK_C, MISSING_BOOK]
        )

        assert [d.status for d in result.details] == [
            BulkStatus.SUCCESS, BulkStatus.SKIPPED, BulkStatus.FAILED,
        ]
        assert result.details[0].reason == "Book removed successfully"
        assert result.details[1].reason == "Book not in wishlist"
        assert result.message == "Processed 3 books: 1 removed, 1 skipped, 1 failed"
        assert members(inspect, wishlist.id) == [BOOK_B]

    def test_remove_duplicate_ids(self, session, inspect, wishlist) -> None:
        """A repeated id is removed once and skipped after that."""
        bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A])

        result = bulk_wishlist.bulk_remove_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_A])

        assert [d.status for d in result.details] == [BulkStatus.SUCCESS, BulkStatus.SKIPPED]
        assert members(inspect, wishlist.id) == []


class TestBulkDeadline:
    def test_timeout_fails_remaining_items(
        self, session, inspect, wishlist, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Once the deadline passes the rest of the batch fails and the loop stops."""
        # deadline computed at t=0; first item at t=0, then time jumps past 60s
        ticks = iter([0.0, 0.0, 61.0])
        monkeypatch.setattr(bulk_wishlist, "_now", lambda: next(ticks, 61.0))

        result = bulk_wishlist.bulk_add_books(session, ALICE, wishlist.id, [BOOK_A, BOOK_B, BOOK_C])

        assert [d.status for d in result.details] == [
            BulkStatus.SUCCESS, BulkStatus.FAILED, BulkStatus.FAILED,
        ]
        assert all(d.reason == "Bulk operation timed out" for d in result.details[1:])
        assert result.success is True
        assert members(inspect, wishlist.id) == [BOOK_A]
