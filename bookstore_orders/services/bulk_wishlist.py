# bookstore_orders/services/bulk_wishlist.py
import logging
import time
from typing import Iterable, List, Set

from sqlmodel import Session

from bookstore_orders.config import settings
from bookstore_orders.database import READ_COMMITTED, transaction
from bookstore_orders.exceptions import BookNotFound, InvalidRequest
from bookstore_orders.models.base import BookMembership
from bookstore_orders.models.wishlist import Wishlist
from bookstore_orders.schemas.wishlist_schemas import (
    BulkOperationDetail,
    BulkOperationResponse,
    BulkStatus,
)
from bookstore_orders.services import catalog
from bookstore_orders.services.wishlist_service import find_wishlist

logger = logging.getLogger(__name__)

ADD = "add"
REMOVE = "remove"

_now = time.monotonic


def validate_book_ids(book_ids: List[int]) -> None:
    max_items = settings.bulk_operation_max_items
    if not book_ids:
        raise InvalidRequest("At least one book ID is required")
    if len(book_ids) > max_items:
        raise InvalidRequest(f"A bulk operation accepts at most {max_items} book IDs")
    if any(book_id is None or book_id <= 0 for book_id in book_ids):
        raise InvalidRequest("Book IDs must be positive")


def _process(
    session: Session,
    wishlist: Wishlist,
    book_ids: List[int],
    action: str,
    deadline: float,
) -> List[BulkOperationDetail]:
    """
    Decide an outcome for every requested id, in request order.

    Nothing is written here; successful ids are staged and applied by the
    caller. ``members`` tracks membership as decided so far, so a repeated id
    is skipped on its second occurrence.
    """
    members: Set[int] = set(wishlist.book_ids())
    details: List[BulkOperationDetail] = []

    for index, book_id in enumerate(book_ids):
        if _now() > deadline:
            logger.error(
                f"Bulk {action} on wishlist {wishlist.id} timed out after {index} of {len(book_ids)} books"
            )
            details.extend(
                BulkOperationDetail(
                    book_id=remaining,
                    status=BulkStatus.FAILED,
                    reason="Bulk operation timed out",
                )
                for remaining in book_ids[index:]
            )
            break

        try:
            # a failed statement only rolls back this item on PostgreSQL
            with session.begin_nested():
                book = catalog.lookup_book(session, book_id)
        except BookNotFound:
            logger.warning(f"Book ID: {book_id} not found during bulk {action}")
            details.append(BulkOperationDetail(
                book_id=book_id,
                status=BulkStatus.FAILED,
                reason="Book not found",
                book_description="Unknown Book",
            ))
            continue
        except Exception as exc:
            logger.exception(f"Unexpected error while processing book ID: {book_id}")
            details.append(BulkOperationDetail(
                book_id=book_id,
                status=BulkStatus.FAILED,
                reason=f"Unexpected error: {exc}",
            ))
            continue

        description = book.title

        if action == ADD and book_id in members:
            logger.debug(f"Book ID: {book_id} already in wishlist {wishlist.id}")
            details.append(BulkOperationDetail(
                book_id=book_id,
                status=BulkStatus.SKIPPED,
                reason="Book already exists in wishlist",
                book_description=description,
            ))
            continue

        if action == REMOVE and book_id not in members:
            logger.debug(f"Book ID: {book_id} not in wishlist {wishlist.id}")
            details.append(BulkOperationDetail(
                book_id=book_id,
                status=BulkStatus.SKIPPED,
                reason="Book not in wishlist",
                book_description=description,
            ))
            continue

        if action == ADD:
            members.add(book_id)
        else:
            members.discard(book_id)

        details.append(BulkOperationDetail(
            book_id=book_id,
            status=BulkStatus.SUCCESS,
            reason="Book added successfully" if action == ADD else "Book removed successfully",
            book_description=description,
        ))

    return details


def _apply(collection: BookMembership, book_ids: Iterable[int], action: str) -> None:
    for book_id in book_ids:
        if action == ADD:
            collection.add_book(book_id)
        else:
            collection.remove_book(book_id)


def _summarize(action: str, details: List[BulkOperationDetail]) -> BulkOperationResponse:
    succeeded = sum(1 for d in details if d.status is BulkStatus.SUCCESS)
    skipped = sum(1 for d in details if d.status is BulkStatus.SKIPPED)
    failed = sum(1 for d in details if d.status is BulkStatus.FAILED)

    verb = "added" if action == ADD else "removed"

    return BulkOperationResponse(
        success=succeeded > 0 or (skipped > 0 and failed == 0),
        message=f"Processed {len(details)} books: {succeeded} {verb}, {skipped} skipped, {failed} failed",
        total_requested=len(details),
        successfully_processed=succeeded,
        skipped=skipped,
        failed=failed,
        details=details,
    )


def _run(session: Session, owner_id: int, wishlist_id: int, book_ids: List[int], action: str) -> BulkOperationResponse:
    validate_book_ids(book_ids)

    timeout = settings.bulk_operation_timeout_seconds
    deadline = _now() + timeout

    logger.info(f"Bulk {action} of {len(book_ids)} books on wishlist {wishlist_id} for user ID: {owner_id}")

    with transaction(session, READ_COMMITTED, timeout=timeout):
        wishlist = find_wishlist(session, owner_id, wishlist_id, for_update=True)

        details = _process(session, wishlist, book_ids, action, deadline)
        succeeded = [d.book_id for d in details if d.status is BulkStatus.SUCCESS]

        if succeeded:
            _apply(wishlist, succeeded, action)
            session.add(wishlist)
            session.flush()

        result = _summarize(action, details)

    logger.info(f"Bulk {action} on wishlist {wishlist_id}: {result.message}")
    return result


def bulk_add_books(session: Session, owner_id: int, wishlist_id: int, book_ids: List[int]) -> BulkOperationResponse:
    return _run(session, owner_id, wishlist_id, book_ids, ADD)


def bulk_remove_books(session: Session, owner_id: int, wishlist_id: int, book_ids: List[int]) -> BulkOperationResponse:
    return _run(session, owner_id, wishlist_id, book_ids, REMOVE)
