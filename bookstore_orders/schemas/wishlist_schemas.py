from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class WishlistCreateRequest(BaseModel):
    name: str


class WishlistRenameRequest(BaseModel):
    name: str


class BulkBooksRequest(BaseModel):
    book_ids: List[int] = Field(
        ...,
        description="Between 1 and 50 book IDs",
        examples=[[1, 2, 3]],
    )


class WishlistBookView(BaseModel):
    book_id: int
    title: str
    author: str
    price: Decimal
    added_at: datetime


class WishlistResponse(BaseModel):
    id: int
    user_id: int
    name: str
    books: List[WishlistBookView] = Field(default_factory=list)
    book_count: int = 0
    created_at: datetime
    updated_at: datetime


class WishlistStatsResponse(BaseModel):
    wishlist_id: int
    wishlist_name: str
    total_books: int
    books_added_today: int
    last_modified: datetime
    recently_added: List[WishlistBookView] = Field(default_factory=list)


class BulkStatus(str, Enum):
    SUCCESS = "SUCCESS"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class BulkOperationDetail(BaseModel):
    book_id: int
    status: Optional[BulkStatus] = None
    reason: Optional[str] = None
    book_description: Optional[str] = None


class BulkOperationResponse(BaseModel):
    success: bool
    message: str
    total_requested: int
    successfully_processed: int
    skipped: int
    failed: int
    details: List[BulkOperationDetail]
