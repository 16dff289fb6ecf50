from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint

from bookstore_orders.models.base import utcnow


class Wishlist(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    # unique per owner, compared case-insensitively by the service
    name: str = Field(max_length=100)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    books: List["WishlistBook"] = Relationship(
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "WishlistBook.id",
        }
    )

    def book_ids(self) -> List[int]:
        return [entry.book_id for entry in self.books]

    def has_book(self, book_id: int) -> bool:
        return any(entry.book_id == book_id for entry in self.books)

    def add_book(self, book_id: int, **kwargs) -> None:
        if not self.has_book(book_id):
            self.books.append(WishlistBook(book_id=book_id))
            self.updated_at = utcnow()

    def remove_book(self, book_id: int) -> None:
        for entry in list(self.books):
            if entry.book_id == book_id:
                self.books.remove(entry)
                self.updated_at = utcnow()


class WishlistBook(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("wishlist_id", "book_id", name="uq_wishlist_book"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    wishlist_id: Optional[int] = Field(default=None, foreign_key="wishlist.id", index=True)
    book_id: int = Field(
        sa_column=Column(
            ForeignKey("book.id", ondelete="CASCADE"),
            nullable=False
        )
    )
    added_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
