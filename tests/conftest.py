from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from bookstore_orders import models  # noqa: F401
from bookstore_orders.database import enable_sqlite_savepoints, get_session
from bookstore_orders.main import app
from bookstore_orders.models.book import Book
from bookstore_orders.models.user import User

ALICE = 1
BOB = 2
ADMIN = 3

BOOK_A = 1
BOOK_B = 2
BOOK_C = 3
RETIRED_BOOK = 4
MISSING_BOOK = 999


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with seeded users and books."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        session.add_all([
            User(id=ALICE, first_name="Alice", last_name="Reader", email="alice@example.com"),
            User(id=BOB, first_name="Bob", last_name="Reader", email="bob@example.com"),
            User(id=ADMIN, first_name="Ada", last_name="Admin", email="admin@example.com", role="admin"),
            Book(id=BOOK_A, title="Book A", author="Author A", price=Decimal("10.00"), stock=5),
            Book(id=BOOK_B, title="Book B", author="Author B", price=Decimal("5.00"), stock=5),
            Book(
                id=BOOK_C,
                title="Book C",
                author="Author C",
                price=Decimal("20.00"),
                offer_price=Decimal("15.00"),
                stock=0,
            ),
            Book(
                id=RETIRED_BOOK,
                title="Retired",
                author="Nobody",
                price=Decimal("1.00"),
                is_active=False,
            ),
        ])
        session.commit()

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """Session handed to the services; each call runs its own transaction."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def inspect(engine):
    """Read committed state through a separate short-lived session."""

    def run(fn):
        with Session(engine) as other:
            return fn(other)

    return run


@pytest.fixture
def client(engine):
    """Provide a test client with overridden database session."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(user_id: int, role: str = "user") -> dict:
    return {"X-User-Id": str(user_id), "X-User-Role": role}
