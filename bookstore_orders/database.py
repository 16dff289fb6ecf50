import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import event, text
from sqlmodel import SQLModel, Session, create_engine

from bookstore_orders.config import settings

logger = logging.getLogger(__name__)

READ_COMMITTED = "READ COMMITTED"
REPEATABLE_READ = "REPEATABLE READ"


def enable_sqlite_savepoints(bind) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on pysqlite.

    The driver otherwise starts transactions lazily and SAVEPOINT, which
    bulk operations and cart creation rely on, does not nest correctly.
    """

    @event.listens_for(bind, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(bind, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,      # checks dead connections
    pool_recycle=1800        # refresh every 30 min
)

if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)


def create_db_and_tables(bind=None):
    from bookstore_orders import models  # noqa: F401  registers every table
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(
    session: Session,
    isolation_level: Optional[str] = READ_COMMITTED,
    timeout: Optional[float] = None,
) -> Iterator[Session]:
    """
    Run exactly one unit of work on ``session``.

    Commits when the block exits normally and rolls everything back when it
    raises. Public operations call this once each; a session that already
    has an open transaction is refused instead of joined.

    SQLite only offers SERIALIZABLE, so the requested level is left to the
    dialect default there. On PostgreSQL ``timeout`` becomes a
    transaction-local ``statement_timeout``.
    """
    if session.in_transaction():
        raise RuntimeError(
            "Session already has an open transaction; operations are not nested"
        )

    dialect = session.get_bind().dialect.name

    with session.begin():
        options = {}
        if isolation_level and dialect != "sqlite":
            options["isolation_level"] = isolation_level
        session.connection(execution_options=options)

        if timeout and dialect == "postgresql":
            session.execute(
                text(f"SET LOCAL statement_timeout = {int(timeout * 1000)}")
            )

        yield session
