from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator[Session]:
    """
    Run a unit of work in one transaction on the given Session.
    If the session already has a transaction open (autobegun by an earlier
    read, or an outer service call), the work becomes a SAVEPOINT inside it;
    otherwise a fresh transaction is begun and committed on exit.
    Any exception rolls back the work and propagates.

        with smart_transaction(db):
            line, created = repo.add_quantity(...)

    SQLite engines need the BEGIN override in app.db for the SAVEPOINT branch.
    """
    cm = session.begin_nested() if session.in_transaction() else session.begin()
    with cm:
        yield session
