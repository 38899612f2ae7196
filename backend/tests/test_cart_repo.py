from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import StatementError

from app.errors import NotFound
from app.repositories.cart_repo import CartRepository
from app.utils.transactions import smart_transaction

T0 = datetime(2025, 8, 19, 11, 0, 0, tzinfo=timezone(timedelta(hours=8)))


def test_find_by_user_and_product(db, catalogue):
    repo = CartRepository(db)
    assert repo.find_by_user_and_product("u1", catalogue["P"]) is None
    with smart_transaction(db):
        line = repo.insert("u1", catalogue["P"], 2, T0)
    found = repo.find_by_user_and_product("u1", catalogue["P"])
    assert found.id == line.id
    assert repo.find_by_user_and_product("u2", catalogue["P"]) is None


def test_add_quantity_upserts(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        line, created = repo.add_quantity("u1", catalogue["P"], 2, T0)
    assert created is True
    with smart_transaction(db):
        again, created = repo.add_quantity("u1", catalogue["P"], 4, T0 + timedelta(seconds=1))
    assert created is False
    assert again.id == line.id
    assert again.total_qty == 6
    assert len(repo.find_all_for_user("u1")) == 1


def test_update_quantity_on_vanished_row(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        line = repo.insert("u1", catalogue["P"], 2, T0)
    with smart_transaction(db):
        repo.delete_all_for_user("u1")
    with pytest.raises(NotFound):
        with smart_transaction(db):
            repo.update_quantity(line, 9, T0)


def test_exists_and_bulk_delete(db, catalogue):
    repo = CartRepository(db)
    assert repo.exists_for_user("u1") is False
    with smart_transaction(db):
        repo.insert("u1", catalogue["P"], 1, T0)
        repo.insert("u1", catalogue["Q"], 1, T0)
    assert repo.exists_for_user("u1") is True
    with smart_transaction(db):
        assert repo.delete_all_for_user("u1") == 2
    assert repo.find_all_for_user("u1") == []


def test_timestamps_come_back_timezone_aware(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        repo.insert("u1", catalogue["P"], 1, T0)
    db.expire_all()
    [line] = repo.find_all_for_user("u1")
    assert line.created_at.tzinfo is not None
    assert line.created_at == T0
    assert line.created_at.utcoffset() == timedelta(0)


def test_naive_timestamps_are_rejected(db, catalogue):
    repo = CartRepository(db)
    with pytest.raises(StatementError):
        with smart_transaction(db):
            repo.insert("u1", catalogue["P"], 1, T0.replace(tzinfo=None))
