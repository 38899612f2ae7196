import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import text

from app.repositories.cart_aggregator import CartAggregator
from app.repositories.cart_repo import CartRepository
from app.utils.transactions import smart_transaction

T0 = datetime(2025, 8, 19, 10, 0, 0, tzinfo=timezone(timedelta(hours=8)))


def test_empty_cart_aggregates_to_nothing(db, catalogue):
    assert CartAggregator(db).aggregate_for_user("nobody") == []


def test_one_row_per_product_with_product_fields(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        repo.insert("u1", catalogue["P"], 2, T0)
        repo.insert("u1", catalogue["Q"], 3, T0)
        repo.insert("u2", catalogue["P"], 7, T0)

    views = CartAggregator(db).aggregate_for_user("u1")
    by_product = {v.product_id: v for v in views}
    assert set(by_product) == {catalogue["P"], catalogue["Q"]}

    chips = by_product[catalogue["P"]]
    assert chips.product_name == "chips"
    assert chips.description == "salted"
    assert chips.price == Decimal("9.99")
    assert chips.total_qty == 2
    assert chips.sub_total_price == Decimal("19.98")

    soda = by_product[catalogue["Q"]]
    assert soda.img_url == "http://img/soda.png"
    assert soda.sub_total_price == Decimal("13.50")


def test_output_ordered_by_product_id(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        repo.insert("u1", catalogue["Q"], 1, T0)
        repo.insert("u1", catalogue["P"], 1, T0)
    views = CartAggregator(db).aggregate_for_user("u1")
    ids = [v.product_id for v in views]
    assert ids == sorted(ids, key=lambda u: u.hex)


def test_duplicate_lines_are_summed(db, catalogue):
    # rows written before the unique index existed
    db.execute(text("DROP INDEX uq_carts_user_product"))
    repo = CartRepository(db)
    early = repo.insert("u1", catalogue["P"], 2, T0)
    late = repo.insert("u1", catalogue["P"], 3, T0 + timedelta(minutes=10))
    db.commit()

    [view] = CartAggregator(db).aggregate_for_user("u1")
    assert view.total_qty == 5
    assert view.id == early.id
    assert view.created_at == T0
    assert view.created_at.tzinfo is not None
    assert view.updated_at == late.updated_at
    assert view.sub_total_price == Decimal("49.95")


def test_lines_for_deleted_products_are_dropped(db, catalogue):
    repo = CartRepository(db)
    with smart_transaction(db):
        repo.insert("u1", uuid.uuid4(), 1, T0)
    assert CartAggregator(db).aggregate_for_user("u1") == []
