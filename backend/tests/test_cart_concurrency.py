import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from app.db import Base, import_models, make_engine
from app.errors import CartError
from app.models.cart import CartLine
from app.repositories.product_repo import ProductRepository
from app.services.cart_service import CartService
from app.utils.transactions import smart_transaction

T0 = datetime(2025, 8, 19, 12, 0, 0, tzinfo=timezone(timedelta(hours=8)))
WORKERS = 8


@pytest.fixture
def file_sessions(tmp_path):
    # real file so every worker gets its own connection and SQLite locking applies
    eng = make_engine(f"sqlite:///{tmp_path / 'cart.db'}")
    import_models()
    Base.metadata.create_all(bind=eng)
    yield sessionmaker(bind=eng, autoflush=False, expire_on_commit=False)
    eng.dispose()


def test_concurrent_adds_merge_into_one_line(file_sessions):
    with file_sessions() as s:
        with smart_transaction(s):
            product = ProductRepository(s).create("chips", Decimal("9.99"), "snacks", T0)
    pid = product.id

    barrier = threading.Barrier(WORKERS)
    errors = []

    def add(_):
        s = file_sessions()
        try:
            barrier.wait()
            CartService(s).add_to_cart("u1", pid, 1)
        except CartError as e:
            errors.append(e)
        finally:
            s.close()

    with ThreadPoolExecutor(max_workers=WORKERS) as ex:
        list(ex.map(add, range(WORKERS)))

    assert errors == []
    with file_sessions() as s:
        rows = s.query(CartLine).filter(CartLine.user_id == "u1").all()
        assert len(rows) == 1
        assert rows[0].total_qty == WORKERS
        [view] = CartService(s).get_cart_for_user("u1")
        assert view.sub_total_price == Decimal("9.99") * WORKERS
