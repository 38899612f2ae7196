import uuid
from decimal import Decimal

from app.repositories.product_repo import ProductRepository


def test_product_lookups(db, catalogue):
    repo = ProductRepository(db)
    assert repo.exists(catalogue["P"]) is True
    assert repo.get_price(catalogue["P"]) == Decimal("9.99")
    assert repo.get_name(catalogue["P"]) == "chips"
    assert repo.get_price(catalogue["Q"]) == Decimal("4.50")


def test_product_lookups_for_unknown_id(db, catalogue):
    repo = ProductRepository(db)
    missing = uuid.uuid4()
    assert repo.exists(missing) is False
    assert repo.get_price(missing) is None
    assert repo.get_name(missing) is None
