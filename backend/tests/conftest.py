from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db, import_models, make_engine
from app.main import app
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository

MANILA = timezone(timedelta(hours=8))
T0 = datetime(2025, 8, 19, 9, 0, 0, tzinfo=MANILA)


@pytest.fixture
def engine():
    # fresh in-memory database per test; StaticPool keeps it on one connection
    eng = make_engine("sqlite://", poolclass=StaticPool)
    import_models()
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def catalogue(session_factory):
    """Seed one category and two products; returns their ids."""
    with session_factory() as s:
        with s.begin():
            cat = CategoryRepository(s).create("snacks", T0)
            repo = ProductRepository(s)
            p = repo.create("chips", Decimal("9.99"), str(cat.id), T0, description="salted")
            q = repo.create("soda", Decimal("4.50"), str(cat.id), T0, img_url="http://img/soda.png")
        return {"category": cat.id, "P": p.id, "Q": q.id}


@pytest.fixture
def db(session_factory, catalogue):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
