import importlib
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import settings
from app.utils.logging import get_logger

log = get_logger("app.db", prefix="DATABASE")

Base = declarative_base()

# List of model modules we expect to import here (add new modules here)
MODEL_MODULES = [
    "app.models.category",
    "app.models.product",
    "app.models.cart",
]


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """
    pysqlite emits its own BEGIN lazily, which breaks SAVEPOINT (begin_nested).
    Take over transaction control so smart_transaction works on SQLite too.
    BEGIN IMMEDIATE takes the write lock up front, so a read followed by a
    write in one transaction queues on the busy timeout instead of failing
    the SHARED -> RESERVED upgrade with "database is locked".
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str, **engine_kwargs) -> Engine:
    """
    Build an engine with bounded waits:
      - pool_timeout for checking a connection out of the pool
      - sqlite busy timeout / postgres statement_timeout for each statement
    """
    connect_args = {}
    kwargs = {"future": True, "echo": False}
    kwargs.update(engine_kwargs)
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        connect_args["timeout"] = settings.DB_POOL_TIMEOUT_SECONDS
    else:
        kwargs.setdefault("pool_timeout", settings.DB_POOL_TIMEOUT_SECONDS)
        kwargs["pool_pre_ping"] = True
        if url.startswith("postgresql"):
            connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"

    engine = create_engine(url, connect_args=connect_args, **kwargs)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(engine)
    return engine


DATABASE_URL = settings.DATABASE_URL
engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def import_models():
    for mod in MODEL_MODULES:
        importlib.import_module(mod)


def init_db(reset: bool = False, bind: Engine = None):
    """
    Initialize DB schema.

    Behavior:
      - If reset is True or RESET_DB env var is set to 1/true/yes, drop & recreate tables.
      - Otherwise, leave existing tables in place.

    Ensure all model modules are imported so metadata is populated.
    """
    bind = bind or engine
    import_models()

    env_reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")
    if reset or env_reset:
        log.info("Resetting database (reset requested)...")
        Base.metadata.drop_all(bind=bind)

    log.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    log.info(f"Database initialized: {sorted(Base.metadata.tables.keys())}")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
