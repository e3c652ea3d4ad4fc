from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings

Base = declarative_base()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def create_db_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create an engine. SQLite connections get foreign key enforcement and a Unicode
    aware lower(), the built-in one only folds ASCII letters.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    db_engine = create_engine(url, echo=echo, future=True, **kwargs)

    if db_engine.dialect.name == "sqlite":
        @event.listens_for(db_engine, "connect")
        def _configure_sqlite_connection(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return db_engine


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Engine = engine) -> None:
    # Models must be imported so they are registered on Base
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
