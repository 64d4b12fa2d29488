# Engine, session factory and declarative base shared by models,
# data-access clients and routes. Tests swap engine/SessionLocal in place.

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from tenantscope.core.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(db_url: str, *, echo: bool = False):
    connect_args = {"check_same_thread": False} if _is_sqlite(db_url) else {}
    engine = create_engine(db_url, connect_args=connect_args, echo=echo, future=True)
    if _is_sqlite(db_url):
        # SQLite ignores ON DELETE RESTRICT unless foreign keys are switched on.
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
