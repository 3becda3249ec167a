import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from app.settings import settings

_is_sqlite = settings.database_url.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    settings.database_url, echo=False, future=True, connect_args=_connect_args)
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, future=True, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def init_db():
    from infra.db import models  # noqa: F401  registers the tables
    if _is_sqlite and settings.SQLITE_PATH and not settings.DATABASE_URL:
        folder = os.path.dirname(os.path.abspath(settings.SQLITE_PATH))
        os.makedirs(folder, exist_ok=True)
    Base.metadata.create_all(bind=engine)


def reset_db():
    """Drop and recreate every table."""
    from infra.db import models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
