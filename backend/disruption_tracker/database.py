from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.ext.declarative import declarative_base
from disruption_tracker.config import settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create the SQLAlchemy engine for the store

    A missing connection URL is a configuration error and fails fast.
    """
    if not database_url or not database_url.strip():
        raise RuntimeError("DATABASE_URL is not set")

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs.setdefault("connect_args", {"check_same_thread": False})  # Needed for SQLite

    return create_engine(url, echo=echo, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Base class for models
Base = declarative_base()


def init_db(bind: Engine = None):
    """
    Initialize database - create all tables
    """
    bind = bind or engine
    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    # Register models on the metadata
    import disruption_tracker.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
