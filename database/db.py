from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core import config

Base = declarative_base()


def database_url(path: Optional[Path] = None) -> str:
    database = Path(path) if path else Path(config.DB_PATH)
    if not database.parent.exists():
        database.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{database}"


def get_engine(path: Optional[Path] = None) -> Engine:
    return create_engine(
        database_url(path),
        echo=False,
        future=True
    )


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True
    )


def create_tables(engine: Engine) -> None:
    # registra as tabelas no metadata antes de criar
    import models.records  # noqa: F401

    Base.metadata.create_all(engine)


def reset_database(path: Optional[Path] = None) -> Engine:
    database = Path(path) if path else Path(config.DB_PATH)
    if database.exists():
        database.unlink()
    engine = get_engine(database)
    create_tables(engine)
    return engine


__all__ = [
    "Base",
    "database_url",
    "get_engine",
    "get_session_factory",
    "create_tables",
    "reset_database",
]
