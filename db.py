from functools import lru_cache
from typing import Iterable, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

import config
from models import Base
from services.errors import ConfigurationError

_Session = sessionmaker(autocommit=False, autoflush=False)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    url = config.database_url()
    if not url:
        raise ConfigurationError("DATABASE_URL is missing")
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=config.db_pool_size(),
        max_overflow=config.db_max_overflow(),
        pool_recycle=1800,
    )


def SessionLocal() -> Session:
    return _Session(bind=get_engine())


def init_db(bind: Optional[Engine] = None, tables: Optional[Iterable] = None) -> None:
    """Create any missing tables. Safe to run repeatedly."""
    Base.metadata.create_all(
        bind=bind or get_engine(),
        tables=list(tables) if tables is not None else None,
        checkfirst=True,
    )
