from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..config import DATABASE_URL


def make_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Create an engine for ``database_url`` or the configured ``DB_URL``."""
    url = database_url or DATABASE_URL
    return create_engine(url, echo=echo, future=True)


def get_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # Candidates stay readable after a confirm commits
        future=True,
    )
