"""Database engine & connection utilities.

The gateway is read-only and talks to the database through SQLAlchemy Core:
one long-lived :class:`~sqlalchemy.engine.Engine` (and therefore one
connection pool) per application, and short-lived connections checked out
for the duration of a single statement.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.sql import Executable

logger = logging.getLogger(__name__)


def _is_sqlite_memory(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str, *, echo: bool = False, pool_size: int = 10) -> Engine:
    """Create the engine backing the gateway's connection pool.

    ``max_overflow`` is disabled so that the number of simultaneously open
    connections never exceeds ``pool_size``.  In-memory SQLite uses a
    single-connection pool that takes neither argument.
    """

    url = make_url(database_url)
    logger.info("Creating database engine for %s", url.render_as_string(hide_password=True).split("@")[-1])

    kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    if not _is_sqlite_memory(url):
        kwargs.update(pool_size=pool_size, max_overflow=0)
    return create_engine(url, **kwargs)


def get_engine(request: Request) -> Engine:
    """FastAPI dependency returning the engine owned by the running app."""
    return request.app.state.engine


def fetch_rows(engine: Engine, statement: Executable) -> List[Dict[str, Any]]:
    """Execute ``statement`` and return every result row as a plain dict.

    The connection goes back to the pool when the ``with`` block exits,
    whether the statement succeeded or raised.
    """
    with engine.connect() as conn:
        result = conn.execute(statement)
        rows = [dict(row._mapping) for row in result]
    logger.debug("Fetched %d rows", len(rows))
    return rows
