"""Singleton declarative base.

The rest of the codebase can simply do

    from app.db.base import Base

to declare ORM models.  The gateway never creates or migrates tables in
production; ``Base.metadata`` is used by the test-suite to build a
throw-away schema and by the query builders to reference columns.
"""

from sqlalchemy.orm import declarative_base

# The global declarative base instance used by every model
Base = declarative_base()

__all__ = ["Base"]
