"""Dialect-aware SQL expressions used by the query builders."""

from sqlalchemy import Float
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class duration_seconds(FunctionElement):
    """Length of the interval ``end - start`` expressed in seconds.

    Usage: ``duration_seconds(table.c.start_date, table.c.end_date)``.
    """

    name = "duration_seconds"
    type = Float()
    inherit_cache = True


def _bounds(element, compiler, **kw):
    start, end = list(element.clauses)
    return compiler.process(start, **kw), compiler.process(end, **kw)


@compiles(duration_seconds)
def _duration_seconds_default(element, compiler, **kw):
    start, end = _bounds(element, compiler, **kw)
    return "EXTRACT(EPOCH FROM (%s - %s))" % (end, start)


@compiles(duration_seconds, "sqlite")
def _duration_seconds_sqlite(element, compiler, **kw):
    start, end = _bounds(element, compiler, **kw)
    return "((julianday(%s) - julianday(%s)) * 86400.0)" % (end, start)
