"""Domain exceptions mapped to JSON error responses in :mod:`app.main`."""


class AppBaseException(Exception):
    """Domain-level base exception so we can map to JSON responses easily."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class DatabaseUnavailableError(AppBaseException):
    """A query could not be completed: pool, connection or statement failure.

    The client only ever sees the generic ``detail``; the driver message is
    logged where the error is raised.
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(500, detail)
