"""Service-layer errors, translated to HTTP responses by the routes."""


class NotFoundError(ValueError):
    """Raised when a referenced record does not exist."""


class OrderMismatchError(ValueError):
    """Raised when a submitted order does not match the collection's items."""


class StaleOrderError(ValueError):
    """Raised when a reorder was based on an outdated order version."""

    def __init__(self, expected: int, current: int):
        super().__init__(
            f"Task order changed since version {expected} (current version {current})"
        )
        self.expected = expected
        self.current = current
