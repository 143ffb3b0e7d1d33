"""Error taxonomy shared by the ordering services."""


class OrderingError(Exception):
    """Base class for errors raised by the ordering core."""


class InvalidUserInput(OrderingError):
    """Customer sent a malformed command or number."""


class InvalidQuantity(InvalidUserInput):
    """Quantity below one."""


class IndexOutOfRange(InvalidUserInput):
    """Cart position outside [1, len(cart)]."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Index {index} is not between 1 and {size}")
        self.index = index
        self.size = size


class NotFound(OrderingError):
    """Unknown restaurant, menu item or order."""


class StorageError(OrderingError):
    """Persistence call failed or timed out."""


class SubmissionFailed(StorageError):
    """Order could not be written to storage."""


class AuthError(OrderingError):
    """Missing or invalid dashboard token."""
