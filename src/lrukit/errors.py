"""lrukit exception hierarchy.

Keep this module small and dependency-free: it is imported by every other
module in the package and by tests.
"""


class LRUKitError(Exception):
    """Base exception for all lrukit errors."""


class ConfigurationError(LRUKitError, ValueError):
    """Raised for an invalid capacity or an invalid `lrukit.toml`."""


class InvariantViolationError(LRUKitError):
    """Raised when the directory and recency order disagree."""


class EmptyOrderError(LRUKitError, LookupError):
    """Raised when reading the head of an empty recency order."""


class StaleHandleError(LRUKitError, LookupError):
    """Raised when a recency order handle no longer refers to a live slot."""


class ReplayError(LRUKitError):
    """Raised for a malformed line in an operation script."""

    def __init__(self, line_no: int, message: str) -> None:
        self.line_no = line_no
        super().__init__(f"line {line_no}: {message}")
