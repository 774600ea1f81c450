"""Custom exception hierarchy for the bookstore analytics engine."""


class BookstoreError(Exception):
    """Base exception for all bookstore analytics errors."""


# --- Configuration ---
class ConfigError(BookstoreError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(BookstoreError):
    """Data integrity error."""


class InvariantViolation(DataError):
    """A record breaks a structural invariant (e.g., a purchase without items).

    Aggregates computed over such a record would be silently wrong, so it is
    rejected at construction time instead of being stored.
    """


# --- Money ---
class CurrencyMismatch(BookstoreError):
    """Two monetary amounts with different currencies were combined."""

    def __init__(self, left: str, right: str):
        self.left = left
        self.right = right
        super().__init__(f"Currency mismatch: {left} vs {right}")


# --- Lookup ---
class NotFoundError(BookstoreError):
    """A master record (country, book, shop, ...) does not exist."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key!r}")
