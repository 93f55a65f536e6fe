"""Error types raised by the transaction services."""


class TransactionsError(Exception):
    """Base class for transaction service failures."""


class UpstreamFetchError(TransactionsError):
    """Seed source unreachable, or its payload is not a valid transaction list."""


class StoreError(TransactionsError):
    """Query or insert against the transaction store failed."""
