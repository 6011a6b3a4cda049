"""Pool quote error classes.

Every error carries a ``recoverable`` flag: recoverable errors can succeed on
retry once a collaborator catches up (a snapshot arrives, a currency gets
registered); the rest are fatal to the snapshot or call that raised them.
"""

from typing import ClassVar


class PoolQuoteError(Exception):
    """Base error for pool quoting."""

    recoverable: ClassVar[bool] = False


class UnsupportedPoolType(PoolQuoteError):
    """Snapshot discriminator is unknown or disagrees with its asset list."""

    def __init__(self, type_url: str, reason: str | None = None) -> None:
        self.type_url = type_url
        message = f"Unsupported pool type: {type_url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidPoolSnapshot(PoolQuoteError):
    """Snapshot failed wire-format validation."""

    pass


class PoolIdMismatch(PoolQuoteError):
    """Snapshot belongs to a different pool than the store tracks."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Store tracks pool {expected}, got snapshot for pool {actual}")


class PoolNotLoaded(PoolQuoteError):
    """No snapshot has been installed yet."""

    recoverable = True


class UnknownCurrency(PoolQuoteError, LookupError):
    """Denom has no registered currency metadata."""

    recoverable = True

    def __init__(self, denom: str) -> None:
        self.denom = denom
        super().__init__(f"Unknown currency: {denom}")


class PoolAssetNotFound(PoolQuoteError, LookupError):
    """Denom is not one of the pool's assets."""

    def __init__(self, pool_id: str, denom: str) -> None:
        self.pool_id = pool_id
        self.denom = denom
        super().__init__(f"Pool {pool_id} doesn't have the pool asset for {denom}")
