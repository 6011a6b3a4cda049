"""Version-scoped memo table.

Memo keys are tuples of canonical strings (operation name, denoms, raw
amounts as ``str(int)``), so two value-equal requests built from different
objects hit the same entry.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any, TypeVar

import structlog

from poolquote.math.dec import Dec

logger = structlog.get_logger()

T = TypeVar("T")

MemoKey = tuple[str, ...]


def canonical_amount(amount: int | Dec) -> str:
    """Canonical string for a raw amount.

    A Dec is truncated into the raw integer domain first, so ``Dec(1000)``
    (one thousand raw units) and ``1000`` share a key.

    Raises:
        ValueError: If the amount is negative or not an int / Dec
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, Dec)):
        raise ValueError(f"Amount must be int or Dec, got {type(amount).__name__}")
    raw = amount.truncate() if isinstance(amount, Dec) else amount
    if raw < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    return str(raw)


class ValueMemo:
    """Memo table tagged with the version it was filled at.

    A read at a different version replaces the whole table before looking
    up, so entries from an older snapshot are never served.
    """

    def __init__(self) -> None:
        self._version: Hashable | None = None
        self._entries: dict[MemoKey, Any] = {}
        self.hits = 0
        self.misses = 0

    @property
    def version(self) -> Hashable | None:
        return self._version

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, version: Hashable, key: MemoKey, compute: Callable[[], T]) -> T:
        """Return the memoized value for key, computing it on a miss.

        Exceptions from compute propagate and nothing is stored.
        """
        if version != self._version:
            if self._entries:
                logger.debug(
                    "memo_invalidated",
                    old_version=self._version,
                    new_version=version,
                    dropped=len(self._entries),
                )
            self._entries = {}
            self._version = version

        entries = self._entries
        if key in entries:
            self.hits += 1
            return entries[key]

        self.misses += 1
        value = compute()
        entries[key] = value
        return value

