"""
Client-Side Cache

A small keyed cache for data the page has already fetched.
The page reads through it; writes invalidate it (revalidate-on-write).
"""

from typing import Any, Optional


class ExpenseListCache:
    """
    In-process cache of fetched results, keyed by resource path.

    A cached value of None is indistinguishable from a miss, so
    callers cache concrete results only (an empty list is fine).
    """

    def __init__(self):
        self._entries: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key, or everything when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
