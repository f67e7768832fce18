"""
Shared memo table for method name/signature resolution.

Entries map (MethodRef, Type) to the resolved Method, or to None when the
signature is not defined anywhere on the superclass chain. The resolution
function is pure, so the lock only guards individual lookups and inserts and
is never held while a chain is being walked. Two threads missing on the same
key may both walk the chain and both insert; they insert the same value.
The cache may recompute under contention but is never inconsistent.
"""

import threading
from typing import Dict, Optional, Tuple

from dexhierarchy.schemas import Method, MethodRef, TypeName

CacheKey = Tuple[MethodRef, TypeName]

_MISSING = object()


class ResolutionCache:
    """Lock-guarded (MethodRef, Type) -> Optional[Method] memo table."""

    def __init__(self):
        self._entries: Dict[CacheKey, Optional[Method]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def lookup(self, method_ref: MethodRef, type_name: TypeName):
        """
        Look up a memoized resolution.

        Returns:
            Tuple of (found, method). `found` distinguishes a cached negative
            result (True, None) from an absent entry (False, None).
        """
        with self._lock:
            value = self._entries.get((method_ref, type_name), _MISSING)
            if value is _MISSING:
                self.misses += 1
                return False, None
            self.hits += 1
            return True, value

    def store(self, method_ref: MethodRef, type_name: TypeName, method: Optional[Method]):
        """Record a resolution result, negative results included."""
        with self._lock:
            self._entries[(method_ref, type_name)] = method

    def store_many(self, method_ref: MethodRef, type_names, method: Optional[Method]):
        """Record the same result for every type on a walked chain segment."""
        with self._lock:
            for type_name in type_names:
                self._entries[(method_ref, type_name)] = method

    def clear(self):
        """Drop every entry. Always safe: entries are pure memos."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
