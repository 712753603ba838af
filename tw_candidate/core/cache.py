"""Memoization cache for parsed candidates.

Keyed by the raw token text only. Rejections are cached as None so a repeat
lookup never re-runs validation. There is no eviction: entries live until
clear() is called.

The key ignores configuration. A CandidateParser owns its own cache by
default; sharing one cache between parsers with different separators or
prefixes returns whichever result was stored first.
"""

import logging
import threading
from collections.abc import Iterator

from tw_candidate.core.types import Candidate

logger = logging.getLogger(__name__)

MISSING = object()


class CandidateCache:
    def __init__(self) -> None:
        self._entries: dict[str, Candidate | None] = {}
        self._lock = threading.Lock()

    def get(self, raw: str) -> Candidate | None:
        """Return the cached result for `raw`. Raises KeyError if never stored."""
        with self._lock:
            return self._entries[raw]

    def lookup(self, raw: str, default=MISSING):
        """Like dict.get, but None is a real cached value, so the default is a sentinel."""
        with self._lock:
            return self._entries.get(raw, default)

    def store(self, raw: str, result: Candidate | None) -> None:
        with self._lock:
            self._entries[raw] = result

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug('candidate cache cleared (%d entries)', count)

    def __contains__(self, raw: object) -> bool:
        with self._lock:
            return raw in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))
