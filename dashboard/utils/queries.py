"""
Query cache for Streamlit pages.
Caches GET-style results per session token, retries failed fetches, and
invalidates cached entries after mutations.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import streamlit as st

from utils.exceptions import ApiException

logger = logging.getLogger(__name__)

QUERY_CACHE_KEY = "query_cache"
DEFAULT_RETRY = 2


class QueryClient:
    """Request cache sitting between pages and the resource services.

    ``fetch`` results are keyed by ``(token, *key)`` so entries from one login are
    never served to another. Only fetches are retried; mutations run exactly once.
    """

    def __init__(self, cache: Optional[Dict[Tuple, Any]] = None, retry: int = DEFAULT_RETRY,
                 token_source: Callable[[], Optional[str]] = lambda: None):
        self.cache = cache if cache is not None else {}
        self.retry = retry
        self.token_source = token_source

    def _scoped(self, key: Tuple) -> Tuple:
        return (self.token_source(),) + tuple(key)

    def fetch(self, key: Tuple, fn: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or call ``fn``, retrying on API errors"""
        scoped = self._scoped(key)
        if scoped in self.cache:
            return self.cache[scoped]

        attempts = self.retry + 1
        for attempt in range(1, attempts + 1):
            try:
                value = fn()
                break
            except ApiException as e:
                if attempt == attempts:
                    logger.error(f"Query {key!r} failed after {attempts} attempt(s): {e}")
                    raise
                logger.info(f"Query {key!r} failed (attempt {attempt}/{attempts}), retrying: {e}")

        self.cache[scoped] = value
        return value

    def mutate(self, fn: Callable[[], Any], invalidate: Iterable[str] = ()) -> Any:
        """Run a create/update call once, then drop cached queries it affects"""
        result = fn()
        self.invalidate(*invalidate)
        return result

    def invalidate(self, *prefixes: str) -> None:
        """Drop every cached entry whose query name is one of ``prefixes``"""
        if not prefixes:
            return
        for scoped in [k for k in self.cache if len(k) > 1 and k[1] in prefixes]:
            del self.cache[scoped]

    def clear(self) -> None:
        self.cache.clear()


def get_query_client() -> QueryClient:
    """Query client for the current browser session"""
    from utils.auth_guard import get_services

    if QUERY_CACHE_KEY not in st.session_state:
        st.session_state[QUERY_CACHE_KEY] = {}
    store = get_services().session_store
    return QueryClient(cache=st.session_state[QUERY_CACHE_KEY], token_source=store.get)
