"""SecretDesk Engine - HTTP client and read cache."""

from secretdesk.engine.backend_api import BackendAPI, close_backend_api, get_backend_api
from secretdesk.engine.cache import CacheKey, QueryCache, get_query_cache

__all__ = [
    "BackendAPI",
    "CacheKey",
    "QueryCache",
    "close_backend_api",
    "get_backend_api",
    "get_query_cache",
]
