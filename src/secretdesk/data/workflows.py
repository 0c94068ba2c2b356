"""Workflow names used to populate scope selectors."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from secretdesk.engine.backend_api import BackendAPI
from secretdesk.engine.cache import QueryCache, get_query_cache
from secretdesk.errors import InvalidResponseError
from secretdesk.paths import WORKFLOW_NAMES_PATH

logger = logging.getLogger(__name__)

WORKFLOW_NAMES_KEY = ("workflowNames",)

_names_and_versions_adapter = TypeAdapter(dict[str, Any])


class WorkflowCatalog:
    """Read-only, ordered list of workflow names known to the server."""

    def __init__(self, backend: BackendAPI, cache: QueryCache | None = None) -> None:
        self._backend = backend
        self._cache = cache if cache is not None else get_query_cache()

    async def names(self) -> list[str]:
        async def load() -> list[str]:
            payload = await self._backend.request_json("GET", WORKFLOW_NAMES_PATH)
            try:
                versions = _names_and_versions_adapter.validate_python(payload or {})
            except ValidationError as exc:
                raise InvalidResponseError("workflow names") from exc
            names = sorted(versions)
            logger.debug("Loaded %d workflow names", len(names))
            return names

        return list(await self._cache.fetch(WORKFLOW_NAMES_KEY, load))
