"""Repository for scoped secrets over the orchestration server REST API.

Every operation takes an optional workflow name. ``None`` (or ``""``) targets
the Global namespace; anything else targets that workflow's namespace.
Reads are served from the shared QueryCache; writes invalidate the cached
reads of the scope they touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import TypeAdapter, ValidationError

from secretdesk.contracts.secrets import (
    SecretExistsResponse,
    SecretRecord,
    SecretRequest,
)
from secretdesk.domain.secrets import Scope, Secret
from secretdesk.engine.backend_api import BackendAPI
from secretdesk.engine.cache import CacheKey, QueryCache, get_query_cache
from secretdesk.errors import (
    InvalidResponseError,
    RequestError,
    SecretNotFoundError,
)
from secretdesk.paths import secret_path, secrets_path

logger = logging.getLogger(__name__)

_names_adapter = TypeAdapter(list[str])


def list_key(scope: Scope) -> CacheKey:
    return ("secrets", scope.cache_key)


def detail_key(name: str, scope: Scope) -> CacheKey:
    return ("secret", name, scope.cache_key)


class SecretRepository:
    """Scoped CRUD access to secrets plus in-flight/error status."""

    def __init__(self, backend: BackendAPI, cache: QueryCache | None = None) -> None:
        self._backend = backend
        self._cache = cache if cache is not None else get_query_cache()
        self._pending = 0
        self.last_error: RequestError | None = None

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def pending_count(self) -> int:
        return self._pending

    @property
    def is_pending(self) -> bool:
        return self._pending > 0

    @contextmanager
    def _track(self) -> Iterator[None]:
        self._pending += 1
        try:
            yield
        except RequestError as exc:
            self.last_error = exc
            raise
        else:
            self.last_error = None
        finally:
            self._pending -= 1

    async def list(self, workflow_name: str | None = None) -> list[str]:
        """List secret names visible in a scope (names only, never values)."""
        scope = Scope.of(workflow_name)

        async def load() -> list[str]:
            payload = await self._backend.request_json(
                "GET", secrets_path(workflow_name)
            )
            try:
                return _names_adapter.validate_python(payload or [])
            except ValidationError as exc:
                raise InvalidResponseError("secret names") from exc

        with self._track():
            names = await self._cache.fetch(list_key(scope), load)
        return list(names)

    async def get(
        self, name: str | None, workflow_name: str | None = None
    ) -> Secret | None:
        """Fetch one secret's metadata.

        Returns None without issuing a request when ``name`` is empty, which is
        how the create-new flow asks for "no record".
        """
        if not name:
            return None
        scope = Scope.of(workflow_name)

        async def load() -> Secret:
            try:
                payload = await self._backend.request_json(
                    "GET", secret_path(name, workflow_name)
                )
            except RequestError as exc:
                if exc.status == 404:
                    raise SecretNotFoundError(name, scope.workflow_name) from exc
                raise
            if not payload:
                raise SecretNotFoundError(name, scope.workflow_name)
            try:
                record = SecretRecord.model_validate(payload)
            except ValidationError as exc:
                raise InvalidResponseError("secret") from exc
            return Secret(name=record.name, scope=scope, value=record.value)

        with self._track():
            return await self._cache.fetch(detail_key(name, scope), load)

    async def exists(self, name: str, workflow_name: str | None = None) -> bool:
        """Ask the server whether a secret exists in a scope (never cached)."""
        with self._track():
            payload = await self._backend.request_json(
                "GET", secret_path(name, workflow_name, suffix="/exists")
            )
            try:
                return SecretExistsResponse.model_validate(payload).exists
            except ValidationError as exc:
                raise InvalidResponseError("secret exists") from exc

    async def save(
        self,
        name: str,
        value: str,
        workflow_name: str | None = None,
        *,
        created_by: str | None = None,
        description: str | None = None,
    ) -> None:
        """Create or update a secret (idempotent upsert)."""
        if not name:
            raise ValueError("Secret name is required")
        body = SecretRequest(
            value=value, created_by=created_by, description=description
        )
        scope = Scope.of(workflow_name)

        with self._track():
            await self._backend.request_json(
                "PUT", secret_path(name, workflow_name), payload=body.to_payload()
            )
        self._invalidate(name, scope)
        logger.info("Saved secret '%s' (%s)", name, scope.label)

    async def delete(self, name: str, workflow_name: str | None = None) -> None:
        """Delete a secret from a scope."""
        if not name:
            raise ValueError("Secret name is required")
        scope = Scope.of(workflow_name)

        with self._track():
            await self._backend.request_json("DELETE", secret_path(name, workflow_name))
        self._invalidate(name, scope)
        logger.info("Deleted secret '%s' (%s)", name, scope.label)

    def _invalidate(self, name: str, scope: Scope) -> None:
        self._cache.invalidate(list_key(scope))
        self._cache.invalidate(detail_key(name, scope))
