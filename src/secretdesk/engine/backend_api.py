"""Backend API for the orchestration server."""

import json
import logging
from typing import Any, Self

import aiohttp
from pydantic import TypeAdapter, ValidationError
from yarl import URL

from secretdesk.config import Settings, get_settings
from secretdesk.contracts.secrets import ErrorResponse
from secretdesk.errors import RequestError

logger = logging.getLogger(__name__)

_error_response_adapter = TypeAdapter(ErrorResponse)
_backend_api_singleton: "BackendAPI | None" = None


def _error_message(status: int, text: str) -> str:
    """Best human-readable message for a failed response."""
    try:
        payload = json.loads(text) if text else None
    except json.JSONDecodeError:
        payload = None

    if isinstance(payload, dict):
        try:
            message = _error_response_adapter.validate_python(payload).text
        except ValidationError:
            message = None
        if message:
            return message

    return text.strip() or f"HTTP {status}"


class BackendAPI:
    """Backend API for the orchestration server."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the backend API."""
        settings = settings or get_settings()
        headers = {
            "Accept": "application/json",
        }
        if settings.api_key:
            headers["Authorization"] = f"Bearer {settings.api_key}"
        self._headers = headers
        self._timeout = aiohttp.ClientTimeout(total=settings.request_timeout_seconds)
        self._session: aiohttp.ClientSession | None = None
        self._base_url = settings.base_url

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or bool(getattr(self._session, "closed", False)):
            self._session = aiohttp.ClientSession(
                headers=self._headers, timeout=self._timeout
            )
        return self._session

    async def close(self) -> None:
        session = self._session
        if session is None:
            return
        if not bool(getattr(session, "closed", False)):
            await session.close()
        self._session = None

    def url_for(self, path: str) -> URL:
        """Absolute URL for an already percent-encoded API path."""
        return URL(f"{self._base_url}{path}", encoded=True)

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises RequestError for non-2xx responses and transport failures.
        """
        session = await self._ensure_session()
        kwargs: dict[str, Any] = {}
        if payload is not None:
            kwargs["json"] = payload

        try:
            async with session.request(method, self.url_for(path), **kwargs) as resp:
                text = await resp.text()
                if 200 <= resp.status < 300:
                    logger.debug("%s %s -> %s", method, path, resp.status)
                    if not text:
                        return None
                    try:
                        return json.loads(text)
                    except json.JSONDecodeError:
                        return text

                logger.warning(
                    "%s %s failed with HTTP %s",
                    method,
                    path,
                    resp.status,
                    extra={"http_status": resp.status},
                )
                raise RequestError(
                    _error_message(resp.status, text), status=resp.status
                )

        except (aiohttp.ClientError, TimeoutError) as exc:
            logger.warning("Error calling %s %s: %s", method, path, exc)
            raise RequestError(str(exc) or type(exc).__name__) from exc


def get_backend_api() -> BackendAPI:
    """Get shared backend API client with persistent connection pooling."""
    global _backend_api_singleton
    if _backend_api_singleton is None:
        _backend_api_singleton = BackendAPI()
    return _backend_api_singleton


async def close_backend_api() -> None:
    """Close shared backend API client resources."""
    global _backend_api_singleton
    if _backend_api_singleton is None:
        return
    await _backend_api_singleton.close()
    _backend_api_singleton = None
