"""Secrets REST contract payloads."""

from pydantic import BaseModel, ConfigDict, Field


class SecretRequest(BaseModel):
    """Request body to create or update a secret (PUT /secrets/{name})."""

    model_config = ConfigDict(populate_by_name=True)

    value: str = Field(min_length=1)
    created_by: str | None = Field(default=None, alias="createdBy")
    description: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Serialize for the wire, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SecretRecord(BaseModel):
    """Secret metadata as returned by the detail endpoint."""

    name: str
    value: str | None = None


class SecretExistsResponse(BaseModel):
    """Existence check response (GET /secrets/{name}/exists)."""

    exists: bool


class ErrorResponse(BaseModel):
    """Error body returned by the orchestration server."""

    message: str | None = None
    detail: str | None = None
    status: int | None = None

    @property
    def text(self) -> str | None:
        return self.message or self.detail


__all__ = [
    "ErrorResponse",
    "SecretExistsResponse",
    "SecretRecord",
    "SecretRequest",
]
