"""Wire contracts for the orchestration server REST API."""

from secretdesk.contracts.secrets import (
    ErrorResponse,
    SecretExistsResponse,
    SecretRecord,
    SecretRequest,
)

__all__ = [
    "ErrorResponse",
    "SecretExistsResponse",
    "SecretRecord",
    "SecretRequest",
]
