"""Domain models used by the data layer and form controller."""

from secretdesk.domain.secrets import (
    GLOBAL_SCOPE,
    Draft,
    FormStatus,
    Scope,
    Secret,
)

__all__ = [
    "GLOBAL_SCOPE",
    "Draft",
    "FormStatus",
    "Scope",
    "Secret",
]
