"""Data access for secrets and the workflow catalog."""

from secretdesk.data.secrets import SecretRepository, detail_key, list_key
from secretdesk.data.workflows import WorkflowCatalog

__all__ = [
    "SecretRepository",
    "WorkflowCatalog",
    "detail_key",
    "list_key",
]
