"""SecretDesk - scoped secret management for workflow orchestration."""

from secretdesk._version import __version__
from secretdesk.data import SecretRepository, WorkflowCatalog
from secretdesk.domain import GLOBAL_SCOPE, Draft, FormStatus, Scope, Secret
from secretdesk.engine import BackendAPI, QueryCache
from secretdesk.errors import (
    FormValidationError,
    RequestError,
    SecretDeskError,
    SecretNotFoundError,
)
from secretdesk.forms import FormSnapshot, SecretFormController
from secretdesk.views import SecretListView, SecretRow

__all__ = [
    "BackendAPI",
    "Draft",
    "FormSnapshot",
    "FormStatus",
    "FormValidationError",
    "GLOBAL_SCOPE",
    "QueryCache",
    "RequestError",
    "Scope",
    "Secret",
    "SecretDeskError",
    "SecretFormController",
    "SecretListView",
    "SecretNotFoundError",
    "SecretRepository",
    "SecretRow",
    "WorkflowCatalog",
    "__version__",
]
