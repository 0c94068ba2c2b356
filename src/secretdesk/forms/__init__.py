"""Form controllers for console pages."""

from secretdesk.forms.secret_form import FormSnapshot, SecretFormController

__all__ = [
    "FormSnapshot",
    "SecretFormController",
]
