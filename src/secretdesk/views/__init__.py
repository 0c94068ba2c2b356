"""View state for console pages."""

from secretdesk.views.secret_list import SecretListView, SecretRow

__all__ = [
    "SecretListView",
    "SecretRow",
]
