"""Exceptions raised by the secret data layer and form controller."""


class SecretDeskError(Exception):
    """Base exception for SecretDesk errors."""

    pass


class FormValidationError(SecretDeskError):
    """Raised when a draft fails local validation; never reaches the network."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class RequestError(SecretDeskError):
    """Raised when the remote API rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class SecretNotFoundError(RequestError):
    """Raised when a secret's metadata cannot be found in its scope."""

    def __init__(self, name: str, workflow_name: str | None = None) -> None:
        self.name = name
        self.workflow_name = workflow_name
        where = f"workflow '{workflow_name}'" if workflow_name else "global scope"
        super().__init__(f"Secret '{name}' not found in {where}", status=404)


class InvalidResponseError(RequestError):
    """Raised when a successful response carries a body that does not parse."""

    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__("Invalid response from server")


__all__ = [
    "FormValidationError",
    "InvalidResponseError",
    "RequestError",
    "SecretDeskError",
    "SecretNotFoundError",
]
