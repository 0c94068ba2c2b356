"""Core data models for scoped secrets and the form that edits them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from secretdesk.errors import FormValidationError

GLOBAL_CACHE_KEY = "global"


@dataclass(frozen=True)
class Scope:
    """
    Namespace a secret belongs to.

    ``Scope()`` is the Global namespace; ``Scope.workflow("billing")`` is the
    namespace of a single workflow. Empty workflow names collapse to Global.
    """

    workflow_name: str | None = None

    def __post_init__(self) -> None:
        if not self.workflow_name:
            object.__setattr__(self, "workflow_name", None)

    @classmethod
    def of(cls, workflow_name: str | None) -> Scope:
        return cls(workflow_name or None)

    @classmethod
    def workflow(cls, workflow_name: str) -> Scope:
        if not workflow_name:
            raise ValueError("workflow_name must be non-empty for a workflow scope")
        return cls(workflow_name)

    @property
    def is_global(self) -> bool:
        return self.workflow_name is None

    @property
    def cache_key(self) -> str:
        """Key segment used for cached reads in this scope."""
        return self.workflow_name or GLOBAL_CACHE_KEY

    @property
    def label(self) -> str:
        if self.workflow_name is None:
            return "Global"
        return f"Workflow: {self.workflow_name}"


GLOBAL_SCOPE = Scope()


@dataclass(frozen=True)
class Secret:
    """A named secret within a scope. ``value`` is only set when the API returns it."""

    name: str
    scope: Scope = GLOBAL_SCOPE
    value: str | None = None

    @property
    def key(self) -> tuple[Scope, str]:
        return (self.scope, self.name)


@dataclass
class Draft:
    """
    In-progress edit of one secret.

    Fields hold exactly what the user typed; only ``payload()`` trims them.
    ``workflow_name`` uses ``""`` for Global, matching the scope selector.
    """

    name: str = ""
    value: str = ""
    workflow_name: str = ""
    dirty: bool = False

    @property
    def scope(self) -> Scope:
        return Scope.of(self.workflow_name)

    def validate(self) -> None:
        """Raise FormValidationError for the first missing field."""
        if not self.name.strip():
            raise FormValidationError("name", "Name is required")
        if not self.value.strip():
            raise FormValidationError("value", "Value is required")

    def payload(self) -> tuple[str, str, str | None]:
        """Trimmed (name, value, workflow_name) as submitted to the API."""
        return self.name.strip(), self.value.strip(), self.workflow_name or None


class FormStatus(StrEnum):
    """Secret form state for one visit to the page."""

    LOADING = "loading"
    EDITING = "editing"
    VALIDATING = "validating"
    SAVING = "saving"
    CONFIRMING_DELETE = "confirming_delete"
    DELETING = "deleting"
    DONE = "done"

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self == FormStatus.DONE

    def is_pending(self) -> bool:
        """Check if a request or local check is in flight."""
        return self in (
            FormStatus.LOADING,
            FormStatus.VALIDATING,
            FormStatus.SAVING,
            FormStatus.DELETING,
        )

    def can_transition_to(self, target: FormStatus) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions: dict[FormStatus, set[FormStatus]] = {
            FormStatus.LOADING: {FormStatus.EDITING},
            FormStatus.EDITING: {FormStatus.VALIDATING, FormStatus.CONFIRMING_DELETE},
            FormStatus.VALIDATING: {FormStatus.EDITING, FormStatus.SAVING},
            FormStatus.SAVING: {FormStatus.DONE, FormStatus.EDITING},
            FormStatus.CONFIRMING_DELETE: {FormStatus.EDITING, FormStatus.DELETING},
            FormStatus.DELETING: {FormStatus.DONE, FormStatus.EDITING},
            FormStatus.DONE: set(),
        }
        return target in valid_transitions.get(self, set())
