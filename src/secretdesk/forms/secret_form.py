"""Form state for creating, editing and deleting one secret.

One controller lives for one visit to the secret page. It owns the draft,
tracks whether the user changed anything, validates before saving, gates
deletes behind an explicit confirmation and navigates back to the secret
list once a save or delete succeeds.

Example:
    form = SecretFormController(repo, secret_name="db-pass", on_navigate=go)
    await form.load()
    form.set_value("n3w-s3cr3t")
    await form.request_save()   # navigates to /secretDefs on success
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from secretdesk.data.secrets import SecretRepository
from secretdesk.domain.secrets import Draft, FormStatus, Scope, Secret
from secretdesk.errors import FormValidationError, RequestError
from secretdesk.paths import SECRET_LIST_ROUTE

logger = logging.getLogger(__name__)

SAVE_FAILED = "Save failed"
DELETE_FAILED = "Delete failed"
LOAD_FAILED = "Failed to load secret"

NavigateCallback = Callable[[str], None]


@dataclass(frozen=True)
class FormSnapshot:
    """Everything a view needs to render the form."""

    draft: Draft
    is_dirty: bool
    status: FormStatus
    error_message: str | None


class SecretFormController:
    """State machine behind the secret create/edit page."""

    def __init__(
        self,
        repository: SecretRepository,
        *,
        secret_name: str | None = None,
        workflow_name: str | None = None,
        workflow_names: Sequence[str] = (),
        on_navigate: NavigateCallback | None = None,
    ) -> None:
        self._repository = repository
        self._on_navigate = on_navigate
        self._closed = False

        self.secret_name = secret_name or None
        self.workflow_names = list(workflow_names)
        self.draft = Draft(name=secret_name or "", workflow_name=workflow_name or "")
        self.status = FormStatus.LOADING if self.secret_name else FormStatus.EDITING
        self.error_message: str | None = None
        self.secret: Secret | None = None
        self.navigated_to: str | None = None

    # ---- Derived view state ----

    @property
    def is_new(self) -> bool:
        return self.secret_name is None

    @property
    def is_dirty(self) -> bool:
        return self.draft.dirty

    @property
    def is_busy(self) -> bool:
        return self.status.is_pending()

    @property
    def can_save(self) -> bool:
        if self.status != FormStatus.EDITING:
            return False
        if self.draft.dirty:
            return True
        return self.is_new and bool(
            self.draft.name.strip() and self.draft.value.strip()
        )

    @property
    def can_delete(self) -> bool:
        return not self.is_new and self.status == FormStatus.EDITING

    @property
    def scope(self) -> Scope:
        return self.draft.scope

    @property
    def title(self) -> str:
        return self.secret_name or "NEW"

    @property
    def delete_prompt(self) -> str:
        return (
            f'Are you sure you want to delete secret "{self.secret_name}" '
            f"({self.scope.label})? This action cannot be undone."
        )

    @property
    def scope_options(self) -> list[tuple[str, str]]:
        """(value, label) pairs for the scope selector; ``""`` is Global."""
        return [("", "Global")] + [(name, name) for name in self.workflow_names]

    def snapshot(self) -> FormSnapshot:
        return FormSnapshot(
            draft=replace(self.draft),
            is_dirty=self.draft.dirty,
            status=self.status,
            error_message=self.error_message,
        )

    # ---- Transitions ----

    def _transition(self, target: FormStatus) -> None:
        if not self.status.can_transition_to(target):
            raise RuntimeError(
                f"Invalid secret form transition: {self.status} -> {target}"
            )
        logger.debug("Secret form %s: %s -> %s", self.title, self.status, target)
        self.status = target

    def _fail(self, exc: RequestError, fallback: str) -> None:
        self.error_message = exc.message or fallback
        self._transition(FormStatus.EDITING)

    def _finish(self) -> None:
        self._transition(FormStatus.DONE)
        self.navigated_to = SECRET_LIST_ROUTE
        if self._on_navigate is not None:
            self._on_navigate(SECRET_LIST_ROUTE)

    def close(self) -> None:
        """Detach from the view; results arriving afterwards are ignored."""
        self._closed = True

    async def load(self) -> Secret | None:
        """Fetch the existing record when editing; no request when creating."""
        if self.status != FormStatus.LOADING:
            return self.secret

        try:
            secret = await self._repository.get(
                self.secret_name, self.draft.workflow_name or None
            )
        except RequestError as exc:
            if not self._closed:
                logger.warning("Could not load secret '%s': %s", self.secret_name, exc)
                self._fail(exc, LOAD_FAILED)
            return None

        if self._closed:
            return None
        self.secret = secret
        if secret is not None:
            self.draft.name = secret.name
        self._transition(FormStatus.EDITING)
        return secret

    # ---- Draft mutations ----

    def set_name(self, name: str) -> bool:
        """Change the name; only allowed while creating."""
        if not self.is_new or self.status != FormStatus.EDITING:
            return False
        self.draft.name = name
        self.draft.dirty = True
        return True

    def set_value(self, value: str) -> bool:
        if self.status != FormStatus.EDITING:
            return False
        self.draft.value = value
        self.draft.dirty = True
        return True

    def set_scope(self, workflow_name: str | None) -> bool:
        """Retarget a new secret; ``""`` or None means Global. Only while creating."""
        if not self.is_new or self.status != FormStatus.EDITING:
            return False
        self.draft.workflow_name = workflow_name or ""
        self.draft.dirty = True
        return True

    # ---- Save ----

    async def request_save(self) -> bool:
        """Validate and persist the draft. Returns True when the secret was saved."""
        if not self.can_save:
            return False

        self._transition(FormStatus.VALIDATING)
        try:
            self.draft.validate()
        except FormValidationError as exc:
            self.error_message = exc.message
            self._transition(FormStatus.EDITING)
            return False

        self.error_message = None
        self._transition(FormStatus.SAVING)
        name, value, workflow_name = self.draft.payload()
        try:
            await self._repository.save(name, value, workflow_name)
        except RequestError as exc:
            if not self._closed:
                self._fail(exc, SAVE_FAILED)
            return False

        if not self._closed:
            self._finish()
        return True

    # ---- Delete ----

    def request_delete(self) -> bool:
        """Open the confirmation gate; nothing is deleted yet."""
        if not self.can_delete:
            return False
        self._transition(FormStatus.CONFIRMING_DELETE)
        return True

    def cancel_delete(self) -> bool:
        if self.status != FormStatus.CONFIRMING_DELETE:
            return False
        self._transition(FormStatus.EDITING)
        return True

    async def confirm_delete(self) -> bool:
        """Delete the secret after confirmation. Returns True when it was deleted."""
        if self.status != FormStatus.CONFIRMING_DELETE:
            return False

        self._transition(FormStatus.DELETING)
        try:
            await self._repository.delete(
                self.secret_name or "", self.draft.workflow_name or None
            )
        except RequestError as exc:
            if not self._closed:
                self._fail(exc, DELETE_FAILED)
            return False

        if not self._closed:
            self._finish()
        return True
