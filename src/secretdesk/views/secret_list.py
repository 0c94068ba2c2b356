"""Secret list page state: scope filter, rows and navigation targets."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from secretdesk.data.secrets import SecretRepository
from secretdesk.domain.secrets import Scope
from secretdesk.errors import RequestError
from secretdesk.paths import new_secret_route, secret_detail_route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretRow:
    """One row of the secrets table."""

    name: str
    workflow_name: str | None
    path: str


class SecretListView:
    """Lists secret names for the selected scope."""

    def __init__(self, repository: SecretRepository, workflow_filter: str = "") -> None:
        self._repository = repository
        self.workflow_filter = workflow_filter
        self.names: list[str] | None = None
        self.is_fetching = False
        self.error_message: str | None = None

    @property
    def scope(self) -> Scope:
        return Scope.of(self.workflow_filter)

    @property
    def rows(self) -> list[SecretRow]:
        workflow_name = self.scope.workflow_name
        return [
            SecretRow(
                name=name,
                workflow_name=workflow_name,
                path=secret_detail_route(name, workflow_name),
            )
            for name in self.names or []
        ]

    @property
    def title(self) -> str:
        return f"{len(self.rows)} results"

    @property
    def new_secret_path(self) -> str:
        return new_secret_route(self.scope.workflow_name)

    async def set_filter(self, workflow_name: str | None) -> list[SecretRow]:
        """Switch scope (``""``/None is Global) and reload."""
        self.workflow_filter = workflow_name or ""
        return await self.refresh()

    async def refresh(self) -> list[SecretRow]:
        self.is_fetching = True
        try:
            self.names = await self._repository.list(self.scope.workflow_name)
            self.error_message = None
        except RequestError as exc:
            logger.warning("Could not list secrets (%s): %s", self.scope.label, exc)
            self.names = None
            self.error_message = exc.message
        finally:
            self.is_fetching = False
        return self.rows
