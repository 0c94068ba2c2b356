"""API paths and console routes for scoped secrets.

A ``workflowName`` query parameter is present only for workflow-scoped
secrets; its absence denotes the Global scope. Every other client of the
secrets API relies on the same convention.
"""

from urllib.parse import quote

SECRETS_PATH = "/secrets"
WORKFLOW_NAMES_PATH = "/metadata/workflow/names-and-versions"

# Console routes
SECRET_LIST_ROUTE = "/secretDefs"
SECRET_DETAIL_ROUTE = "/secretDef"

# Same safe set as JavaScript's encodeURIComponent
_COMPONENT_SAFE = "!'()*"


def encode_component(value: str) -> str:
    """Percent-encode a path segment or query value as UTF-8."""
    return quote(value, safe=_COMPONENT_SAFE, encoding="utf-8")


def with_workflow(base: str, workflow_name: str | None) -> str:
    if workflow_name:
        return f"{base}?workflowName={encode_component(workflow_name)}"
    return base


def secrets_path(workflow_name: str | None = None) -> str:
    """Path listing secret names in a scope."""
    return with_workflow(SECRETS_PATH, workflow_name)


def secret_path(
    name: str, workflow_name: str | None = None, *, suffix: str = ""
) -> str:
    """Path addressing one secret (optionally a sub-resource such as ``/exists``)."""
    return with_workflow(
        f"{SECRETS_PATH}/{encode_component(name)}{suffix}", workflow_name
    )


def secret_detail_route(name: str, workflow_name: str | None = None) -> str:
    return with_workflow(f"{SECRET_DETAIL_ROUTE}/{name}", workflow_name)


def new_secret_route(workflow_name: str | None = None) -> str:
    return with_workflow(SECRET_DETAIL_ROUTE, workflow_name)
