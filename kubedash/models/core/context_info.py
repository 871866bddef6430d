"""Kubeconfig context models."""

from pydantic import BaseModel, ConfigDict


class ContextInfo(BaseModel):
    """One kubeconfig context entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    cluster: str = ""
    user: str = ""
    namespace: str | None = None
    is_current: bool = False


class CliToolInfo(BaseModel):
    """Version of a CLI found on PATH."""

    name: str
    version: str = "Not found"
    available: bool = False
