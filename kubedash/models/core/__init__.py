"""Core resource models."""

from kubedash.models.core.context_info import CliToolInfo, ContextInfo
from kubedash.models.core.resource_record import ResourceRecord, ResourceRef

__all__ = ["CliToolInfo", "ContextInfo", "ResourceRecord", "ResourceRef"]
