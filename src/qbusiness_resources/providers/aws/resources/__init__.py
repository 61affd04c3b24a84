"""QBusiness resource definitions and their registry."""

from typing import Dict

from qbusiness_resources.domain.core.exceptions import UnknownResourceTypeError

from .application import APPLICATION
from .base import ApiOperations, ResourceDefinition
from .data_accessor import DATA_ACCESSOR
from .data_source import DATA_SOURCE
from .index import INDEX
from .permission import PERMISSION, PermissionDefinition
from .plugin import PLUGIN
from .retriever import RETRIEVER
from .web_experience import WEB_EXPERIENCE

RESOURCE_DEFINITIONS: Dict[str, ResourceDefinition] = {
    definition.type_name: definition
    for definition in (
        APPLICATION,
        INDEX,
        DATA_SOURCE,
        RETRIEVER,
        PLUGIN,
        WEB_EXPERIENCE,
        DATA_ACCESSOR,
        PERMISSION,
    )
}


def get_resource_definition(type_name: str) -> ResourceDefinition:
    """Look up the definition registered for a resource type name."""
    try:
        return RESOURCE_DEFINITIONS[type_name]
    except KeyError:
        raise UnknownResourceTypeError(type_name) from None


__all__ = [
    "ApiOperations",
    "ResourceDefinition",
    "PermissionDefinition",
    "RESOURCE_DEFINITIONS",
    "get_resource_definition",
    "APPLICATION",
    "INDEX",
    "DATA_SOURCE",
    "RETRIEVER",
    "PLUGIN",
    "WEB_EXPERIENCE",
    "DATA_ACCESSOR",
    "PERMISSION",
]
