"""Domain ports for infrastructure concerns."""

from .resource_api_port import ResourceApiPort
from .resource_definition_port import ResourceDefinitionPort

__all__ = [
    "ResourceApiPort",
    "ResourceDefinitionPort",
]
