"""Domain port for remote control-plane operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

from qbusiness_resources.domain.lifecycle.value_objects import TagSet


class ResourceApiPort(ABC):
    """Domain port for one resource type's remote API.

    Requests and responses are the service's own request/response shapes;
    translation from resource models happens before calls reach the port.
    """

    @abstractmethod
    def create(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Create the resource and return the response with assigned ids."""

    @abstractmethod
    def get(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Describe the resource."""

    @abstractmethod
    def update(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Apply changes to the resource."""

    @abstractmethod
    def delete(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Delete the resource."""

    @abstractmethod
    def list(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """List one page of resources."""

    @abstractmethod
    def list_tags(self, resource_arn: str) -> TagSet:
        """Get tags attached to the resource."""

    @abstractmethod
    def add_tags(self, resource_arn: str, tags: TagSet) -> None:
        """Attach or overwrite tags."""

    @abstractmethod
    def remove_tags(self, resource_arn: str, keys: Iterable[str]) -> None:
        """Detach tags by key."""
