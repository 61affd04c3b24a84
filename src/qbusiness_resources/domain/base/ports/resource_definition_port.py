"""Domain port describing one resource type's capabilities."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

from qbusiness_resources.domain.lifecycle.value_objects import (
    BackoffPolicy,
    OperationType,
    ResourceHandle,
    StabilizationCriteria,
    StatusSnapshot,
    TagSet,
)


class ResourceDefinitionPort(ABC):
    """Domain port for everything the lifecycle needs to know about a type.

    Implementations expose ``type_name``, ``criteria`` (None when the type
    has no status), ``taggable`` and per-operation backoff policies as
    attributes, and translate resource models to and from the remote API's
    request and response shapes.
    """

    type_name: str
    criteria: Optional[StabilizationCriteria]
    taggable: bool
    create_policy: Optional[BackoffPolicy]
    update_policy: Optional[BackoffPolicy]
    delete_policy: Optional[BackoffPolicy]

    @property
    @abstractmethod
    def primary_identifier_name(self) -> str:
        """Name of the innermost identifier."""

    @abstractmethod
    def handle_for(self, model: Mapping[str, Any],
                   known: Optional[Dict[str, str]] = None) -> ResourceHandle:
        """Build the handle addressing the resource described by a model."""

    @abstractmethod
    def policy_for(self, operation: OperationType) -> Optional[BackoffPolicy]:
        """Backoff policy for an operation, or None if it is not polled."""

    @abstractmethod
    def stabilizes(self, operation: OperationType) -> bool:
        """Whether the given operation is followed by status polling."""

    @abstractmethod
    def with_policies(self, **policies: Optional[BackoffPolicy]) -> "ResourceDefinitionPort":
        """Return a copy with overridden backoff policies."""

    @abstractmethod
    def build_arn(self, partition: str, region: str, account_id: str,
                  handle: ResourceHandle) -> str:
        """ARN of the resource, used for tagging calls."""

    @abstractmethod
    def translate_create(self, model: Mapping[str, Any], handle: ResourceHandle,
                         client_token: Optional[str], tags: TagSet) -> Dict[str, Any]:
        """Create request for a model."""

    @abstractmethod
    def translate_update(self, model: Mapping[str, Any], handle: ResourceHandle) -> Dict[str, Any]:
        """Update request for a model."""

    @abstractmethod
    def translate_post_create_update(self, model: Mapping[str, Any],
                                     handle: ResourceHandle) -> Optional[Dict[str, Any]]:
        """Follow-up update after create, or None when there is nothing to apply."""

    @abstractmethod
    def translate_read(self, handle: ResourceHandle) -> Dict[str, Any]:
        """Describe request for a handle."""

    @abstractmethod
    def translate_delete(self, handle: ResourceHandle) -> Dict[str, Any]:
        """Delete request for a handle."""

    @abstractmethod
    def translate_list(self, model: Mapping[str, Any], next_token: Optional[str]) -> Dict[str, Any]:
        """List request for one page."""

    @abstractmethod
    def translate_from_read(self, response: Mapping[str, Any],
                            handle: ResourceHandle) -> Dict[str, Any]:
        """Model properties from a describe response."""

    @abstractmethod
    def translate_from_list(self, response: Mapping[str, Any],
                            model: Mapping[str, Any]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Models and next token from a list response."""

    @abstractmethod
    def assigned_identifiers(self, response: Mapping[str, Any]) -> Dict[str, str]:
        """Identifiers minted by the create call."""

    @abstractmethod
    def status_snapshot(self, response: Mapping[str, Any]) -> StatusSnapshot:
        """Status observation from a describe response."""
