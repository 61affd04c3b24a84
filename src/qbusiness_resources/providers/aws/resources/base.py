"""Resource definition capability object.

A ResourceDefinition describes everything the lifecycle orchestrator needs to
know about one resource type: how it is addressed, which API operations
manage it, how models translate to requests, and when it counts as stable.
One generic orchestrator serves every type through this object.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from qbusiness_resources.domain.base.ports import ResourceDefinitionPort
from qbusiness_resources.domain.core.exceptions import HandlerFailure, ValidationError
from qbusiness_resources.domain.lifecycle.value_objects import (
    BackoffPolicy,
    FailureCause,
    OperationType,
    ResourceHandle,
    StabilizationCriteria,
    StatusSnapshot,
    TagSet,
)
from qbusiness_resources.infrastructure.tagging.tag_reconciler import TagReconciler
from qbusiness_resources.providers.aws import arn
from qbusiness_resources.providers.aws.resources.translator import (
    from_service_shape,
    list_of_models,
    to_camel,
    to_service_shape,
)


@dataclass(frozen=True)
class ApiOperations:
    """Names of the boto3 client methods managing one resource type.

    ``update`` is None for types whose properties are all create-only.
    """
    create: str
    get: str
    update: Optional[str]
    delete: str
    list: str
    list_result_key: str


@dataclass(frozen=True)
class ResourceDefinition(ResourceDefinitionPort):
    """Capabilities of one resource type."""
    type_name: str
    identifiers: Tuple[str, ...]
    arn_segments: Tuple[str, ...]
    operations: ApiOperations
    create_properties: Tuple[str, ...]
    update_properties: Tuple[str, ...]
    read_properties: Tuple[str, ...]
    list_properties: Tuple[str, ...]
    opaque_properties: Tuple[str, ...] = ()
    arn_property: Optional[str] = None
    criteria: Optional[StabilizationCriteria] = None
    status_key: str = "status"
    create_policy: Optional[BackoffPolicy] = None
    update_policy: Optional[BackoffPolicy] = None
    delete_policy: Optional[BackoffPolicy] = None
    post_create_properties: Tuple[str, ...] = ()
    taggable: bool = True

    @property
    def primary_identifier_name(self) -> str:
        return self.identifiers[-1]

    @property
    def parent_identifiers(self) -> Tuple[str, ...]:
        return self.identifiers[:-1]

    def handle_for(self, model: Mapping[str, Any],
                   known: Optional[Dict[str, str]] = None) -> ResourceHandle:
        return ResourceHandle.from_model(self.identifiers, dict(model or {}), known)

    def policy_for(self, operation: OperationType) -> Optional[BackoffPolicy]:
        return {
            OperationType.CREATE: self.create_policy,
            OperationType.UPDATE: self.update_policy,
            OperationType.DELETE: self.delete_policy,
        }.get(operation)

    def stabilizes(self, operation: OperationType) -> bool:
        """Whether the given operation is followed by status polling."""
        return self.criteria is not None and self.policy_for(operation) is not None

    def with_policies(self, **policies: Optional[BackoffPolicy]) -> "ResourceDefinition":
        """Return a copy with overridden backoff policies."""
        return replace(self, **{k: v for k, v in policies.items() if v is not None})

    def build_arn(self, partition: str, region: str, account_id: str,
                  handle: ResourceHandle) -> str:
        return arn.build_arn(self, partition, region, account_id, handle)

    def identifier_params(self, handle: ResourceHandle,
                          names: Optional[Tuple[str, ...]] = None) -> Dict[str, str]:
        """
        Build the identifier request parameters for a handle.

        Raises:
            ValidationError: If a required identifier has not been assigned
        """
        params = {}
        for name in names if names is not None else self.identifiers:
            value = handle.get(name)
            if not value:
                raise ValidationError(
                    f"Unexpected call to {self.type_name} with a null or empty {name}"
                )
            params[to_camel(name)] = value
        return params

    def translate_create(self, model: Mapping[str, Any], handle: ResourceHandle,
                         client_token: Optional[str], tags: TagSet) -> Dict[str, Any]:
        request = self.identifier_params(handle, self.parent_identifiers)
        request.update(to_service_shape(model, self.create_properties, self.opaque_properties))
        if client_token:
            request["clientToken"] = client_token
        if tags:
            request["tags"] = TagReconciler.to_service_tags(tags)
        return request

    def translate_update(self, model: Mapping[str, Any], handle: ResourceHandle) -> Dict[str, Any]:
        if self.operations.update is None:
            raise HandlerFailure(
                FailureCause.INVALID_REQUEST,
                f"{self.type_name} does not support update; its properties are create-only",
                resource_type=self.type_name,
                identifier=handle.primary_identifier,
            )
        request = self.identifier_params(handle)
        request.update(to_service_shape(model, self.update_properties, self.opaque_properties))
        return request

    def translate_post_create_update(self, model: Mapping[str, Any],
                                     handle: ResourceHandle) -> Optional[Dict[str, Any]]:
        """Follow-up update for properties the create call cannot set.

        Returns None when the model sets none of them.
        """
        if not any(model.get(name) for name in self.post_create_properties):
            return None
        request = self.identifier_params(handle)
        request.update(to_service_shape(model, self.post_create_properties, self.opaque_properties))
        return request

    def translate_read(self, handle: ResourceHandle) -> Dict[str, str]:
        return self.identifier_params(handle)

    def translate_delete(self, handle: ResourceHandle) -> Dict[str, str]:
        return self.identifier_params(handle)

    def translate_list(self, model: Mapping[str, Any], next_token: Optional[str]) -> Dict[str, Any]:
        handle = self.handle_for(model)
        request: Dict[str, Any] = self.identifier_params(handle, self.parent_identifiers)
        if next_token:
            request["nextToken"] = next_token
        return request

    def translate_from_read(self, response: Mapping[str, Any],
                            handle: ResourceHandle) -> Dict[str, Any]:
        properties = self.identifiers + self.read_properties
        if self.arn_property:
            properties += (self.arn_property,)
        return from_service_shape(response, properties, self.opaque_properties)

    def translate_from_list(self, response: Mapping[str, Any],
                            model: Mapping[str, Any]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        parents = {name: model[name] for name in self.parent_identifiers if model.get(name)}
        items = response.get(self.operations.list_result_key, [])
        models = list_of_models(items, (self.primary_identifier_name,) + self.list_properties, parents)
        return models, response.get("nextToken")

    def assigned_identifiers(self, response: Mapping[str, Any]) -> Dict[str, str]:
        """Identifiers minted by the create call."""
        value = response.get(to_camel(self.primary_identifier_name))
        return {self.primary_identifier_name: value} if value else {}

    def status_snapshot(self, response: Mapping[str, Any]) -> StatusSnapshot:
        error = response.get("error") or {}
        return StatusSnapshot(
            status=response.get(self.status_key),
            error_message=error.get("errorMessage"),
            attributes=dict(response),
        )
