"""boto3 adapter for the QBusiness control-plane API."""

import logging
from typing import Any, Dict, Iterable

from qbusiness_resources.domain.base.ports import ResourceApiPort
from qbusiness_resources.domain.lifecycle.value_objects import TagSet
from qbusiness_resources.infrastructure.tagging.tag_reconciler import TagReconciler
from qbusiness_resources.providers.aws.resources.base import ResourceDefinition

logger = logging.getLogger(__name__)


class QBusinessResourceApi(ResourceApiPort):
    """
    ResourceApiPort implementation backed by a boto3 ``qbusiness`` client.

    Operation names come from the resource definition, so one adapter class
    serves every resource type. Errors raised by the client propagate
    unchanged; classification happens in the caller.
    """

    def __init__(self, client: Any, definition: ResourceDefinition):
        """
        Initialize the adapter.

        Args:
            client: boto3 qbusiness client
            definition: Resource definition naming the client operations
        """
        self._client = client
        self._definition = definition

    def _invoke(self, operation_name: str, request: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("Calling %s for %s", operation_name, self._definition.type_name)
        response = getattr(self._client, operation_name)(**request)
        response.pop("ResponseMetadata", None)
        return response

    def create(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke(self._definition.operations.create, request)

    def get(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke(self._definition.operations.get, request)

    def update(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke(self._definition.operations.update, request)

    def delete(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke(self._definition.operations.delete, request)

    def list(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke(self._definition.operations.list, request)

    def list_tags(self, resource_arn: str) -> TagSet:
        response = self._client.list_tags_for_resource(resourceARN=resource_arn)
        return TagReconciler.from_service_tags(response.get("tags"))

    def add_tags(self, resource_arn: str, tags: TagSet) -> None:
        if not tags:
            return
        logger.debug("Tagging %s with keys %s", resource_arn, sorted(tags))
        self._client.tag_resource(
            resourceARN=resource_arn,
            tags=TagReconciler.to_service_tags(tags),
        )

    def remove_tags(self, resource_arn: str, keys: Iterable[str]) -> None:
        keys = sorted(keys)
        if not keys:
            return
        logger.debug("Untagging %s keys %s", resource_arn, keys)
        self._client.untag_resource(resourceARN=resource_arn, tagKeys=keys)
