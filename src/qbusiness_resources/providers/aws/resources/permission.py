"""AWS::QBusiness::Permission resource definition.

A permission is one statement of the application's resource-based policy.
It is associated and disassociated by statement id and read back by parsing
the policy document; it has no status, no tags and no update.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple

from qbusiness_resources.domain.core.exceptions import HandlerFailure, ResourceNotFoundError
from qbusiness_resources.domain.lifecycle.value_objects import FailureCause, ResourceHandle, TagSet
from qbusiness_resources.providers.aws.resources.base import ApiOperations, ResourceDefinition
from qbusiness_resources.providers.aws.resources.policy_parser import (
    permission_models_from_policy,
    statement_from_policy,
)
from qbusiness_resources.providers.aws.resources.translator import to_service_shape

TYPE_NAME = "AWS::QBusiness::Permission"


class PermissionDefinition(ResourceDefinition):
    """Reads and lists go through the application policy instead of a describe call."""

    def translate_create(self, model: Mapping[str, Any], handle: ResourceHandle,
                         client_token: Optional[str], tags: TagSet) -> Dict[str, Any]:
        request = self.identifier_params(handle, self.parent_identifiers)
        request.update(to_service_shape(model, self.create_properties))
        return request

    def translate_read(self, handle: ResourceHandle) -> Dict[str, str]:
        return self.identifier_params(handle, self.parent_identifiers)

    def translate_list(self, model: Mapping[str, Any], next_token: Optional[str]) -> Dict[str, Any]:
        return self.identifier_params(self.handle_for(model), self.parent_identifiers)

    def _policy(self, response: Mapping[str, Any], application_id: Optional[str]) -> str:
        policy = response.get("policy")
        if not policy:
            raise HandlerFailure(
                FailureCause.SERVICE_ERROR,
                f"No policy exists for ApplicationId {application_id}",
                resource_type=self.type_name,
            )
        return policy

    def translate_from_read(self, response: Mapping[str, Any],
                            handle: ResourceHandle) -> Dict[str, Any]:
        """
        Find the statement addressed by the handle in the application policy.

        Raises:
            ResourceNotFoundError: If the policy has no statement with the id
        """
        application_id = handle.get("ApplicationId")
        statement_id = handle.get("StatementId")
        model = statement_from_policy(self._policy(response, application_id), statement_id, application_id)
        if model is None:
            raise ResourceNotFoundError(self.type_name, statement_id)
        return model

    def translate_from_list(self, response: Mapping[str, Any],
                            model: Mapping[str, Any]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        application_id = model.get("ApplicationId")
        return permission_models_from_policy(self._policy(response, application_id), application_id), None


PERMISSION = PermissionDefinition(
    type_name=TYPE_NAME,
    identifiers=("ApplicationId", "StatementId"),
    arn_segments=(),
    operations=ApiOperations(
        create="associate_permission",
        get="get_policy",
        update=None,
        delete="disassociate_permission",
        list="get_policy",
        list_result_key="policy",
    ),
    create_properties=("StatementId", "Actions", "Principal"),
    update_properties=(),
    read_properties=(),
    list_properties=(),
    taggable=False,
)
