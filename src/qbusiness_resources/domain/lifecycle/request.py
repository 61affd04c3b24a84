"""Handler request received from the host."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qbusiness_resources.domain.lifecycle.operation_context import OperationContext
from qbusiness_resources.domain.lifecycle.value_objects import OperationType


class HandlerRequest(BaseModel):
    """One invocation of a resource handler.

    Resource states are plain dictionaries keyed by the resource schema's
    property names (for example ``ApplicationId`` or ``Tags``).
    """
    model_config = ConfigDict(frozen=True)

    operation: OperationType
    type_name: str
    desired_resource_state: Dict[str, Any] = Field(default_factory=dict)
    previous_resource_state: Optional[Dict[str, Any]] = None
    desired_resource_tags: Optional[Dict[str, Optional[str]]] = None
    previous_resource_tags: Optional[Dict[str, Optional[str]]] = None
    system_tags: Optional[Dict[str, Optional[str]]] = None
    previous_system_tags: Optional[Dict[str, Optional[str]]] = None
    client_request_token: Optional[str] = None
    aws_partition: str = "aws"
    region: str = "us-east-1"
    aws_account_id: str = ""
    stack_id: Optional[str] = None
    next_token: Optional[str] = None
    callback_context: Optional[OperationContext] = None

    @field_validator("operation", mode="before")
    @classmethod
    def normalize_operation(cls, v: Any) -> Any:
        """Accept operation names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HandlerRequest":
        """Create a request from the host's camelCase payload."""
        key_mapping = {
            "action": "operation",
            "typeName": "type_name",
            "desiredResourceState": "desired_resource_state",
            "previousResourceState": "previous_resource_state",
            "desiredResourceTags": "desired_resource_tags",
            "previousResourceTags": "previous_resource_tags",
            "systemTags": "system_tags",
            "previousSystemTags": "previous_system_tags",
            "clientRequestToken": "client_request_token",
            "awsPartition": "aws_partition",
            "awsAccountId": "aws_account_id",
            "stackId": "stack_id",
            "nextToken": "next_token",
            "callbackContext": "callback_context",
        }
        converted = {key_mapping.get(key, key): value for key, value in data.items()}
        if converted.get("desired_resource_state") is None:
            converted.pop("desired_resource_state", None)

        context = converted.get("callback_context")
        if isinstance(context, dict):
            converted["callback_context"] = OperationContext.from_dict(context) if context else None

        return cls(**converted)
