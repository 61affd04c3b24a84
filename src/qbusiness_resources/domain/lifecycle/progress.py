"""Handler outcomes reported back to the host."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from qbusiness_resources.domain.lifecycle.operation_context import OperationContext
from qbusiness_resources.domain.lifecycle.value_objects import FailureCause


class OperationStatus(str, Enum):
    """Overall status of one handler invocation."""
    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ProgressEvent(BaseModel):
    """Result of one handler invocation."""
    model_config = ConfigDict(frozen=True)

    status: OperationStatus
    resource_model: Optional[Dict[str, Any]] = None
    resource_models: Optional[List[Dict[str, Any]]] = None
    next_token: Optional[str] = None
    callback_context: Optional[OperationContext] = None
    callback_delay_seconds: int = 0
    error_code: Optional[FailureCause] = None
    message: Optional[str] = None
    resource_type: Optional[str] = None
    identifier: Optional[str] = None

    @classmethod
    def progress(cls, model: Optional[Dict[str, Any]], context: OperationContext,
                 delay_seconds: float = 0) -> "ProgressEvent":
        """Continuation the host must re-submit after ``delay_seconds``."""
        return cls(
            status=OperationStatus.IN_PROGRESS,
            resource_model=model,
            callback_context=context,
            callback_delay_seconds=int(delay_seconds),
        )

    @classmethod
    def success(cls, model: Optional[Dict[str, Any]]) -> "ProgressEvent":
        return cls(status=OperationStatus.SUCCESS, resource_model=model)

    @classmethod
    def list_success(cls, models: List[Dict[str, Any]], next_token: Optional[str]) -> "ProgressEvent":
        return cls(status=OperationStatus.SUCCESS, resource_models=models, next_token=next_token)

    @classmethod
    def failed(cls, cause: FailureCause, message: str, resource_type: Optional[str] = None,
               identifier: Optional[str] = None,
               model: Optional[Dict[str, Any]] = None) -> "ProgressEvent":
        return cls(
            status=OperationStatus.FAILED,
            error_code=cause,
            message=message,
            resource_type=resource_type,
            identifier=identifier,
            resource_model=model,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status != OperationStatus.IN_PROGRESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to the host's response format."""
        result: Dict[str, Any] = {"status": self.status.value}
        if self.resource_model is not None:
            result["resourceModel"] = self.resource_model
        if self.resource_models is not None:
            result["resourceModels"] = self.resource_models
            result["nextToken"] = self.next_token
        if self.status == OperationStatus.IN_PROGRESS and self.callback_context is not None:
            result["callbackContext"] = self.callback_context.to_dict()
            result["callbackDelaySeconds"] = self.callback_delay_seconds
        if self.error_code is not None:
            result["errorCode"] = self.error_code.value
        if self.message:
            result["message"] = self.message
        if self.status == OperationStatus.FAILED:
            result["resourceType"] = self.resource_type
            result["identifier"] = self.identifier
        return result
