"""Lifecycle value objects orchestrator.

This module provides a unified interface to the lifecycle domain objects:
- Operation kinds and failure causes (OperationType, FailureCause)
- Polling and stabilization rules (BackoffPolicy, StabilizationCriteria)
- Resumable state and outcomes (OperationContext, ProgressEvent)
"""

from .operation_context import OperationContext
from .progress import OperationStatus, ProgressEvent
from .request import HandlerRequest
from .value_objects import (
    BackoffPolicy,
    FailureCause,
    OperationType,
    ResourceHandle,
    StabilizationCriteria,
    StatusSnapshot,
    TagDelta,
    TagSet,
)

__all__ = [
    # Operation kinds and failure causes
    "OperationType",
    "FailureCause",
    # Polling and stabilization
    "BackoffPolicy",
    "StabilizationCriteria",
    "StatusSnapshot",
    # Identity and tags
    "ResourceHandle",
    "TagDelta",
    "TagSet",
    # Resumable state and outcomes
    "OperationContext",
    "OperationStatus",
    "ProgressEvent",
    "HandlerRequest",
]
