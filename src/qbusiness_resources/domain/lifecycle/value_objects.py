"""Lifecycle value objects.

This module holds the immutable values the lifecycle core passes around:
operation kinds, the closed failure taxonomy, backoff policies, resource
handles, status observations and tag deltas.
"""

from datetime import timedelta
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


TagSet = Dict[str, str]


class OperationType(str, Enum):
    """Operations a host can ask a handler to perform."""
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST = "LIST"


class FailureCause(str, Enum):
    """Closed taxonomy of failure outcomes.

    Values are the error codes reported back to the host.
    """
    INVALID_REQUEST = "InvalidRequest"
    CONFLICT = "ResourceConflict"
    NOT_FOUND = "NotFound"
    QUOTA_EXCEEDED = "ServiceLimitExceeded"
    THROTTLED = "Throttling"
    ACCESS_DENIED = "AccessDenied"
    SERVICE_ERROR = "GeneralServiceException"
    NOT_STABILIZED = "NotStabilized"


class BackoffPolicy(BaseModel):
    """Constant-delay polling policy bounded by a cumulative timeout."""
    model_config = ConfigDict(frozen=True)

    poll_interval: float = Field(..., description="Seconds between status polls")
    timeout: float = Field(..., description="Seconds before stabilization is abandoned")

    @field_validator("poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate poll interval."""
        if v <= 0:
            raise ValueError("Poll interval must be positive")
        return v

    @model_validator(mode="after")
    def validate_timeout(self) -> "BackoffPolicy":
        """Ensure at least one poll can happen before the timeout."""
        if self.timeout <= self.poll_interval:
            raise ValueError("Timeout must be greater than poll interval")
        return self

    @classmethod
    def of(cls, timeout: timedelta, delay: timedelta) -> "BackoffPolicy":
        """Build a policy from durations."""
        return cls(poll_interval=delay.total_seconds(), timeout=timeout.total_seconds())


class ResourceHandle(BaseModel):
    """Ordered path-segment identifiers addressing one remote resource."""
    model_config = ConfigDict(frozen=True)

    names: Tuple[str, ...]
    values: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_model(cls, fields: Tuple[str, ...], model: Dict[str, Any],
                   known: Optional[Dict[str, str]] = None) -> "ResourceHandle":
        """Build a handle from a resource model, preferring already known ids."""
        values = {}
        for name in fields:
            value = (known or {}).get(name) or model.get(name)
            if value:
                values[name] = str(value)
        return cls(names=tuple(fields), values=values)

    def with_values(self, assigned: Dict[str, str]) -> "ResourceHandle":
        """Return a copy with the given identifiers merged in."""
        merged = dict(self.values)
        merged.update({k: str(v) for k, v in assigned.items() if k in self.names and v})
        return ResourceHandle(names=self.names, values=merged)

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)

    @property
    def primary_identifier(self) -> Optional[str]:
        """The innermost identifier, or None if not yet assigned."""
        return self.values.get(self.names[-1]) if self.names else None


class StatusSnapshot(BaseModel):
    """One observation of a remote resource's status."""
    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    error_message: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @property
    def has_error_detail(self) -> bool:
        return bool(self.error_message and self.error_message.strip())


class StabilizationCriteria(BaseModel):
    """Resource-type-specific rules for reading a status as terminal."""
    model_config = ConfigDict(frozen=True)

    terminal_success: FrozenSet[str] = frozenset({"ACTIVE"})
    terminal_failure: FrozenSet[str] = frozenset({"FAILED"})
    required_field: Optional[str] = None
    fail_on_error_detail: bool = False

    def is_terminal_success(self, status: Optional[str]) -> bool:
        return status in self.terminal_success

    def is_terminal_failure(self, status: Optional[str]) -> bool:
        return status in self.terminal_failure


class TagDelta(BaseModel):
    """Minimal tag additions and removals between two effective tag sets."""
    model_config = ConfigDict(frozen=True)

    to_add: Dict[str, str] = Field(default_factory=dict)
    to_remove: FrozenSet[str] = frozenset()

    @model_validator(mode="after")
    def validate_disjoint(self) -> "TagDelta":
        """A key is either added or removed, never both."""
        overlap = set(self.to_add) & set(self.to_remove)
        if overlap:
            raise ValueError(f"Tag keys both added and removed: {sorted(overlap)}")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove
