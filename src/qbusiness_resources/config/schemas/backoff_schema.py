"""Stabilization backoff configuration schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy


class BackoffPolicyConfig(BaseModel):
    """Override for one operation's stabilization policy."""

    poll_interval_seconds: float = Field(..., description="Seconds between status polls")
    timeout_seconds: float = Field(..., description="Seconds before stabilization is abandoned")

    def to_policy(self) -> BackoffPolicy:
        """Convert to the domain policy, which enforces its own invariants."""
        return BackoffPolicy(poll_interval=self.poll_interval_seconds, timeout=self.timeout_seconds)


class ResourceBackoffConfig(BaseModel):
    """Policy overrides for one resource type."""

    create: Optional[BackoffPolicyConfig] = None
    update: Optional[BackoffPolicyConfig] = None
    delete: Optional[BackoffPolicyConfig] = None
