"""Resumable operation context.

The host persists this value between invocations and hands it back unchanged,
so every field must survive a round trip through ``to_dict``/``from_dict``.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from qbusiness_resources.domain.lifecycle.value_objects import OperationType


class OperationContext(BaseModel):
    """Checkpoint of one logical operation across invocations."""
    model_config = ConfigDict(frozen=True)

    operation: OperationType
    step_index: int = Field(0, ge=0, description="Index of the next step to run")
    identifiers: Dict[str, str] = Field(default_factory=dict)
    step_started_at: Optional[float] = Field(
        None, description="Epoch seconds at which the current step began"
    )
    poll_count: int = Field(0, ge=0)

    @classmethod
    def start(cls, operation: OperationType, now: float,
              identifiers: Optional[Dict[str, str]] = None) -> "OperationContext":
        """Create a fresh context for a new operation."""
        return cls(
            operation=operation,
            identifiers=dict(identifiers or {}),
            step_started_at=now,
        )

    def advance(self, now: float) -> "OperationContext":
        """Move to the next step and reset the elapsed-time anchor."""
        return self.model_copy(update={
            "step_index": self.step_index + 1,
            "step_started_at": now,
            "poll_count": 0,
        })

    def with_identifiers(self, identifiers: Dict[str, str]) -> "OperationContext":
        merged = dict(self.identifiers)
        merged.update(identifiers)
        return self.model_copy(update={"identifiers": merged})

    def record_poll(self) -> "OperationContext":
        return self.model_copy(update={"poll_count": self.poll_count + 1})

    def elapsed(self, now: float) -> float:
        """Seconds spent in the current step."""
        if self.step_started_at is None:
            return 0.0
        return max(0.0, now - self.step_started_at)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to the host's callback-context format."""
        return {
            "operation": self.operation.value,
            "stepIndex": self.step_index,
            "identifiers": dict(self.identifiers),
            "stepStartedAt": self.step_started_at,
            "pollCount": self.poll_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperationContext":
        """Create a context from the host's callback-context format."""
        key_mapping = {
            "stepIndex": "step_index",
            "stepStartedAt": "step_started_at",
            "pollCount": "poll_count",
        }
        converted = {key_mapping.get(key, key): value for key, value in data.items()}
        return cls(**converted)
