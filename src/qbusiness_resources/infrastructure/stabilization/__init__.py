"""Stabilization polling."""

from .poller import PollOutcome, PollResult, StabilizationPoller, not_stabilized_message

__all__ = ["PollOutcome", "PollResult", "StabilizationPoller", "not_stabilized_message"]
