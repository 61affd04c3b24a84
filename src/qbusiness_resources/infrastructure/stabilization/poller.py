"""Stabilization poller.

After a mutating call the remote resource passes through transitional
statuses before it settles. The poller performs exactly one status check per
call and reports whether the resource has settled, failed, timed out, or is
still in progress. The host re-invokes the handler after the policy's poll
interval, so no call here ever sleeps.
"""

import logging
import time
from enum import Enum
from typing import Callable, NamedTuple, Optional

from qbusiness_resources.domain.lifecycle.value_objects import (
    BackoffPolicy,
    FailureCause,
    OperationType,
    StabilizationCriteria,
    StatusSnapshot,
)
from qbusiness_resources.infrastructure.error.error_classifier import ErrorClassifier

logger = logging.getLogger(__name__)


class PollOutcome(str, Enum):
    """States of the stabilization state machine."""
    IN_PROGRESS = "IN_PROGRESS"
    STABILIZED = "STABILIZED"
    FAILED = "FAILED"
    TIMEOUT = "TIMEOUT"


class PollResult(NamedTuple):
    outcome: PollOutcome
    cause: Optional[FailureCause] = None
    message: Optional[str] = None
    status: Optional[str] = None


def not_stabilized_message(resource_type: str, resource_id: Optional[str]) -> str:
    return f"Resource of type '{resource_type}' with identifier '{resource_id}' did not stabilize."


class StabilizationPoller:
    """Drives one step of the stabilization state machine per call."""

    def __init__(self, classifier: Optional[ErrorClassifier] = None,
                 clock: Callable[[], float] = time.time):
        self._classifier = classifier or ErrorClassifier()
        self._clock = clock

    def poll(self,
             fetch_status: Callable[[], StatusSnapshot],
             criteria: StabilizationCriteria,
             policy: BackoffPolicy,
             operation: OperationType,
             started_at: float,
             resource_type: str,
             resource_id: Optional[str]) -> PollResult:
        """
        Check the resource status once.

        A stabilization already past its deadline times out without a
        status check, whatever the resource would report.

        Args:
            fetch_status: Callable returning the current status snapshot
            criteria: Terminal status rules for the resource type
            policy: Backoff policy bounding the stabilization
            operation: Operation being stabilized
            started_at: Epoch seconds at which stabilization began
            resource_type: Resource type name, for diagnostics
            resource_id: Primary identifier, for diagnostics

        Returns:
            PollResult describing the next state
        """
        elapsed = self._clock() - started_at
        if elapsed >= policy.timeout:
            logger.error("%s with ID: %s timed out after %.0f seconds",
                         resource_type, resource_id, elapsed)
            return PollResult(
                PollOutcome.TIMEOUT,
                FailureCause.NOT_STABILIZED,
                f"Exceeded timeout of {policy.timeout:.0f} seconds. "
                + not_stabilized_message(resource_type, resource_id),
            )

        try:
            snapshot = fetch_status()
        except Exception as e:
            if self._classifier.is_not_found(e):
                if operation == OperationType.DELETE:
                    logger.info("Delete of %s with ID: %s has stabilized", resource_type, resource_id)
                    return PollResult(PollOutcome.STABILIZED)
                logger.error("%s with ID: %s disappeared while stabilizing %s",
                             resource_type, resource_id, operation.value)
                return PollResult(PollOutcome.FAILED, FailureCause.NOT_FOUND, str(e))

            classified = self._classifier.classify(e)
            logger.error("Status check for %s with ID: %s failed: %s",
                         resource_type, resource_id, classified.message)
            return PollResult(PollOutcome.FAILED, classified.cause, classified.message)

        status = snapshot.status

        if operation == OperationType.DELETE:
            # Any observation means the resource still exists.
            if criteria.is_terminal_failure(status):
                return self._failed(snapshot, resource_type, resource_id)
            return self._in_progress(snapshot, resource_type, resource_id)

        if criteria.is_terminal_success(status):
            if criteria.required_field and snapshot.attributes.get(criteria.required_field) is None:
                logger.info("%s with ID: %s is %s but %s is not yet available",
                            resource_type, resource_id, status, criteria.required_field)
                return self._in_progress(snapshot, resource_type, resource_id)
            logger.info("%s with ID: %s has stabilized", resource_type, resource_id)
            return PollResult(PollOutcome.STABILIZED, status=status)

        if criteria.is_terminal_failure(status):
            return self._failed(snapshot, resource_type, resource_id)

        if criteria.fail_on_error_detail and snapshot.has_error_detail:
            logger.error("%s with ID: %s reported an error in status %s",
                         resource_type, resource_id, status)
            return self._failed(snapshot, resource_type, resource_id)

        return self._in_progress(snapshot, resource_type, resource_id)

    def _failed(self, snapshot: StatusSnapshot, resource_type: str,
                resource_id: Optional[str]) -> PollResult:
        message = (snapshot.error_message.strip() if snapshot.has_error_detail
                   else not_stabilized_message(resource_type, resource_id))
        logger.info("%s with ID: %s has failed to stabilize with status %s: %s",
                    resource_type, resource_id, snapshot.status, message)
        return PollResult(PollOutcome.FAILED, FailureCause.NOT_STABILIZED, message, snapshot.status)

    def _in_progress(self, snapshot: StatusSnapshot, resource_type: str,
                     resource_id: Optional[str]) -> PollResult:
        logger.info("%s with ID: %s is still stabilizing with status: %s",
                    resource_type, resource_id, snapshot.status)
        return PollResult(PollOutcome.IN_PROGRESS, status=snapshot.status)
