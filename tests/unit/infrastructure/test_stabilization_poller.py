"""Unit tests for StabilizationPoller."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from qbusiness_resources.domain.lifecycle.value_objects import (
    BackoffPolicy,
    FailureCause,
    OperationType,
    StabilizationCriteria,
    StatusSnapshot,
)
from qbusiness_resources.infrastructure.stabilization.poller import PollOutcome, StabilizationPoller

TYPE_NAME = "AWS::QBusiness::Application"


def not_found() -> ClientError:
    return ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "gone"}}, "GetApplication"
    )


@pytest.mark.unit
class TestStabilizationPoller:
    """Test the stabilization state machine."""

    def setup_method(self):
        self.criteria = StabilizationCriteria()
        self.policy = BackoffPolicy(poll_interval=5, timeout=45)

    def poll(self, poller, fetch, operation=OperationType.CREATE, started_at=0.0, criteria=None):
        return poller.poll(fetch, criteria or self.criteria, self.policy, operation,
                           started_at, TYPE_NAME, "app-1")

    def test_converges_after_transitional_statuses(self, clock):
        poller = StabilizationPoller(clock=clock)
        fetch = Mock(side_effect=[StatusSnapshot(status=s) for s in ("CREATING", "CREATING", "ACTIVE")])

        outcomes = []
        for _ in range(3):
            outcomes.append(self.poll(poller, fetch, started_at=clock()).outcome)
            clock.advance(5)

        assert outcomes == [PollOutcome.IN_PROGRESS, PollOutcome.IN_PROGRESS, PollOutcome.STABILIZED]
        assert fetch.call_count == 3

    def test_terminal_failure_uses_error_detail(self, clock):
        poller = StabilizationPoller(clock=clock)
        fetch = Mock(side_effect=[
            StatusSnapshot(status="CREATING"),
            StatusSnapshot(status="FAILED", error_message="Role cannot be assumed"),
        ])

        assert self.poll(poller, fetch, started_at=clock()).outcome == PollOutcome.IN_PROGRESS
        result = self.poll(poller, fetch, started_at=clock())

        assert result.outcome == PollOutcome.FAILED
        assert result.cause == FailureCause.NOT_STABILIZED
        assert result.message == "Role cannot be assumed"

    def test_terminal_failure_without_detail_uses_generic_message(self, clock):
        poller = StabilizationPoller(clock=clock)
        result = self.poll(poller, Mock(return_value=StatusSnapshot(status="FAILED", error_message="  ")),
                           started_at=clock())

        assert result.outcome == PollOutcome.FAILED
        assert result.message == (
            "Resource of type 'AWS::QBusiness::Application' with identifier 'app-1' did not stabilize."
        )

    def test_not_found_is_success_for_delete(self, clock):
        poller = StabilizationPoller(clock=clock)
        result = self.poll(poller, Mock(side_effect=not_found()), OperationType.DELETE, clock())
        assert result.outcome == PollOutcome.STABILIZED

    @pytest.mark.parametrize("operation", [OperationType.CREATE, OperationType.UPDATE])
    def test_not_found_is_fatal_for_create_and_update(self, clock, operation):
        poller = StabilizationPoller(clock=clock)
        result = self.poll(poller, Mock(side_effect=not_found()), operation, clock())
        assert result.outcome == PollOutcome.FAILED
        assert result.cause == FailureCause.NOT_FOUND

    def test_delete_keeps_polling_while_resource_exists(self, clock):
        poller = StabilizationPoller(clock=clock)
        result = self.poll(poller, Mock(return_value=StatusSnapshot(status="ACTIVE")),
                           OperationType.DELETE, clock())
        assert result.outcome == PollOutcome.IN_PROGRESS

    def test_other_errors_are_classified_and_not_retried(self, clock):
        poller = StabilizationPoller(clock=clock)
        error = ClientError({"Error": {"Code": "AccessDeniedException", "Message": "no"}}, "GetIndex")
        fetch = Mock(side_effect=error)

        result = self.poll(poller, fetch, started_at=clock())

        assert result.outcome == PollOutcome.FAILED
        assert result.cause == FailureCause.ACCESS_DENIED
        assert fetch.call_count == 1

    def test_timeout_boundary(self, clock):
        poller = StabilizationPoller(clock=clock)
        started_at = clock()
        fetch = Mock(return_value=StatusSnapshot(status="CREATING"))

        outcomes = []
        for _ in range(10):
            outcomes.append(self.poll(poller, fetch, started_at=started_at).outcome)
            clock.advance(5)

        assert outcomes[:9] == [PollOutcome.IN_PROGRESS] * 9
        assert outcomes[9] == PollOutcome.TIMEOUT
        assert fetch.call_count == 9

    def test_timeout_message_names_resource(self, clock):
        poller = StabilizationPoller(clock=clock)
        started_at = clock()
        clock.advance(45)

        result = self.poll(poller, Mock(return_value=StatusSnapshot(status="CREATING")), started_at=started_at)

        assert result.outcome == PollOutcome.TIMEOUT
        assert result.cause == FailureCause.NOT_STABILIZED
        assert "AWS::QBusiness::Application" in result.message
        assert "app-1" in result.message

    @pytest.mark.parametrize("fetch", [
        Mock(return_value=StatusSnapshot(status="ACTIVE")),
        Mock(side_effect=not_found()),
    ])
    @pytest.mark.parametrize("operation", [OperationType.CREATE, OperationType.DELETE])
    def test_past_deadline_times_out_without_checking_status(self, clock, fetch, operation):
        poller = StabilizationPoller(clock=clock)
        started_at = clock()
        clock.advance(60)

        result = self.poll(poller, fetch, operation, started_at)

        assert result.outcome == PollOutcome.TIMEOUT
        assert result.cause == FailureCause.NOT_STABILIZED
        assert result.message.startswith("Exceeded timeout of 45 seconds.")
        fetch.assert_not_called()

    def test_required_field_delays_stabilization(self, clock):
        poller = StabilizationPoller(clock=clock)
        criteria = StabilizationCriteria(
            terminal_success=frozenset({"ACTIVE", "PENDING_AUTH_CONFIG"}),
            required_field="defaultEndpoint",
        )
        pending = StatusSnapshot(status="ACTIVE", attributes={"status": "ACTIVE"})
        ready = StatusSnapshot(
            status="PENDING_AUTH_CONFIG",
            attributes={"status": "PENDING_AUTH_CONFIG", "defaultEndpoint": "https://x.chat.qbusiness.aws"},
        )

        assert self.poll(poller, Mock(return_value=pending), criteria=criteria,
                         started_at=clock()).outcome == PollOutcome.IN_PROGRESS
        assert self.poll(poller, Mock(return_value=ready), criteria=criteria,
                         started_at=clock()).outcome == PollOutcome.STABILIZED

    def test_error_detail_while_in_progress(self, clock):
        poller = StabilizationPoller(clock=clock)
        snapshot = StatusSnapshot(status="UPDATING", error_message="Invalid connector configuration")

        lenient = self.poll(poller, Mock(return_value=snapshot), started_at=clock())
        strict = self.poll(poller, Mock(return_value=snapshot), started_at=clock(),
                           criteria=StabilizationCriteria(fail_on_error_detail=True))

        assert lenient.outcome == PollOutcome.IN_PROGRESS
        assert strict.outcome == PollOutcome.FAILED
        assert strict.message == "Invalid connector configuration"
