"""Unit tests for lifecycle value objects."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from qbusiness_resources.domain.lifecycle import (
    BackoffPolicy,
    FailureCause,
    HandlerRequest,
    OperationContext,
    OperationStatus,
    OperationType,
    ProgressEvent,
    ResourceHandle,
)


@pytest.mark.unit
class TestBackoffPolicy:
    """Test cases for BackoffPolicy."""

    def test_of_durations(self):
        policy = BackoffPolicy.of(timeout=timedelta(hours=4), delay=timedelta(seconds=30))
        assert policy.timeout == 14400
        assert policy.poll_interval == 30

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            BackoffPolicy(poll_interval=0, timeout=10)

    def test_timeout_must_exceed_poll_interval(self):
        with pytest.raises(ValidationError):
            BackoffPolicy(poll_interval=10, timeout=10)


@pytest.mark.unit
class TestResourceHandle:
    """Test cases for ResourceHandle."""

    def test_known_identifiers_take_precedence(self):
        handle = ResourceHandle.from_model(
            ("ApplicationId", "IndexId"),
            {"ApplicationId": "app-1", "IndexId": "stale"},
            {"IndexId": "idx-1"},
        )
        assert handle.primary_identifier == "idx-1"

    def test_partial_handle(self):
        handle = ResourceHandle.from_model(("ApplicationId", "IndexId"), {"ApplicationId": "app-1"})
        assert handle.primary_identifier is None

        assigned = handle.with_values({"IndexId": "idx-1", "Unrelated": "x"})
        assert assigned.values == {"ApplicationId": "app-1", "IndexId": "idx-1"}
        assert handle.values == {"ApplicationId": "app-1"}


@pytest.mark.unit
class TestOperationContext:
    """Test cases for OperationContext."""

    def test_start(self):
        context = OperationContext.start(OperationType.CREATE, 100.0, {"ApplicationId": "app-1"})
        assert context.step_index == 0
        assert context.step_started_at == 100.0
        assert context.poll_count == 0

    def test_advance_resets_anchor(self):
        context = OperationContext.start(OperationType.UPDATE, 100.0).record_poll().record_poll()
        advanced = context.advance(250.0)

        assert advanced.step_index == 1
        assert advanced.step_started_at == 250.0
        assert advanced.poll_count == 0
        assert context.step_index == 0
        assert advanced.elapsed(260.0) == 10.0

    def test_round_trip(self):
        context = (
            OperationContext.start(OperationType.CREATE, 100.0)
            .with_identifiers({"ApplicationId": "app-1"})
            .advance(130.0)
            .record_poll()
        )
        data = context.to_dict()

        assert data == {
            "operation": "CREATE",
            "stepIndex": 1,
            "identifiers": {"ApplicationId": "app-1"},
            "stepStartedAt": 130.0,
            "pollCount": 1,
        }
        assert OperationContext.from_dict(data) == context

    def test_context_is_immutable(self):
        context = OperationContext.start(OperationType.DELETE, 1.0)
        with pytest.raises(ValidationError):
            context.step_index = 3


@pytest.mark.unit
class TestHandlerRequest:
    """Test cases for HandlerRequest."""

    def test_from_host_payload(self):
        request = HandlerRequest.from_dict({
            "action": "create",
            "typeName": "AWS::QBusiness::Application",
            "desiredResourceState": {"DisplayName": "demo"},
            "desiredResourceTags": {"env": "prod"},
            "clientRequestToken": "token-1",
            "awsAccountId": "123456789012",
            "callbackContext": {
                "operation": "CREATE", "stepIndex": 1, "identifiers": {"ApplicationId": "app-1"},
                "stepStartedAt": 5.0, "pollCount": 2,
            },
        })

        assert request.operation == OperationType.CREATE
        assert request.client_request_token == "token-1"
        assert request.callback_context.identifiers == {"ApplicationId": "app-1"}
        assert request.desired_resource_tags == {"env": "prod"}

    def test_empty_context_and_missing_state(self):
        request = HandlerRequest.from_dict({
            "action": "LIST",
            "typeName": "AWS::QBusiness::Application",
            "desiredResourceState": None,
            "callbackContext": {},
        })
        assert request.callback_context is None
        assert request.desired_resource_state == {}


@pytest.mark.unit
class TestProgressEvent:
    """Test cases for ProgressEvent serialization."""

    def test_in_progress_carries_context(self):
        context = OperationContext.start(OperationType.CREATE, 1.0)
        data = ProgressEvent.progress({"DisplayName": "demo"}, context, 30.0).to_dict()

        assert data["status"] == "IN_PROGRESS"
        assert data["callbackDelaySeconds"] == 30
        assert data["callbackContext"]["stepIndex"] == 0

    def test_failed_event(self):
        event = ProgressEvent.failed(FailureCause.NOT_STABILIZED, "did not stabilize",
                                     resource_type="AWS::QBusiness::Index", identifier="idx-1")
        data = event.to_dict()

        assert event.is_terminal
        assert data == {
            "status": "FAILED",
            "errorCode": "NotStabilized",
            "message": "did not stabilize",
            "resourceType": "AWS::QBusiness::Index",
            "identifier": "idx-1",
        }

    def test_list_success(self):
        data = ProgressEvent.list_success([{"ApplicationId": "a"}], "next").to_dict()
        assert data == {"status": OperationStatus.SUCCESS.value,
                        "resourceModels": [{"ApplicationId": "a"}], "nextToken": "next"}
