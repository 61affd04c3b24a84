"""Lifecycle orchestrator.

Drives create, read, update, delete and list for any resource type described
by a ResourceDefinition. Mutating operations are step plans whose position is
persisted in the OperationContext, so a long-running operation is resumed by
the host re-invoking the handler with the context it was last given.

Each invocation performs at most one mutating call and at most one status
poll; whatever remains is left for the next invocation.
"""

import time
from typing import Any, Callable, Dict, Optional, Union

from qbusiness_resources.domain.base.ports import ResourceApiPort, ResourceDefinitionPort
from qbusiness_resources.domain.lifecycle.operation_context import OperationContext
from qbusiness_resources.domain.lifecycle.progress import ProgressEvent
from qbusiness_resources.domain.lifecycle.request import HandlerRequest
from qbusiness_resources.domain.lifecycle.value_objects import (
    OperationType,
    ResourceHandle,
    TagDelta,
    TagSet,
)
from qbusiness_resources.helpers.logger import get_logger
from qbusiness_resources.infrastructure.error.error_classifier import ErrorClassifier
from qbusiness_resources.infrastructure.stabilization.poller import PollOutcome, StabilizationPoller
from qbusiness_resources.infrastructure.tagging.tag_reconciler import TagReconciler

StepOutcome = Union[OperationContext, ProgressEvent]

STEP_PLANS = {
    OperationType.CREATE: (
        "create", "stabilize", "post_create_update", "post_create_stabilize", "read",
    ),
    OperationType.UPDATE: ("update", "stabilize", "add_tags", "remove_tags", "read"),
    OperationType.DELETE: ("delete", "stabilize"),
}


class _InvocationBudget:
    """Remote work still allowed in the current invocation."""

    def __init__(self):
        self.mutation_used = False
        self.poll_used = False


class LifecycleOrchestrator:
    """Generic handler for one resource type."""

    def __init__(self,
                 definition: ResourceDefinitionPort,
                 api: ResourceApiPort,
                 poller: Optional[StabilizationPoller] = None,
                 clock: Callable[[], float] = time.time,
                 classifier: Optional[ErrorClassifier] = None):
        """
        Initialize the orchestrator.

        Args:
            definition: Capabilities of the resource type
            api: Remote API port for the resource type
            poller: Stabilization poller, built on the same clock when omitted
            clock: Source of epoch seconds
            classifier: Error classifier for remote-call failures
        """
        self.definition = definition
        self.api = api
        self._clock = clock
        self._classifier = classifier or ErrorClassifier()
        self._poller = poller or StabilizationPoller(self._classifier, clock)

    def handle(self, request: HandlerRequest) -> ProgressEvent:
        """
        Run one invocation of the requested operation.

        Returns:
            ProgressEvent that is terminal, or IN_PROGRESS with the context
            the host must hand back on the next invocation
        """
        log = get_logger(__name__).bind(
            resource_type=self.definition.type_name,
            operation=request.operation.value,
            stack_id=request.stack_id,
        )
        handle = self.definition.handle_for(
            request.desired_resource_state,
            request.callback_context.identifiers if request.callback_context else None,
        )
        step = request.operation.value.lower()

        try:
            if request.operation == OperationType.READ:
                log.info("Reading resource", identifier=handle.primary_identifier)
                return self._read(request, handle)

            if request.operation == OperationType.LIST:
                log.info("Listing resources")
                return self._list(request)

            context = self._resume(request, handle, log)
            budget = _InvocationBudget()
            steps = STEP_PLANS[request.operation]

            while context.step_index < len(steps):
                step = steps[context.step_index]
                handle = self.definition.handle_for(request.desired_resource_state, context.identifiers)
                log.debug("Running step", step=step, step_index=context.step_index,
                          identifier=handle.primary_identifier)

                outcome = getattr(self, f"_step_{step}")(request, context, handle, budget, log)
                if isinstance(outcome, ProgressEvent):
                    return outcome
                context = outcome

            log.info("Operation complete", identifier=handle.primary_identifier)
            return ProgressEvent.success(None)

        except Exception as e:
            classified = self._classifier.classify(e)
            log.error(
                "Operation failed",
                step=step,
                identifier=handle.primary_identifier,
                error_code=classified.cause.value,
                error_message=classified.message,
            )
            return ProgressEvent.failed(
                classified.cause,
                classified.message,
                resource_type=self.definition.type_name,
                identifier=handle.primary_identifier,
            )

    def _resume(self, request: HandlerRequest, handle: ResourceHandle, log) -> OperationContext:
        context = request.callback_context
        if context is not None and context.operation == request.operation:
            log.info("Resuming operation", step_index=context.step_index,
                     poll_count=context.poll_count)
            return context

        if context is not None:
            log.warning("Discarding context of a different operation",
                        context_operation=context.operation.value)
        log.info("Starting operation", identifier=handle.primary_identifier)
        return OperationContext.start(request.operation, self._clock(), handle.values)

    def _progress_model(self, request: HandlerRequest, context: OperationContext) -> Dict[str, Any]:
        model = dict(request.desired_resource_state)
        model.update(context.identifiers)
        return model

    def _arn(self, request: HandlerRequest, handle: ResourceHandle) -> str:
        return self.definition.build_arn(
            request.aws_partition,
            request.region,
            request.aws_account_id,
            handle,
        )

    def _effective_tags(self, request: HandlerRequest) -> TagSet:
        return TagReconciler.compute_effective_tags(
            request.system_tags,
            request.desired_resource_tags,
            TagReconciler.tags_from_model(request.desired_resource_state),
        )

    def _previous_tags(self, request: HandlerRequest) -> TagSet:
        return TagReconciler.compute_effective_tags(
            request.previous_system_tags,
            request.previous_resource_tags,
            TagReconciler.tags_from_model(request.previous_resource_state),
        )

    def _tag_delta(self, request: HandlerRequest) -> TagDelta:
        if not self.definition.taggable:
            return TagDelta()
        return TagReconciler.diff(self._previous_tags(request), self._effective_tags(request))

    def _out_of_mutations(self, request: HandlerRequest, context: OperationContext,
                          budget: _InvocationBudget) -> Optional[ProgressEvent]:
        if budget.mutation_used:
            return ProgressEvent.progress(self._progress_model(request, context), context, 0)
        budget.mutation_used = True
        return None

    # Steps

    def _step_create(self, request, context, handle, budget, log) -> StepOutcome:
        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        tags = self._effective_tags(request) if self.definition.taggable else {}
        response = self.api.create(self.definition.translate_create(
            request.desired_resource_state, handle, request.client_request_token, tags,
        ))
        handle = handle.with_values(self.definition.assigned_identifiers(response))
        log.info("Created resource", identifier=handle.primary_identifier, tag_count=len(tags))
        return context.with_identifiers(handle.values).advance(self._clock())

    def _step_update(self, request, context, handle, budget, log) -> StepOutcome:
        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        self.api.update(self.definition.translate_update(request.desired_resource_state, handle))
        log.info("Updated resource", identifier=handle.primary_identifier)
        return context.advance(self._clock())

    def _step_delete(self, request, context, handle, budget, log) -> StepOutcome:
        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        self.api.delete(self.definition.translate_delete(handle))
        log.info("Deleted resource", identifier=handle.primary_identifier)
        return context.advance(self._clock())

    def _step_stabilize(self, request, context, handle, budget, log) -> StepOutcome:
        operation = context.operation
        if not self.definition.stabilizes(operation):
            return context.advance(self._clock())

        policy = self.definition.policy_for(operation)
        if budget.poll_used:
            return ProgressEvent.progress(
                self._progress_model(request, context), context, policy.poll_interval,
            )
        budget.poll_used = True

        def fetch_status():
            response = self.api.get(self.definition.translate_read(handle))
            return self.definition.status_snapshot(response)

        started_at = context.step_started_at if context.step_started_at is not None else self._clock()
        result = self._poller.poll(
            fetch_status,
            self.definition.criteria,
            policy,
            operation,
            started_at,
            self.definition.type_name,
            handle.primary_identifier,
        )
        log.info("Polled status", identifier=handle.primary_identifier, outcome=result.outcome.value,
                 status=result.status, poll_count=context.poll_count + 1,
                 elapsed=context.elapsed(self._clock()))

        if result.outcome == PollOutcome.IN_PROGRESS:
            context = context.record_poll()
            return ProgressEvent.progress(
                self._progress_model(request, context), context, policy.poll_interval,
            )
        if result.outcome == PollOutcome.STABILIZED:
            return context.advance(self._clock())

        log.error("Stabilization ended", identifier=handle.primary_identifier,
                  outcome=result.outcome.value, error_code=result.cause.value,
                  error_message=result.message)
        return ProgressEvent.failed(
            result.cause,
            result.message,
            resource_type=self.definition.type_name,
            identifier=handle.primary_identifier,
        )

    def _step_post_create_update(self, request, context, handle, budget, log) -> StepOutcome:
        body = self.definition.translate_post_create_update(request.desired_resource_state, handle)
        if body is None:
            return context.advance(self._clock())

        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        self.api.update(body)
        log.info("Applied post-create update", identifier=handle.primary_identifier,
                 properties=sorted(body))
        return context.advance(self._clock())

    def _step_post_create_stabilize(self, request, context, handle, budget, log) -> StepOutcome:
        if self.definition.translate_post_create_update(request.desired_resource_state, handle) is None:
            return context.advance(self._clock())
        return self._step_stabilize(request, context, handle, budget, log)

    def _step_add_tags(self, request, context, handle, budget, log) -> StepOutcome:
        delta = self._tag_delta(request)
        if not delta.to_add:
            return context.advance(self._clock())

        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        log.debug("Adding tags", identifier=handle.primary_identifier, keys=sorted(delta.to_add))
        self.api.add_tags(self._arn(request, handle), delta.to_add)
        return context.advance(self._clock())

    def _step_remove_tags(self, request, context, handle, budget, log) -> StepOutcome:
        delta = self._tag_delta(request)
        if not delta.to_remove:
            return context.advance(self._clock())

        pending = self._out_of_mutations(request, context, budget)
        if pending:
            return pending

        log.debug("Removing tags", identifier=handle.primary_identifier, keys=sorted(delta.to_remove))
        self.api.remove_tags(self._arn(request, handle), delta.to_remove)
        return context.advance(self._clock())

    def _step_read(self, request, context, handle, budget, log) -> StepOutcome:
        return self._read(request, handle)

    # Non-mutating operations

    def _read(self, request: HandlerRequest, handle: ResourceHandle) -> ProgressEvent:
        response = self.api.get(self.definition.translate_read(handle))
        model: Dict[str, Any] = dict(handle.values)
        model.update(self.definition.translate_from_read(response, handle))
        if self.definition.taggable:
            tags = self.api.list_tags(self._arn(request, handle))
            if tags:
                model["Tags"] = TagReconciler.to_model_tags(tags)
        return ProgressEvent.success(model)

    def _list(self, request: HandlerRequest) -> ProgressEvent:
        response = self.api.list(
            self.definition.translate_list(request.desired_resource_state, request.next_token)
        )
        models, next_token = self.definition.translate_from_list(response, request.desired_resource_state)
        return ProgressEvent.list_success(models, next_token)
