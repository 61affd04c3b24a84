"""Host entry point for resource handler invocations.

The host sends one JSON-style payload per invocation and receives a
ProgressEvent dictionary back. IN_PROGRESS responses carry the callback
context to send with the next invocation.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from qbusiness_resources.application.lifecycle.orchestrator import LifecycleOrchestrator
from qbusiness_resources.config.manager import ConfigurationManager
from qbusiness_resources.domain.lifecycle.progress import ProgressEvent
from qbusiness_resources.domain.lifecycle.request import HandlerRequest
from qbusiness_resources.domain.lifecycle.value_objects import FailureCause
from qbusiness_resources.helpers.logger import setup_logging
from qbusiness_resources.infrastructure.error.error_classifier import ErrorClassifier
from qbusiness_resources.providers.aws.aws_client import AWSClient
from qbusiness_resources.providers.aws.qbusiness_api import QBusinessResourceApi
from qbusiness_resources.providers.aws.resources import get_resource_definition

logger = logging.getLogger(__name__)


def _configure_logging(config_manager: ConfigurationManager) -> None:
    """Apply the manager's logging configuration once per loaded configuration."""
    if not config_manager.logging_configured:
        setup_logging(config_manager.app_config.logging)
        config_manager.logging_configured = True


def handle_request(payload: Dict[str, Any], client: Any = None,
                   config_manager: Optional[ConfigurationManager] = None) -> Dict[str, Any]:
    """
    Handle one invocation from the host.

    Args:
        payload: Host request with ``action``, ``typeName`` and resource states
        client: Optional boto3 qbusiness client; built from configuration if omitted
        config_manager: Optional configuration manager

    Returns:
        ProgressEvent dictionary. Unexpected errors are reported as FAILED
        events rather than raised.
    """
    type_name = payload.get("typeName")
    try:
        request = HandlerRequest.from_dict(payload)
    except PydanticValidationError as e:
        logger.error("Rejected malformed request for %s: %s", type_name, e)
        return ProgressEvent.failed(
            FailureCause.INVALID_REQUEST, f"Invalid request: {e}", resource_type=type_name,
        ).to_dict()

    try:
        config_manager = config_manager or ConfigurationManager()
        _configure_logging(config_manager)

        definition = config_manager.resolve_definition(get_resource_definition(request.type_name))
        if client is None:
            aws_config = config_manager.app_config.aws.model_copy(update={"region": request.region})
            client = AWSClient(aws_config).qbusiness_client

        orchestrator = LifecycleOrchestrator(definition, QBusinessResourceApi(client, definition))
        return orchestrator.handle(request).to_dict()

    except Exception as e:
        logger.exception("Unhandled error while handling %s for %s", request.operation.value, type_name)
        classified = ErrorClassifier().classify(e)
        return ProgressEvent.failed(classified.cause, classified.message, resource_type=type_name).to_dict()
