"""Error classification for remote calls.

Every failure raised by a remote call is mapped to exactly one member of the
closed FailureCause taxonomy. The mapping only looks at the error itself, so
the same error from any resource type classifies the same way.
"""
import logging
from typing import NamedTuple

from botocore.exceptions import ClientError, ParamValidationError

from qbusiness_resources.domain.core.exceptions import (
    HandlerFailure,
    ResourceNotFoundError,
    ValidationError,
)
from qbusiness_resources.domain.lifecycle.value_objects import FailureCause

logger = logging.getLogger(__name__)


class ClassifiedError(NamedTuple):
    cause: FailureCause
    message: str


class ErrorClassifier:
    """Maps remote-call failures to FailureCause values."""

    ERROR_CODE_CAUSES = {
        'ValidationException': FailureCause.INVALID_REQUEST,
        'ValidationError': FailureCause.INVALID_REQUEST,
        'InvalidParameterValue': FailureCause.INVALID_REQUEST,
        'ConflictException': FailureCause.CONFLICT,
        'ResourceInUse': FailureCause.CONFLICT,
        'ResourceNotFoundException': FailureCause.NOT_FOUND,
        'ResourceNotFound': FailureCause.NOT_FOUND,
        'ServiceQuotaExceededException': FailureCause.QUOTA_EXCEEDED,
        'LimitExceeded': FailureCause.QUOTA_EXCEEDED,
        'LimitExceededException': FailureCause.QUOTA_EXCEEDED,
        'ThrottlingException': FailureCause.THROTTLED,
        'RequestLimitExceeded': FailureCause.THROTTLED,
        'TooManyRequestsException': FailureCause.THROTTLED,
        'AccessDeniedException': FailureCause.ACCESS_DENIED,
        'AccessDenied': FailureCause.ACCESS_DENIED,
        'UnauthorizedOperation': FailureCause.ACCESS_DENIED,
    }

    def classify(self, error: BaseException) -> ClassifiedError:
        """
        Classify an error raised by a remote call.

        Args:
            error: The raised exception

        Returns:
            ClassifiedError with the cause and a human-readable message
        """
        if isinstance(error, HandlerFailure):
            return ClassifiedError(error.cause, error.message)

        if isinstance(error, ClientError):
            error_code = error.response.get('Error', {}).get('Code', '')
            error_message = error.response.get('Error', {}).get('Message') or str(error)
            cause = self.ERROR_CODE_CAUSES.get(error_code, FailureCause.SERVICE_ERROR)
            if cause == FailureCause.SERVICE_ERROR:
                logger.debug("Unmapped error code %s classified as service error", error_code)
            return ClassifiedError(cause, error_message)

        if isinstance(error, (ParamValidationError, ValidationError)):
            return ClassifiedError(FailureCause.INVALID_REQUEST, str(error))

        if isinstance(error, ResourceNotFoundError):
            return ClassifiedError(FailureCause.NOT_FOUND, str(error))

        return ClassifiedError(FailureCause.SERVICE_ERROR, str(error) or error.__class__.__name__)

    def is_not_found(self, error: BaseException) -> bool:
        """Check whether an error signals that the resource does not exist."""
        return self.classify(error).cause == FailureCause.NOT_FOUND
