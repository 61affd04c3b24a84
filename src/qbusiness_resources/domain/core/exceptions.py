# src/qbusiness_resources/domain/core/exceptions.py
from typing import Any, List, Optional

from qbusiness_resources.domain.lifecycle.value_objects import FailureCause


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ResourceNotFoundError(DomainException):
    """Raised when a requested resource cannot be found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class UnknownResourceTypeError(ValidationError):
    """Raised when no handler is registered for a resource type name."""
    def __init__(self, type_name: str):
        super().__init__(f"No handler registered for resource type {type_name}")
        self.type_name = type_name


class HandlerFailure(DomainException):
    """A failure that has already been classified into a FailureCause."""
    def __init__(self, cause: FailureCause, message: str,
                 resource_type: Optional[str] = None, identifier: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        self.message = message
        self.resource_type = resource_type
        self.identifier = identifier
