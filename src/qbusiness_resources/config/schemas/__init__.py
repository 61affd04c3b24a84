"""Configuration schemas package."""

from .app_schema import AppConfig
from .aws_schema import AWSConfig
from .backoff_schema import BackoffPolicyConfig, ResourceBackoffConfig
from .logging_schema import LoggingConfig

__all__ = [
    # Main configuration
    "AppConfig",
    # Component configurations
    "AWSConfig",
    "LoggingConfig",
    # Stabilization overrides
    "BackoffPolicyConfig",
    "ResourceBackoffConfig",
]
