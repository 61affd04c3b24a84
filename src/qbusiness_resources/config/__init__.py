"""Configuration package."""

from .manager import ConfigurationManager
from .schemas import AWSConfig, AppConfig, BackoffPolicyConfig, LoggingConfig, ResourceBackoffConfig

__all__ = [
    "ConfigurationManager",
    "AppConfig",
    "AWSConfig",
    "LoggingConfig",
    "BackoffPolicyConfig",
    "ResourceBackoffConfig",
]
