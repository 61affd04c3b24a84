"""Main application configuration schema."""

from typing import Dict

from pydantic import BaseModel, Field, field_validator

from .aws_schema import AWSConfig
from .backoff_schema import ResourceBackoffConfig
from .logging_schema import LoggingConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    aws: AWSConfig = Field(default_factory=lambda: AWSConfig())
    backoff: Dict[str, ResourceBackoffConfig] = Field(
        default_factory=dict,
        description="Stabilization policy overrides keyed by resource type name",
    )

    @field_validator("backoff")
    @classmethod
    def validate_backoff(cls, v: Dict[str, ResourceBackoffConfig]) -> Dict[str, ResourceBackoffConfig]:
        """
        Validate backoff overrides.

        Raises:
            ValueError: If a type name is malformed or an override is inconsistent
        """
        for type_name, overrides in v.items():
            if not type_name.startswith("AWS::QBusiness::"):
                raise ValueError(f"Unknown resource type in backoff configuration: {type_name}")
            for policy in (overrides.create, overrides.update, overrides.delete):
                if policy is not None:
                    try:
                        policy.to_policy()
                    except ValueError as e:
                        raise ValueError(f"Invalid backoff policy for {type_name}: {e}") from None
        return v
