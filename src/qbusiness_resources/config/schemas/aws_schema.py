"""AWS client configuration schema."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AWSConfig(BaseModel):
    """AWS client configuration."""

    region: str = Field("us-east-1", description="AWS region")
    profile: Optional[str] = Field(None, description="AWS profile name")
    endpoint_url: Optional[str] = Field(None, description="Override endpoint for the qbusiness API")
    max_retries: int = Field(3, description="Maximum attempts for the standard retry mode")
    connect_timeout_ms: int = Field(1000, description="Connection timeout in milliseconds")
    read_timeout_ms: int = Field(60000, description="Read timeout in milliseconds")
    validate_credentials: bool = Field(False, description="Check credentials with STS on startup")

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate retry attempts."""
        if v < 1:
            raise ValueError("Max retries must be at least 1")
        return v

    @field_validator("connect_timeout_ms", "read_timeout_ms")
    @classmethod
    def validate_timeouts(cls, v: int) -> int:
        """Validate timeouts."""
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v
