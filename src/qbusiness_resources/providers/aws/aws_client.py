"""AWS client construction."""

import logging
from typing import Optional

import boto3
from botocore.config import Config

from qbusiness_resources.config.schemas.aws_schema import AWSConfig
from qbusiness_resources.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AWSClient:
    """
    Centralized AWS client management.
    Builds the boto3 clients the resource handlers talk to.
    """

    def __init__(self, config: Optional[AWSConfig] = None, session: Optional[boto3.Session] = None):
        """
        Initialize AWS client with configuration.

        Args:
            config: AWS configuration, defaults apply when omitted
            session: Optional boto3 session carrying caller credentials

        Raises:
            ConfigurationError: If credential validation is enabled and fails
        """
        self.aws_config = config or AWSConfig()
        self.region_name = self.aws_config.region
        self.session = session or boto3.Session(
            profile_name=self.aws_config.profile,
            region_name=self.region_name,
        )
        self.config = Config(
            region_name=self.region_name,
            retries={
                'max_attempts': self.aws_config.max_retries,
                'mode': 'standard'
            },
            connect_timeout=self.aws_config.connect_timeout_ms / 1000,
            read_timeout=self.aws_config.read_timeout_ms / 1000,
        )

        if self.aws_config.validate_credentials:
            self._validate_credentials()

        self._qbusiness_client = None

    def _validate_credentials(self) -> None:
        try:
            sts = self.session.client('sts', config=self.config)
            identity = sts.get_caller_identity()
            logger.debug("Using AWS identity %s", identity.get('Arn'))
        except Exception as e:
            logger.error("Failed to validate AWS credentials: %s", str(e))
            raise ConfigurationError(f"Failed to validate AWS credentials: {str(e)}") from e

    @property
    def qbusiness_client(self):
        """Lazily created boto3 ``qbusiness`` client."""
        if self._qbusiness_client is None:
            kwargs = {'config': self.config}
            if self.aws_config.endpoint_url:
                kwargs['endpoint_url'] = self.aws_config.endpoint_url
            self._qbusiness_client = self.session.client('qbusiness', **kwargs)
            logger.debug("Created qbusiness client for region %s", self.region_name)
        return self._qbusiness_client
