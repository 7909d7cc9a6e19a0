"""AWS client management for the usergroup-manager function."""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError

from ..errors import AWSConfigError
from .credentials import StaticCredentials

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Builds AWS service clients from static credentials for one region."""

    def __init__(self, region: str, credentials: StaticCredentials):
        """
        Initialize the AWS client manager.

        Args:
            region: AWS region the clients are scoped to
            credentials: Static credentials used to sign requests

        Raises:
            AWSConfigError: If the boto3 session cannot be created
        """
        self.region = region
        self.credentials = credentials
        self.session = None
        self._init_session()

    def _init_session(self) -> None:
        """Initialize the AWS session."""
        # Always set region_name explicitly so AWS_DEFAULT_REGION is never used
        try:
            self.session = boto3.Session(
                aws_access_key_id=self.credentials.access_key_id,
                aws_secret_access_key=self.credentials.secret_access_key,
                aws_session_token=self.credentials.session_token,
                region_name=self.region,
            )
        except BotoCoreError as e:
            raise AWSConfigError(str(e), cause=e)

    def get_client(self, service_name: str) -> Any:
        """
        Get an AWS service client.

        Args:
            service_name: Name of the AWS service

        Returns:
            AWS service client

        Raises:
            AWSConfigError: If the client cannot be created, e.g. for an unknown region
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")
        try:
            return self.session.client(service_name)
        except (BotoCoreError, ValueError) as e:
            # botocore raises ValueError for a malformed region endpoint
            raise AWSConfigError(str(e), cause=e)

    def get_elasticache_client(self) -> Any:
        """Get the ElastiCache client."""
        logger.debug("Creating ElastiCache client", extra={"region": self.region})
        return self.get_client("elasticache")
