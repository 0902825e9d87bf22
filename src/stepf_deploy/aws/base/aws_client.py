"""AWS client wrapper with shared session and retry settings."""

from typing import Any, Optional

import boto3
from botocore.config import Config

from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()


class AWSClient:
    """Holds one boto3 session and lazily creates the service clients used by the deploy."""

    def __init__(
        self,
        region_name: str,
        profile_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        max_attempts: int = 3,
        connect_timeout: int = 5,
        read_timeout: int = 10,
    ) -> None:
        """
        Initialize AWS client wrapper.

        Args:
            region_name: Region every client is bound to
            profile_name: Named credentials profile, default chain when None
            endpoint_url: Endpoint override (e.g. a local emulator)
            max_attempts: botocore retry attempts per request
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
        """
        self.region_name = region_name
        self.profile_name = profile_name
        self.endpoint_url = endpoint_url

        # Configure retry settings
        self.boto_config = Config(
            region_name=region_name,
            retries={"max_attempts": max_attempts, "mode": "standard"},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        self.session = boto3.Session(region_name=region_name, profile_name=profile_name)

        # Clients are created on first use
        self._sts_client = None
        self._iam_client = None
        self._stepfunctions_client = None

        logger.debug(
            f"AWS client initialized with region: {region_name}, profile: {profile_name or 'default'}, "
            f"retries: {max_attempts}, timeouts: connect={connect_timeout}s, read={read_timeout}s"
        )

    @classmethod
    def from_config(cls, config, region_name: Optional[str] = None, profile_name: Optional[str] = None) -> "AWSClient":
        """Build a client from a DeployConfig, letting explicit arguments win."""
        return cls(
            region_name=region_name or config.region,
            profile_name=profile_name or config.AWS_PROFILE,
            endpoint_url=config.AWS_ENDPOINT_URL,
            max_attempts=config.AWS_MAX_RETRIES,
            connect_timeout=config.AWS_CONNECT_TIMEOUT,
            read_timeout=config.AWS_READ_TIMEOUT,
        )

    def _create_client(self, service_name: str) -> Any:
        kwargs = {"config": self.boto_config}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return self.session.client(service_name, **kwargs)

    @property
    def sts_client(self) -> Any:
        if self._sts_client is None:
            self._sts_client = self._create_client("sts")
        return self._sts_client

    @property
    def iam_client(self) -> Any:
        if self._iam_client is None:
            self._iam_client = self._create_client("iam")
        return self._iam_client

    @property
    def stepfunctions_client(self) -> Any:
        if self._stepfunctions_client is None:
            self._stepfunctions_client = self._create_client("stepfunctions")
        return self._stepfunctions_client
