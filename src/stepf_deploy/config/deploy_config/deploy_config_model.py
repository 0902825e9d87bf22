from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from stepf_deploy.models.base_model import BaseModel


@dataclass
class DeployConfig(BaseModel):
    """
    Settings for the deploy command, including AWS client and logging settings.
    Dynamically keeps any arbitrary configuration parameters in additionalProperties.
    """
    AWS_REGION: Optional[str] = None
    AWS_PROFILE: Optional[str] = None
    AWS_ENDPOINT_URL: Optional[str] = None
    AWS_MAX_RETRIES: int = 3
    AWS_CONNECT_TIMEOUT: int = 5
    AWS_READ_TIMEOUT: int = 10
    DEFAULT_REGION: str = "us-east-1"
    ARN_PARTITION: str = "aws"
    ROLE_LOOKUP_REGION: str = "us-east-1"
    EXECUTION_ROLE_NAME: str = "serverless-step-functions-executerole"
    CREATE_RETRY_ATTEMPTS: int = 3
    CREATE_RETRY_DELAY_SEC: float = 5
    LOG_LEVEL: str = "INFO"
    LOG_DESTINATION: str = "stdout"
    LOG_DIR: Optional[str] = None
    LOG_FILENAME: Optional[str] = None

    # Store all additional fields dynamically
    additionalProperties: Dict[str, Any] = field(default_factory=dict)

    @property
    def region(self) -> str:
        """Region used when the invocation does not name one."""
        return self.AWS_REGION or self.DEFAULT_REGION

    @property
    def role_lookup_name(self) -> str:
        return f"StatesExecutionRole-{self.ROLE_LOOKUP_REGION}"

    def validate(self) -> None:
        """
        Validate the configuration. Raises ValueError if any fields are missing or invalid.

        :raises ValueError: If validation fails.
        """
        if not self.DEFAULT_REGION:
            raise ValueError("DEFAULT_REGION is required.")
        if not self.ARN_PARTITION:
            raise ValueError("ARN_PARTITION is required.")
        if not self.ROLE_LOOKUP_REGION:
            raise ValueError("ROLE_LOOKUP_REGION is required.")
        if not self.EXECUTION_ROLE_NAME:
            raise ValueError("EXECUTION_ROLE_NAME is required.")

        # Retry validation
        if not (0 <= self.AWS_MAX_RETRIES <= 10):
            raise ValueError("AWS_MAX_RETRIES must be between 0 and 10.")
        if not (1 <= self.CREATE_RETRY_ATTEMPTS <= 10):
            raise ValueError("CREATE_RETRY_ATTEMPTS must be between 1 and 10.")
        if self.CREATE_RETRY_DELAY_SEC < 0:
            raise ValueError("CREATE_RETRY_DELAY_SEC must not be negative.")

        # Logging validation
        if self.LOG_DESTINATION not in ("file", "stdout", "both"):
            raise ValueError(f"Unsupported log destination: {self.LOG_DESTINATION}")
        if not self.LOG_DIR:
            self.LOG_DIR = "./logs"
        if not self.LOG_FILENAME:
            self.LOG_FILENAME = "stepf_deploy.log"
