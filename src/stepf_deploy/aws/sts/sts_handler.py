from typing import Optional

from botocore.exceptions import ClientError

from stepf_deploy.aws.base.aws_client import AWSClient
from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()

DEFAULT_REGION = "us-east-1"
DEFAULT_PARTITION = "aws"


def build_state_machine_arn(
    account_id: str,
    name: str,
    region: Optional[str] = None,
    partition: str = DEFAULT_PARTITION,
) -> str:
    """
    Compose the ARN of a state machine. The name is used as given.

    :param account_id: Account that owns the state machine.
    :param name: State machine name.
    :param region: Target region, DEFAULT_REGION when unset.
    :param partition: ARN partition.
    :return: The state machine ARN.
    """
    region = region or DEFAULT_REGION
    return f"arn:{partition}:states:{region}:{account_id}:stateMachine:{name}"


class StsHandler:
    """
    Handler for resolving the identity of the caller.
    """

    def __init__(self, aws_client: AWSClient):
        self.sts_client = aws_client.sts_client

    def get_account_id(self) -> str:
        """
        Retrieve the account of the credentials in use.

        :return: The account identifier.
        """
        try:
            response = self.sts_client.get_caller_identity()
            logger.info("Resolved caller identity.")
            return response["Account"]
        except ClientError as e:
            logger.error(f"Failed to resolve caller identity: {e}")
            raise
