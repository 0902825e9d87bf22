from botocore.exceptions import ClientError

from stepf_deploy.aws.base.aws_client import AWSClient
from stepf_deploy.exceptions import RoleNotFoundError
from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()

EXECUTION_ROLE_NAME = "serverless-step-functions-executerole"

# Sent as the AssumeRolePolicyDocument of the created role, byte for byte.
EXECUTION_ROLE_POLICY_DOCUMENT = """{
      "Version": "2012-10-17",
      "Statement": [
        {
          "Effect": "Allow",
          "Action": [
            "lambda:InvokeFunction"
          ],
          "Resource": "*"
        }
      ]
    }
    """


def is_not_found_error(error: ClientError) -> bool:
    """
    Check whether an IAM error means the entity does not exist.

    :param error: The error raised by the IAM client.
    :return: True for NoSuchEntity or an HTTP 404 response.
    """
    response = getattr(error, "response", None) or {}
    if response.get("Error", {}).get("Code") == "NoSuchEntity":
        return True
    return response.get("ResponseMetadata", {}).get("HTTPStatusCode") == 404


class IAMRoleHandler:
    """
    Handler for the IAM role the state machine executes under.
    """

    def __init__(self, aws_client: AWSClient):
        self.iam_client = aws_client.iam_client

    def get_role_arn(self, role_name: str) -> str:
        """
        Retrieve the ARN of an existing IAM role.

        :param role_name: The name of the role to retrieve.
        :return: The ARN of the role.
        :raises RoleNotFoundError: If the role does not exist.
        """
        try:
            response = self.iam_client.get_role(RoleName=role_name)
            logger.info(f"Retrieved ARN for role '{role_name}'.")
            return response["Role"]["Arn"]
        except ClientError as e:
            if is_not_found_error(e):
                raise RoleNotFoundError(role_name) from e
            logger.error(f"Failed to retrieve ARN for role '{role_name}': {e}")
            raise

    def create_execution_role(self, role_name: str, policy_document: str) -> str:
        """
        Create the execution role.

        :param role_name: The name of the role to create.
        :param policy_document: AssumeRolePolicyDocument of the role.
        :return: The ARN of the created role.
        """
        try:
            response = self.iam_client.create_role(
                AssumeRolePolicyDocument=policy_document,
                RoleName=role_name,
            )
            logger.info(f"Created execution role '{role_name}' successfully.")
            return response["Role"]["Arn"]
        except ClientError as e:
            logger.error(f"Failed to create execution role '{role_name}': {e}")
            raise

    def resolve_execution_role(
        self,
        lookup_name: str,
        create_name: str = EXECUTION_ROLE_NAME,
        policy_document: str = EXECUTION_ROLE_POLICY_DOCUMENT,
    ) -> str:
        """
        Look up the execution role and create one when the lookup finds nothing.

        :param lookup_name: Role searched for first.
        :param create_name: Role created when the lookup reports not found.
        :param policy_document: AssumeRolePolicyDocument of a created role.
        :return: The ARN of the role to use.
        """
        try:
            return self.get_role_arn(lookup_name)
        except RoleNotFoundError:
            logger.warning(f"Role '{lookup_name}' not found. Creating '{create_name}'...")
            return self.create_execution_role(create_name, policy_document)
