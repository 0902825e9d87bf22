import re
import time
from typing import Callable

from botocore.exceptions import ClientError

from stepf_deploy.aws.base.aws_client import AWSClient
from stepf_deploy.exceptions import StateMachineCreationError
from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()

BEING_DELETED_PATTERN = re.compile(r"State Machine is being deleted")


def is_being_deleted_error(error: Exception) -> bool:
    """
    Check whether a create failure comes from a same-named machine still being deleted.

    :param error: The error raised by createStateMachine.
    :return: True when the error message matches the pattern.
    """
    message = str(error)
    if isinstance(error, ClientError):
        message = error.response.get("Error", {}).get("Message") or message
    return bool(BEING_DELETED_PATTERN.search(message))


class StepFunctionsHandler:
    """
    Handler for deleting and creating state machines.
    """

    def __init__(
        self,
        aws_client: AWSClient,
        max_attempts: int = 3,
        retry_delay: float = 5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        :param aws_client: Client wrapper providing the stepfunctions client.
        :param max_attempts: Create attempts made while the old machine is being deleted.
        :param retry_delay: Seconds between create attempts.
        :param sleep: Function used to wait between attempts.
        """
        self.stepfunctions_client = aws_client.stepfunctions_client
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep

    def delete_state_machine(self, state_machine_arn: str) -> None:
        """
        Delete a state machine. Any error is propagated.

        :param state_machine_arn: ARN of the state machine to delete.
        """
        try:
            self.stepfunctions_client.delete_state_machine(stateMachineArn=state_machine_arn)
            logger.info(f"Requested deletion of state machine {state_machine_arn}.")
        except ClientError as e:
            logger.error(f"Failed to delete state machine {state_machine_arn}: {e}")
            raise

    def create_state_machine(self, definition: str, name: str, role_arn: str) -> int:
        """
        Create a state machine, retrying while a machine with the same name is being deleted.

        :param definition: Amazon States Language definition, serialized as JSON.
        :param name: Name of the state machine.
        :param role_arn: ARN of the execution role.
        :return: The number of attempts made.
        :raises StateMachineCreationError: If every attempt hit a pending deletion.
        :raises ClientError: For any other create failure.
        """
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                self.stepfunctions_client.create_state_machine(
                    definition=definition,
                    name=name,
                    roleArn=role_arn,
                )
                logger.info(f"Created state machine '{name}' on attempt {attempt}.")
                return attempt
            except ClientError as e:
                if not is_being_deleted_error(e):
                    logger.error(f"Failed to create state machine '{name}': {e}")
                    raise
                last_error = e

            if attempt < self.max_attempts:
                logger.warning(
                    f"State machine '{name}' is still being deleted, retrying in {self.retry_delay}s "
                    f"(attempt {attempt}/{self.max_attempts})."
                )
                self._sleep(self.retry_delay)

        logger.error(f"Gave up creating state machine '{name}' after {self.max_attempts} attempt(s).")
        raise StateMachineCreationError(name, self.max_attempts, last_error)
