import json
from datetime import date
from dataclasses import replace
from typing import Callable, Optional

import yaml
from botocore.exceptions import BotoCoreError, ClientError

from stepf_deploy.aws.base.aws_client import AWSClient
from stepf_deploy.aws.iam_role.iam_role_handler import (
    EXECUTION_ROLE_POLICY_DOCUMENT,
    IAMRoleHandler,
)
from stepf_deploy.aws.step_functions.step_functions_handler import StepFunctionsHandler
from stepf_deploy.aws.sts.sts_handler import StsHandler, build_state_machine_arn
from stepf_deploy.config.deploy_config.deploy_config_model import DeployConfig
from stepf_deploy.config.service_file.service_file_handler import ServiceFileHandler
from stepf_deploy.exceptions import (
    ServiceFileError,
    StateMachineCreationError,
    StateMachineNotDefinedError,
    StepfDeployError,
)
from stepf_deploy.helpers.logger import setup_logging
from stepf_deploy.models.deployment import DeploymentResult, DeploymentState, InvocationContext

logger = setup_logging()

# Failures reported back to the caller instead of raised
DEPLOY_ERRORS = (StepfDeployError, ClientError, BotoCoreError, yaml.YAMLError, OSError)


def _json_default(value):
    # Explicitly tagged !!timestamp values
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class StepFunctionsDeployer:
    """
    Deploys one state machine: resolves the target ARN and execution role, then
    replaces any deployed state machine of the same name with the definition
    from the service file.
    """

    def __init__(
        self,
        config: DeployConfig,
        aws_client: AWSClient,
        sts_handler: Optional[StsHandler] = None,
        iam_role_handler: Optional[IAMRoleHandler] = None,
        step_functions_handler: Optional[StepFunctionsHandler] = None,
        service_file_handler_factory: Callable[[Optional[str]], ServiceFileHandler] = ServiceFileHandler,
    ):
        """
        Initialize the deployer with a handler for each AWS service involved.

        :param config: Validated deploy configuration.
        :param aws_client: Client wrapper bound to the target region.
        :param service_file_handler_factory: Builds the service file reader for a service path.
        """
        self.config = config
        self.aws_client = aws_client
        self.sts_handler = sts_handler or StsHandler(aws_client)
        self.iam_role_handler = iam_role_handler or IAMRoleHandler(aws_client)
        self.step_functions_handler = step_functions_handler or StepFunctionsHandler(
            aws_client,
            max_attempts=config.CREATE_RETRY_ATTEMPTS,
            retry_delay=config.CREATE_RETRY_DELAY_SEC,
        )
        self.service_file_handler_factory = service_file_handler_factory

    def deploy(self, context: InvocationContext) -> DeploymentResult:
        """
        Deploy the state machine named in the invocation context.

        :param context: The invocation parameters.
        :return: The outcome; failures carry the reason and the underlying error.
        """
        logger.info(f"Start deploying state machine '{context.statemachine}' (stage: {context.stage or 'default'})")
        state = DeploymentState(statemachine=context.statemachine)

        try:
            # Step 1: Load the stepFunctions section of the service file
            state = self._load_definitions(state, context)

            # Step 2: Resolve the account and build the target ARN
            state = self._resolve_target_arn(state, context)

            # Step 3: Pick and serialize the requested definition
            state = self._extract_definition(state)

            # Step 4: Look up or create the execution role
            state = self._resolve_execution_role(state)
        except DEPLOY_ERRORS as e:
            logger.error(f"Deploy of '{context.statemachine}' failed: {e}")
            return DeploymentResult.failed(context.statemachine, e, stage=context.stage, state=state)

        # Steps 5 and 6: Replace the deployed state machine
        return self.redeploy(state, stage=context.stage)

    def redeploy(self, state: DeploymentState, stage: Optional[str] = None) -> DeploymentResult:
        """
        Delete the state machine at the resolved ARN and create it again.

        :param state: State carrying the ARN, the serialized definition and the role ARN.
        :param stage: Deployment stage, reported in the result.
        :return: The outcome of the create.
        """
        try:
            self.step_functions_handler.delete_state_machine(state.state_machine_arn)
            attempts = self.step_functions_handler.create_state_machine(
                definition=state.definition,
                name=state.statemachine,
                role_arn=state.role_arn,
            )
        except StateMachineCreationError as e:
            logger.error(f"Deploy of '{state.statemachine}' failed: {e}")
            return DeploymentResult.failed(state.statemachine, e, stage=stage, state=state, attempts=e.attempts)
        except DEPLOY_ERRORS as e:
            logger.error(f"Deploy of '{state.statemachine}' failed: {e}")
            return DeploymentResult.failed(state.statemachine, e, stage=stage, state=state)

        logger.info(f"Deployed state machine {state.state_machine_arn}")
        return DeploymentResult.succeeded(state, attempts, stage=stage)

    def _load_definitions(self, state: DeploymentState, context: InvocationContext) -> DeploymentState:
        service_file_handler = self.service_file_handler_factory(context.service_path)
        return replace(state, definitions=service_file_handler.get_step_functions())

    def _resolve_target_arn(self, state: DeploymentState, context: InvocationContext) -> DeploymentState:
        account_id = self.sts_handler.get_account_id()
        state_machine_arn = build_state_machine_arn(
            account_id,
            context.statemachine,
            region=context.region or self.config.region,
            partition=self.config.ARN_PARTITION,
        )
        return replace(state, account_id=account_id, state_machine_arn=state_machine_arn)

    def _extract_definition(self, state: DeploymentState) -> DeploymentState:
        """
        :raises StateMachineNotDefinedError: If the service file does not define the state machine.
        :raises ServiceFileError: If the definition holds values JSON cannot represent.
        """
        definitions = state.definitions or {}
        if state.statemachine not in definitions:
            raise StateMachineNotDefinedError(state.statemachine)
        try:
            definition = json.dumps(definitions[state.statemachine], default=_json_default)
        except (TypeError, ValueError) as e:
            raise ServiceFileError(f'Definition of state machine "{state.statemachine}" is not JSON serializable: {e}') from e
        return replace(state, definition=definition)

    def _resolve_execution_role(self, state: DeploymentState) -> DeploymentState:
        role_arn = self.iam_role_handler.resolve_execution_role(
            lookup_name=self.config.role_lookup_name,
            create_name=self.config.EXECUTION_ROLE_NAME,
            policy_document=EXECUTION_ROLE_POLICY_DOCUMENT,
        )
        return replace(state, role_arn=role_arn)
