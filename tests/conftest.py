"""Global test configuration and fixtures."""

import os
import shutil
import sys
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stepf_deploy.config.deploy_config.deploy_config_handler import DeployConfigManager
from stepf_deploy.config.deploy_config.deploy_config_model import DeployConfig
from tests.utilities.client_errors import make_client_error


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ.update(
        {
            "AWS_DEFAULT_REGION": "us-east-1",
            "AWS_ACCESS_KEY_ID": "testing",
            "AWS_SECRET_ACCESS_KEY": "testing",
            "AWS_SECURITY_TOKEN": "testing",
            "AWS_SESSION_TOKEN": "testing",
            "LOG_CONSOLE_ENABLED": "false",
        }
    )


@pytest.fixture(autouse=True)
def reset_config_manager():
    """Reset the configuration singleton before each test."""
    DeployConfigManager.reset()
    yield
    DeployConfigManager.reset()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def deploy_config() -> DeployConfig:
    """Default configuration with no delay between create attempts."""
    config = DeployConfig(CREATE_RETRY_DELAY_SEC=0)
    config.validate()
    return config


@pytest.fixture
def mock_aws_client() -> Mock:
    """AWS client wrapper whose service clients are mocks."""
    aws_client = Mock()
    aws_client.sts_client.get_caller_identity.return_value = {"Account": "1234"}
    aws_client.iam_client.get_role.return_value = {
        "Role": {"Arn": "arn:aws:iam::1234:role/StatesExecutionRole-us-east-1"}
    }
    aws_client.stepfunctions_client.delete_state_machine.return_value = {}
    aws_client.stepfunctions_client.create_state_machine.return_value = {
        "stateMachineArn": "arn:aws:states:us-east-1:1234:stateMachine:OrderFlow"
    }
    return aws_client


@pytest.fixture
def order_flow_definition() -> dict[str, Any]:
    return {
        "Comment": "Order processing",
        "StartAt": "Validate",
        "States": {
            "Validate": {
                "Type": "Task",
                "Resource": "arn:aws:lambda:us-east-1:1234:function:validate",
                "End": True,
            }
        },
    }


@pytest.fixture
def service_dir(temp_dir, order_flow_definition) -> Path:
    """Service directory whose serverless.yml defines OrderFlow."""
    (temp_dir / "serverless.yml").write_text(
        "service: orders\n"
        "provider:\n"
        "  name: aws\n"
        "stepFunctions:\n"
        "  OrderFlow:\n"
        "    Comment: Order processing\n"
        "    StartAt: Validate\n"
        "    States:\n"
        "      Validate:\n"
        "        Type: Task\n"
        "        Resource: arn:aws:lambda:us-east-1:1234:function:validate\n"
        "        End: true\n"
    )
    return temp_dir


@pytest.fixture
def not_found_error():
    return make_client_error("NoSuchEntity", "The role with name StatesExecutionRole-us-east-1 cannot be found.",
                             "GetRole", status_code=404)


@pytest.fixture
def being_deleted_error():
    return make_client_error("StateMachineDeleting", "State Machine is being deleted", "CreateStateMachine")
