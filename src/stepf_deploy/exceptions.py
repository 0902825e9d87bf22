"""Error types raised while deploying a state machine."""

from typing import Optional


class StepfDeployError(Exception):
    """Base class for deploy errors."""


class ConfigurationError(StepfDeployError):
    """The service file or tool configuration cannot be used."""


class ServiceFileError(ConfigurationError):
    """The service file does not hold a mapping document."""


class StateMachineNotDefinedError(ConfigurationError):
    """The requested state machine is not defined under stepFunctions."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'State machine "{name}" does not exist')


class RoleNotFoundError(StepfDeployError):
    """IAM reported that the execution role does not exist."""

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role {role_name} not found")


class StateMachineCreationError(StepfDeployError):
    """Creating the state machine kept failing after all retries."""

    def __init__(self, name: str, attempts: int, last_error: Optional[Exception] = None):
        self.name = name
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f'Failed to create state machine "{name}" after {attempts} attempt(s): {last_error}'
        )
