from dataclasses import dataclass
from typing import Any, Dict, Optional

from stepf_deploy.models.base_model import BaseModel


@dataclass(frozen=True)
class InvocationContext(BaseModel):
    """
    Caller-supplied parameters of one deploy invocation.
    """
    statemachine: str
    stage: Optional[str] = None
    region: Optional[str] = None
    service_path: Optional[str] = None


@dataclass(frozen=True)
class DeploymentState(BaseModel):
    """
    Values produced by the deploy steps. Each step returns a new instance
    with the fields it resolved; earlier fields are never rewritten.
    """
    statemachine: str
    definitions: Optional[Dict[str, Any]] = None
    account_id: Optional[str] = None
    state_machine_arn: Optional[str] = None
    definition: Optional[str] = None
    role_arn: Optional[str] = None


@dataclass
class DeploymentResult(BaseModel):
    """
    Outcome of a deploy, reported back to the invoking command.
    """
    success: bool
    statemachine: str
    stage: Optional[str] = None
    state_machine_arn: Optional[str] = None
    role_arn: Optional[str] = None
    attempts: int = 0
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def succeeded(cls, state: DeploymentState, attempts: int, stage: Optional[str] = None) -> "DeploymentResult":
        return cls(
            success=True,
            statemachine=state.statemachine,
            stage=stage,
            state_machine_arn=state.state_machine_arn,
            role_arn=state.role_arn,
            attempts=attempts,
        )

    @classmethod
    def failed(cls, statemachine: str, error: BaseException, stage: Optional[str] = None,
               state: Optional[DeploymentState] = None, attempts: int = 0) -> "DeploymentResult":
        return cls(
            success=False,
            statemachine=statemachine,
            stage=stage,
            state_machine_arn=state.state_machine_arn if state else None,
            role_arn=state.role_arn if state else None,
            attempts=attempts,
            reason=str(error),
            error=error,
        )
