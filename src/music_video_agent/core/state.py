"""Step records exchanged with the orchestrator and step handler results"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class StepStatus(str, Enum):
    PENDING = "Pending"
    NOT_READY = "Not_Ready"
    IN_PROGRESS = "In_Progress"
    COMPLETED = "Completed"
    FAILED = "Failed"


class Step(BaseModel):
    """A unit of work in a task's linear pipeline.

    Unknown orchestrator fields are kept so the record can be written back whole.
    """
    model_config = ConfigDict(extra="allow")

    step_id: str
    task_id: str
    did: Optional[str] = None
    name: str
    predecessor: Optional[str] = None
    is_last: bool = False
    step_status: StepStatus = StepStatus.PENDING
    input_query: Optional[str] = None
    input_artifacts: Optional[Any] = None  # JSON string or already decoded list
    output: Optional[str] = None
    output_artifacts: Optional[Any] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


@dataclass
class StepResult:
    """Outcome of one handler invocation, applied to the step by the dispatcher"""
    status: StepStatus
    output: str
    artifacts: Any = None
    message: Optional[str] = None  # task log entry, defaults to output
    error: Optional[str] = None  # detailed reason, logged but never persisted

    @classmethod
    def completed(cls, output: str, artifacts: Any = None, message: Optional[str] = None) -> "StepResult":
        return cls(StepStatus.COMPLETED, output, artifacts=artifacts, message=message)

    @classmethod
    def failed(cls, output: str, error: Optional[str] = None) -> "StepResult":
        return cls(StepStatus.FAILED, output, error=error)

    @property
    def succeeded(self) -> bool:
        return self.status == StepStatus.COMPLETED
