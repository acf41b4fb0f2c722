"""Core system components"""

from .state import Step, StepStatus, StepResult
from .workflow import StepName, WorkflowVariant, get_workflow_variant, build_workflow_steps
from .rebalancer import rebalance_durations
# Don't import dispatcher here to avoid circular imports
# from .dispatcher import StepDispatcher

__all__ = [
    'Step',
    'StepStatus',
    'StepResult',
    'StepName',
    'WorkflowVariant',
    'get_workflow_variant',
    'build_workflow_steps',
    'rebalance_durations',
]
