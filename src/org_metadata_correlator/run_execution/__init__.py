"""Run execution domain exports."""

from .correlation_run_use_case import (
    RunExecutionError,
    execute_flow_correlation_run,
    execute_object_description_run,
)
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "execute_flow_correlation_run",
    "execute_object_description_run",
]
