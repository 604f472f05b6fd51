"""Runner module - scenario orchestration."""

from .executor import (
    ExecutionConfig,
    ScenarioExecutor,
    merge_defaults,
    resolve_step_fixtures,
    suppressed_output,
)
from .registration import run_scenarios

__all__ = [
    "ExecutionConfig",
    "ScenarioExecutor",
    "merge_defaults",
    "resolve_step_fixtures",
    "suppressed_output",
    "run_scenarios",
]
