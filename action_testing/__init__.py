"""Scenario-based testing for HTTP-calling actions.

Describe an action's HTTP exchanges and expected outcomes in YAML, replay
canned `.http` fixtures against the action's `invoke`/`error` handlers, and
register each scenario as a pytest case with `run_scenarios`.
"""

from .errors import (
    ActionTestingError,
    AssertionFailed,
    FixtureNotFound,
    InterceptorNotSatisfied,
    MalformedFixture,
    MalformedScenarioFile,
    MalformedScript,
    UnresolvedStep,
    UnsupportedMethod,
)
from .runner import ExecutionConfig, ScenarioExecutor, merge_defaults, run_scenarios
from .scenario import (
    COMMON_SCENARIOS,
    Fixture,
    RequestSpec,
    Returns,
    Scenario,
    ScenarioFile,
    Step,
    Throws,
    parse_scenarios,
    parse_scenarios_string,
)
from .script import ActionScript, ScriptSource
from .transport import (
    cleanup_interceptors,
    install_interceptors,
    intercepted,
    parse_fixture,
    parse_fixture_string,
)
from .validators import (
    assert_error_returns,
    assert_error_throws,
    assert_invoke_returns,
    assert_invoke_throws,
    run_scenario_handlers,
)

__version__ = "0.1.0"

__all__ = [
    "ActionTestingError",
    "AssertionFailed",
    "FixtureNotFound",
    "InterceptorNotSatisfied",
    "MalformedFixture",
    "MalformedScenarioFile",
    "MalformedScript",
    "UnresolvedStep",
    "UnsupportedMethod",
    "ExecutionConfig",
    "ScenarioExecutor",
    "merge_defaults",
    "run_scenarios",
    "COMMON_SCENARIOS",
    "Fixture",
    "RequestSpec",
    "Returns",
    "Scenario",
    "ScenarioFile",
    "Step",
    "Throws",
    "parse_scenarios",
    "parse_scenarios_string",
    "ActionScript",
    "ScriptSource",
    "cleanup_interceptors",
    "install_interceptors",
    "intercepted",
    "parse_fixture",
    "parse_fixture_string",
    "assert_error_returns",
    "assert_error_throws",
    "assert_invoke_returns",
    "assert_invoke_throws",
    "run_scenario_handlers",
]
