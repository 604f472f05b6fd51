"""Scenario module - YAML scenario parsing."""

from .common import COMMON_SCENARIOS, COMMON_SCENARIO_NAMES
from .schema import (
    ActionDefaults,
    CommonScenarioTemplate,
    Expectation,
    Fixture,
    RequestSpec,
    Returns,
    Scenario,
    ScenarioFile,
    Step,
    Throws,
    SUPPORTED_METHODS,
)
from .parser import (
    normalize_scenario,
    parse_scenarios,
    parse_scenarios_string,
    synthesize_common_scenarios,
)

__all__ = [
    "COMMON_SCENARIOS",
    "COMMON_SCENARIO_NAMES",
    "ActionDefaults",
    "CommonScenarioTemplate",
    "Expectation",
    "Fixture",
    "RequestSpec",
    "Returns",
    "Scenario",
    "ScenarioFile",
    "Step",
    "Throws",
    "SUPPORTED_METHODS",
    "normalize_scenario",
    "parse_scenarios",
    "parse_scenarios_string",
    "synthesize_common_scenarios",
]
