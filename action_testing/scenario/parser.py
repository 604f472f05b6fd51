"""YAML scenario parser for action scenario tests.

Parses scenarios YAML files into ScenarioFile objects, normalizing the
single-request shorthand and optionally appending the common error
scenarios.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import MalformedScenarioFile
from .common import COMMON_SCENARIOS
from .schema import (
    ActionDefaults,
    Expectation,
    Fixture,
    RequestSpec,
    Returns,
    Scenario,
    ScenarioFile,
    Step,
    Throws,
)
from .validator import (
    require_fields,
    validate_document,
    validate_expectation,
    validate_scenario_entry,
)

logger = logging.getLogger(__name__)


def parse_scenarios(
    file_path: Union[str, Path], include_common: bool = False
) -> ScenarioFile:
    """Read and parse a scenarios YAML file.

    Args:
        file_path: Path to the scenarios.yaml file.
        include_common: Whether to append the built-in common scenarios.

    Returns:
        Parsed ScenarioFile with file_path set to the resolved path.

    Raises:
        MalformedScenarioFile: If the file can't be read or is malformed.
    """
    file_path = Path(file_path).resolve()

    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedScenarioFile(
            f"Scenario file could not be read: {file_path} ({e})"
        ) from e

    result = parse_scenarios_string(
        raw, include_common=include_common, source=str(file_path)
    )
    result.file_path = file_path
    return result


def parse_scenarios_string(
    yaml_text: str, include_common: bool = False, source: str = "<inline>"
) -> ScenarioFile:
    """Parse a scenarios YAML document.

    Args:
        yaml_text: Raw YAML content.
        include_common: Whether to append the built-in common scenarios.
        source: Source identifier for error messages.

    Returns:
        ScenarioFile with user scenarios first, synthesized ones after.
    """
    try:
        doc = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise MalformedScenarioFile(f"Invalid YAML in {source}: {e}") from e

    validate_document(doc, source)

    action = _parse_action(doc["action"], source)

    scenarios: list[Scenario] = []
    seen: set[str] = set()
    for i, entry in enumerate(doc["scenarios"]):
        validate_scenario_entry(entry, i, source)
        scenario = _parse_scenario(normalize_scenario(entry), source)
        if scenario.name in seen:
            raise MalformedScenarioFile(
                f"Duplicate scenario name \"{scenario.name}\" in {source}"
            )
        seen.add(scenario.name)
        scenarios.append(scenario)

    if include_common:
        scenarios.extend(synthesize_common_scenarios(scenarios))

    logger.info(
        "Parsed %d scenarios from %s (%d user-defined)",
        len(scenarios), source, len(seen),
    )
    return ScenarioFile(action=action, scenarios=scenarios)


def normalize_scenario(entry: dict) -> dict:
    """Rewrite the request/fixture shorthand into a single-element steps list."""
    normalized = dict(entry)

    if not normalized.get("steps"):
        step = {"request": normalized.pop("request", None)}
        fixture = normalized.pop("fixture", None)
        if fixture is not None:
            step["fixture"] = fixture
        normalized["steps"] = [step]

    return normalized


def synthesize_common_scenarios(user_scenarios: list[Scenario]) -> list[Scenario]:
    """Generate the common scenarios not already defined by name.

    The first user scenario's first request is the template for every
    generated step.
    """
    if not user_scenarios:
        return []

    user_names = {s.name for s in user_scenarios}
    template_request = user_scenarios[0].steps[0].request

    return [
        template.build(template_request)
        for template in COMMON_SCENARIOS
        if template.name not in user_names
    ]


def _parse_action(data: Any, source: str) -> ActionDefaults:
    if not isinstance(data, dict):
        raise MalformedScenarioFile(f"'action' must be a mapping in {source}")

    context = dict(data.get("context") or {})
    context["secrets"] = dict(context.get("secrets") or {})
    context["environment"] = dict(context.get("environment") or {})

    return ActionDefaults(params=dict(data.get("params") or {}), context=context)


def _parse_scenario(data: dict, source: str) -> Scenario:
    label = f"scenario \"{data['name']}\""

    steps_data = data["steps"]
    if not isinstance(steps_data, list):
        raise MalformedScenarioFile(f"'steps' must be a list in {label} ({source})")

    steps = [
        _parse_step(step_data, f"{label} steps[{i}]", source)
        for i, step_data in enumerate(steps_data)
    ]

    for field_name in ("params", "context"):
        if data.get(field_name) is not None and not isinstance(data[field_name], dict):
            raise MalformedScenarioFile(
                f"'{field_name}' must be a mapping in {label} ({source})"
            )

    validate_expectation(data["invoke"], "invoke", label, source)
    error: Optional[Expectation] = None
    if data.get("error") is not None:
        validate_expectation(data["error"], "error", label, source)
        error = _parse_expectation(data["error"])

    return Scenario(
        name=str(data["name"]),
        steps=steps,
        invoke=_parse_expectation(data["invoke"]),
        error=error,
        params=data.get("params"),
        context=data.get("context"),
    )


def _parse_step(data: Any, context: str, source: str) -> Step:
    require_fields(data, ["request"], context, source)
    request_data = data["request"]
    require_fields(request_data, ["method", "url"], f"{context}.request", source)

    request = RequestSpec(
        method=str(request_data["method"]),
        url=str(request_data["url"]),
        headers=request_data.get("headers"),
    )

    fixture_data = None
    if data.get("fixtureData") is not None:
        raw = data["fixtureData"]
        require_fields(raw, ["statusCode"], f"{context}.fixtureData", source)
        fixture_data = Fixture(
            status_code=int(raw["statusCode"]),
            headers={str(k): str(v) for k, v in (raw.get("headers") or {}).items()},
            body=raw.get("body") or "",
        )

    return Step(
        request=request,
        fixture=data.get("fixture"),
        fixture_data=fixture_data,
        network_error=bool(data.get("networkError", False)),
    )


def _parse_expectation(data: dict) -> Expectation:
    if "returns" in data:
        return Returns(values=dict(data["returns"]))
    message = data.get("throws")
    return Throws(message="" if message is None else str(message))
