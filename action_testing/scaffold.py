"""Starter files for scenario tests.

Generates a scenarios.yaml and a 200 fixture from an action's
metadata.yaml so a new action repository has something to edit.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

SCENARIOS_PATH = Path("tests") / "scenarios.yaml"
FIXTURE_PATH = Path("tests") / "fixtures" / "200-success.http"

WELL_KNOWN_PLACEHOLDERS = {
    "userId": "test-user-123",
    "email": "user@example.com",
    "login": "user@example.com",
    "firstName": "Test",
    "lastName": "User",
    "domain": "dev-123.example.com",
    "subject": "test-subject",
    "audience": "https://audience.example.com",
    "groupId": "test-group-123",
    "groupIds": "group-1,group-2",
    "roleId": "test-role-123",
    "accountId": "test-account-123",
}

# Supplied through context.environment.ADDRESS instead of params
SKIPPED_INPUTS = {"address"}


def input_placeholder(name: str, input_type: str) -> Any:
    """Placeholder value for a metadata input."""
    if name in WELL_KNOWN_PLACEHOLDERS:
        return WELL_KNOWN_PLACEHOLDERS[name]
    if input_type == "number":
        return 42
    if input_type == "boolean":
        return True
    return f"test-{name}"


def generate_fixture() -> str:
    """Starter `.http` fixture for a successful response."""
    return (
        "HTTP/1.1 200 OK\n"
        "Content-Type: application/json\n"
        "\n"
        '{"TODO": "replace with actual API response body"}\n'
    )


def generate_scenarios_yaml(metadata: dict) -> str:
    """Starter scenarios.yaml built from metadata inputs."""
    params = {
        name: input_placeholder(name, (spec or {}).get("type", "text"))
        for name, spec in (metadata.get("inputs") or {}).items()
        if name not in SKIPPED_INPUTS
    }

    if params:
        params_block = "\n".join(
            f"    {name}: {json.dumps(value)}" for name, value in params.items()
        )
        params_section = f"  params:\n{params_block}"
    else:
        params_section = "  params: {}"

    return f"""# Scenario tests for {metadata.get('name', 'action')}
# Each scenario pairs the HTTP calls the action makes with canned responses
# and the result (or error) the action should produce.

action:
{params_section}
  context:
    secrets:
      BEARER_AUTH_TOKEN: test-token-123
    environment:
      ADDRESS: https://api.example.com

scenarios:
  # TODO: rename and describe what this scenario checks
  - name: "TODO: describe the success case"
    request:
      method: POST
      # TODO: set the URL your action calls
      url: https://api.example.com/TODO
    fixture: fixtures/200-success.http
    invoke:
      # TODO: set the values your action returns
      returns:
        status: success
"""


@dataclass
class InitResult:
    """Files written (or left alone) by init_project."""
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def load_metadata(path: Union[str, Path]) -> dict:
    """Read name and inputs from an action's metadata.yaml."""
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    return {"name": doc.get("name"), "inputs": doc.get("inputs") or {}}


def init_project(root: Union[str, Path], metadata: dict) -> InitResult:
    """Write starter files under root, never overwriting existing ones."""
    root = Path(root)
    result = InitResult()

    files = {
        SCENARIOS_PATH: generate_scenarios_yaml(metadata),
        FIXTURE_PATH: generate_fixture(),
    }

    (root / FIXTURE_PATH).parent.mkdir(parents=True, exist_ok=True)

    for relative, content in files.items():
        target = root / relative
        display = relative.as_posix()
        if target.exists():
            result.skipped.append(display)
            continue
        target.write_text(content, encoding="utf-8")
        result.created.append(display)

    return result
