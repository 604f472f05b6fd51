"""Required-field checks for scenario documents.

Only the fields the harness cannot run without are checked. Each check
raises MalformedScenarioFile naming the missing field so an authoring
mistake is reported before any test is registered.
"""

from typing import Any

from ..errors import MalformedScenarioFile


def validate_document(doc: Any, source: str) -> None:
    """Validate the top-level sections of a scenarios document.

    Raises:
        MalformedScenarioFile: If 'action' is missing or 'scenarios' is not
            a non-empty list.
    """
    if not isinstance(doc, dict) or doc.get("action") is None:
        raise MalformedScenarioFile(
            f"Missing required section 'action' in {source}"
        )

    scenarios = doc.get("scenarios")
    if not isinstance(scenarios, list) or not scenarios:
        raise MalformedScenarioFile(
            f"'scenarios' must be a list with at least one scenario in {source}"
        )


def validate_scenario_entry(entry: Any, index: int, source: str) -> None:
    """Validate one raw scenario entry before normalization.

    Checks run in order: name, then steps (or the shorthand request), then
    invoke.
    """
    if not isinstance(entry, dict):
        raise MalformedScenarioFile(
            f"Scenario at index {index} must be a mapping in {source}"
        )

    if not entry.get("name"):
        raise MalformedScenarioFile(
            f"Missing required field 'name' in scenarios[{index}] ({source})"
        )

    label = f"scenario \"{entry['name']}\""

    if not entry.get("steps") and not entry.get("request"):
        raise MalformedScenarioFile(
            f"Missing required field 'request' or 'steps' in {label} ({source})"
        )

    if not entry.get("invoke"):
        raise MalformedScenarioFile(
            f"Missing required field 'invoke' in {label} ({source})"
        )


def validate_expectation(data: Any, field_name: str, label: str, source: str) -> None:
    """Check that an invoke/error section declares 'returns' or 'throws'."""
    if not isinstance(data, dict) or ("returns" not in data and "throws" not in data):
        raise MalformedScenarioFile(
            f"'{field_name}' must declare 'returns' or 'throws' in {label} ({source})"
        )
    if "returns" in data and not isinstance(data["returns"], dict):
        raise MalformedScenarioFile(
            f"'{field_name}.returns' must be a mapping in {label} ({source})"
        )


def require_fields(
    data: Any, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    if not isinstance(data, dict):
        raise MalformedScenarioFile(f"'{context}' must be a mapping ({source})")
    for field_name in fields:
        if field_name not in data:
            raise MalformedScenarioFile(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
