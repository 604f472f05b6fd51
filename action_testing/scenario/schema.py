"""Scenario data models for action scenario tests.

Defines dataclasses for parsed scenario files, their steps and the
expectations checked against an action script.
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, Optional, Union


SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


@dataclass(frozen=True)
class Fixture:
    """A canned HTTP response."""
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def to_http(self) -> str:
        """Serialize back to `.http` text (status line, headers, blank line, body)."""
        try:
            reason = HTTPStatus(self.status_code).phrase
        except ValueError:
            reason = ""
        status_line = f"HTTP/1.1 {self.status_code} {reason}".rstrip()
        lines = [status_line]
        lines.extend(f"{name}: {value}" for name, value in self.headers.items())
        return "\n".join(lines) + "\n\n" + self.body


@dataclass(frozen=True)
class RequestSpec:
    """One expected outbound HTTP call."""
    method: str
    url: str
    headers: Optional[dict[str, str]] = None

    def __str__(self) -> str:
        return f"{self.method.upper()} {self.url}"


@dataclass(frozen=True)
class Step:
    """An expected request and its canned response or simulated failure."""
    request: RequestSpec
    fixture: Optional[str] = None
    fixture_data: Optional[Fixture] = None
    network_error: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.fixture_data is not None or self.network_error


@dataclass(frozen=True)
class Returns:
    """Expect the call to complete with these key/value pairs."""
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Throws:
    """Expect the call to raise; an empty message matches any error."""
    message: str = ""


Expectation = Union[Returns, Throws]


@dataclass(frozen=True)
class Scenario:
    """A single named scenario, executed as one test case."""
    name: str
    steps: list[Step]
    invoke: Expectation
    error: Optional[Expectation] = None
    params: Optional[dict[str, Any]] = None
    context: Optional[dict[str, Any]] = None
    common: bool = False

    @property
    def total_steps(self) -> int:
        """Total number of expected requests."""
        return len(self.steps)


@dataclass(frozen=True)
class ActionDefaults:
    """Action-level params and context shared by every scenario in a file."""
    params: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def secrets(self) -> dict[str, str]:
        return self.context.get("secrets", {})

    @property
    def environment(self) -> dict[str, str]:
        return self.context.get("environment", {})


@dataclass(frozen=True)
class CommonScenarioTemplate:
    """A built-in error-path scenario generated from a template request."""
    name: str
    generate: Callable[[RequestSpec], tuple[list[Step], Expectation]]

    def build(self, template_request: RequestSpec) -> Scenario:
        steps, invoke = self.generate(template_request)
        return Scenario(name=self.name, steps=steps, invoke=invoke, common=True)


@dataclass
class ScenarioFile:
    """Result of parsing a scenarios YAML document."""
    action: ActionDefaults
    scenarios: list[Scenario] = field(default_factory=list)
    file_path: Optional[Path] = None

    @property
    def base_dir(self) -> Path:
        """Directory that relative fixture paths are resolved against."""
        if self.file_path is None:
            return Path.cwd()
        return self.file_path.parent

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.scenarios]
