"""Error types raised by the scenario harness.

Parsing and setup errors indicate an authoring mistake in a scenario file or
fixture. Assertion errors fail a single scenario's test case.
"""

from typing import Any, Optional


class ActionTestingError(Exception):
    """Base class for all harness errors."""


class MalformedFixture(ActionTestingError, ValueError):
    """Raised when fixture text has no recognizable HTTP status line."""


class FixtureNotFound(ActionTestingError, FileNotFoundError):
    """Raised when a fixture file cannot be located or read."""


class MalformedScenarioFile(ActionTestingError, ValueError):
    """Raised when a scenario file is missing a required section or field."""


class MalformedScript(ActionTestingError, TypeError):
    """Raised when an action script cannot be loaded or has no invoke."""


class UnsupportedMethod(ActionTestingError, ValueError):
    """Raised when a step uses an HTTP verb the interceptors cannot match."""


class UnresolvedStep(ActionTestingError, ValueError):
    """Raised when a step has neither fixture data nor a network error."""


class AssertionFailed(ActionTestingError, AssertionError):
    """Raised when a script's outcome does not match the expectation."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
    ):
        super().__init__(message)
        self.key = key
        self.expected = expected
        self.actual = actual


class InterceptorNotSatisfied(ActionTestingError, AssertionError):
    """Raised when an expected outbound request was never made."""
