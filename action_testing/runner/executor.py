"""Scenario executor - runs one scenario against an action script.

Coordinates the per-scenario flow:
1. Merge action defaults with scenario overrides
2. Resolve step fixtures
3. Block the network and install interceptors
4. Run invoke/error assertions
5. Verify every expected request was made
6. Tear down interception
"""

import asyncio
import contextlib
import io
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterator, Optional

from ..errors import UnresolvedStep
from ..scenario.schema import ActionDefaults, Scenario, ScenarioFile, Step
from ..script import ScriptSource
from ..transport.fixture import parse_fixture
from ..transport.interception import (
    intercepted,
    pending_interceptors,
    verify_interceptors,
)
from ..validators.assertion_engine import run_scenario_handlers

logger = logging.getLogger(__name__)

SHOW_OUTPUT_ENV = "ACTION_TESTING_SHOW_OUTPUT"


@dataclass
class ExecutionConfig:
    """Configuration for scenario execution."""
    suppress_output: bool = True

    @classmethod
    def from_env(cls) -> "ExecutionConfig":
        """Build config, letting ACTION_TESTING_SHOW_OUTPUT=1 keep script output."""
        show = os.environ.get(SHOW_OUTPUT_ENV, "").strip().lower()
        return cls(suppress_output=show not in ("1", "true", "yes"))


def merge_defaults(
    action: ActionDefaults, scenario: Scenario
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Merge scenario-level overrides over action-level defaults.

    params, context.secrets and context.environment are merged key by key;
    nothing is merged deeper.
    """
    params = {**action.params, **(scenario.params or {})}

    action_context = action.context or {}
    scenario_context = scenario.context or {}

    context = {
        **action_context,
        **scenario_context,
        "secrets": {
            **(action_context.get("secrets") or {}),
            **(scenario_context.get("secrets") or {}),
        },
        "environment": {
            **(action_context.get("environment") or {}),
            **(scenario_context.get("environment") or {}),
        },
    }

    return params, context


def resolve_step_fixtures(steps: list[Step], base_dir: Path) -> list[Step]:
    """Load `.http` fixtures for steps that only name a fixture file.

    Raises:
        UnresolvedStep: If a step has no fixture, fixture data or network error.
    """
    resolved = []
    for step in steps:
        if step.is_resolved:
            resolved.append(step)
            continue

        if not step.fixture:
            raise UnresolvedStep(
                f"Step for {step.request} has no fixture, fixtureData, or networkError"
            )

        resolved.append(replace(step, fixture_data=parse_fixture(step.fixture, base_dir)))
    return resolved


@contextlib.contextmanager
def suppressed_output(enabled: bool = True) -> Iterator[None]:
    """Swallow stdout/stderr and log records emitted by the script under test."""
    if not enabled:
        yield
        return
    previous = logging.root.manager.disable
    logging.disable(logging.CRITICAL)
    sink = io.StringIO()
    try:
        with contextlib.redirect_stdout(sink), contextlib.redirect_stderr(sink):
            yield
    finally:
        logging.disable(previous)


class ScenarioExecutor:
    """Executes scenarios from one scenario file against one action script."""

    def __init__(
        self,
        scenario_file: ScenarioFile,
        source: ScriptSource,
        config: Optional[ExecutionConfig] = None,
    ):
        """Initialize scenario executor.

        Args:
            scenario_file: Parsed scenarios with action defaults.
            source: Where to obtain the action script.
            config: Execution configuration.
        """
        self.scenario_file = scenario_file
        self.source = source
        self.config = config or ExecutionConfig()

    def execute(self, scenario: Scenario) -> None:
        """Run one scenario, raising on any mismatch.

        Raises:
            AssertionFailed: If an outcome doesn't match the expectation.
            InterceptorNotSatisfied: If an expected request was never made.
        """
        script = self.source.load()
        params, context = merge_defaults(self.scenario_file.action, scenario)
        steps = resolve_step_fixtures(scenario.steps, self.scenario_file.base_dir)

        logger.debug("Running scenario %r with %d steps", scenario.name, len(steps))

        with intercepted(steps) as handles:
            try:
                with suppressed_output(self.config.suppress_output):
                    asyncio.run(run_scenario_handlers(script, params, context, scenario))
            except BaseException:
                for handle in pending_interceptors(handles):
                    logger.warning(
                        "Scenario %r: expected request was not made: %s",
                        scenario.name, handle.step.request,
                    )
                raise
            verify_interceptors(handles)
