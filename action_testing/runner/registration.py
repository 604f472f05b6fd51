"""pytest registration of scenario files.

Usage in a test module:

    from action_testing import run_scenarios

    TestSuspendUser = run_scenarios(
        script="../src/script.py",
        scenarios="./scenarios.yaml",
        caller_dir=Path(__file__).parent,
    )
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import pytest

from ..scenario.parser import parse_scenarios
from ..script import ScriptSource
from .executor import ExecutionConfig, ScenarioExecutor

logger = logging.getLogger(__name__)


def run_scenarios(
    script: Union[str, os.PathLike, Any],
    scenarios: Union[str, os.PathLike],
    include_common: bool = True,
    caller_dir: Optional[Union[str, os.PathLike]] = None,
    config: Optional[ExecutionConfig] = None,
) -> type:
    """Build a pytest test class with one case per scenario.

    The scenario file is parsed immediately, so authoring mistakes fail
    collection before any test is registered.

    Args:
        script: Path to the action script (relative to caller_dir) or the
            script object itself.
        scenarios: Path to scenarios.yaml (relative to caller_dir).
        include_common: Whether to add the common error scenarios.
        caller_dir: Directory relative paths are resolved from (default: cwd).
        config: Execution configuration (default: from environment).

    Returns:
        A test class; bind it to a ``Test*`` name in a test module.
    """
    base_dir = Path(caller_dir) if caller_dir is not None else Path.cwd()
    scenario_file = parse_scenarios(base_dir / scenarios, include_common=include_common)
    source = ScriptSource.from_argument(script, base_dir)
    executor = ScenarioExecutor(
        scenario_file, source, config=config or ExecutionConfig.from_env()
    )

    cases = scenario_file.scenarios
    group = f"scenarios: {len(cases)} defined"
    logger.info("Registering %s from %s", group, scenario_file.file_path)

    @pytest.mark.parametrize("scenario", cases, ids=[s.name for s in cases])
    def test_scenario(self, scenario):
        executor.execute(scenario)

    return type(
        "TestScenarios",
        (),
        {
            "__doc__": group,
            "executor": executor,
            "test_scenario": test_scenario,
        },
    )
