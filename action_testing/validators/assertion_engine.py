"""Assertion engine for action scenarios.

Drives the invoke/error call sequence of an action script and compares
outcomes with a scenario's expectations.

Flow:
    1. Call script.invoke(params, context)
    2. Returns: assert the result contains the expected values
    3. Throws: assert it raised with a matching message, then
       a. error Returns: call script.error({**params, "error": exc}, context)
          and assert its result
       b. error Throws: call script.error(...) and assert it re-raises
       c. no error expectation: stop, retrying is up to the caller
"""

import inspect
import json
from typing import Any, Callable, Mapping, Optional

from ..errors import AssertionFailed
from ..script import ActionScript
from ..scenario.schema import Expectation, Returns, Scenario, Throws

_MISSING = object()

Call = Callable[[], Any]


async def assert_invoke_returns(invoke_fn: Call, expected: Mapping[str, Any]) -> Any:
    """Assert invoke returns a result containing every expected key/value.

    Returns:
        The actual result.
    """
    return await _assert_returns(invoke_fn, expected, "invoke result")


async def assert_invoke_throws(invoke_fn: Call, expected_message: str) -> BaseException:
    """Assert invoke raises an error whose message contains expected_message.

    Returns:
        The caught exception.
    """
    return await _assert_throws(invoke_fn, expected_message, "invoke")


async def assert_error_returns(error_fn: Call, expected: Mapping[str, Any]) -> Any:
    """Assert the error handler returns every expected key/value."""
    return await _assert_returns(error_fn, expected, "error handler result")


async def assert_error_throws(error_fn: Call, expected_message: str) -> BaseException:
    """Assert the error handler re-raises with a matching message."""
    return await _assert_throws(error_fn, expected_message, "error handler")


async def run_scenario_handlers(
    script: ActionScript,
    params: dict[str, Any],
    context: dict[str, Any],
    scenario: Scenario,
) -> None:
    """Run invoke, and the error handler when expected, asserting each outcome."""
    invoke_expect = scenario.invoke

    if isinstance(invoke_expect, Returns):
        await assert_invoke_returns(
            lambda: script.invoke(params, context), invoke_expect.values
        )
        return

    caught = await assert_invoke_throws(
        lambda: script.invoke(params, context), invoke_expect.message
    )

    error_expect: Optional[Expectation] = scenario.error
    if error_expect is None or script.error is None:
        return

    error_params = {**params, "error": caught}
    if isinstance(error_expect, Returns):
        await assert_error_returns(
            lambda: script.error(error_params, context), error_expect.values
        )
    elif isinstance(error_expect, Throws):
        await assert_error_throws(
            lambda: script.error(error_params, context), error_expect.message
        )


async def _call(fn: Call) -> Any:
    result = fn()
    if inspect.isawaitable(result):
        result = await result
    return result


async def _assert_returns(fn: Call, expected: Mapping[str, Any], label: str) -> Any:
    result = await _call(fn)

    for key, value in expected.items():
        actual = _lookup(result, key)
        if not strictly_equal(value, actual):
            raise AssertionFailed(
                f"Expected {label}.{key} to be {_show(value)}, got {_show(actual)}",
                key=key,
                expected=value,
                actual=None if actual is _MISSING else actual,
            )

    return result


async def _assert_throws(fn: Call, expected_message: str, label: str) -> BaseException:
    try:
        await _call(fn)
    except Exception as e:
        caught = e
    else:
        raise AssertionFailed(
            f"Expected {label} to throw, but it returned successfully",
            expected=expected_message,
        )

    message = str(caught)
    if expected_message and expected_message not in message:
        raise AssertionFailed(
            f"Expected error message to contain \"{expected_message}\", got \"{message}\"",
            expected=expected_message,
            actual=message,
        ) from caught

    return caught


def strictly_equal(expected: Any, actual: Any) -> bool:
    """Primitive equality; composite values only match themselves."""
    if actual is _MISSING:
        return False
    if isinstance(expected, (dict, list)) or isinstance(actual, (dict, list)):
        return expected is actual
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    return expected == actual


def _lookup(result: Any, key: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(key, _MISSING)
    return getattr(result, key, _MISSING)


def _show(value: Any) -> str:
    if value is _MISSING:
        return "<missing>"
    return json.dumps(value, default=repr)
