"""Validators module - invoke/error outcome assertions."""

from .assertion_engine import (
    assert_error_returns,
    assert_error_throws,
    assert_invoke_returns,
    assert_invoke_throws,
    run_scenario_handlers,
    strictly_equal,
)

__all__ = [
    "assert_error_returns",
    "assert_error_throws",
    "assert_invoke_returns",
    "assert_invoke_throws",
    "run_scenario_handlers",
    "strictly_equal",
]
