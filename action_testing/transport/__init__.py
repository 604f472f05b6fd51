"""Transport module - fixtures and HTTP interception."""

from .fixture import parse_fixture, parse_fixture_string
from .interception import (
    InterceptorHandle,
    cleanup_interceptors,
    create_mock,
    install_interceptors,
    intercepted,
    pending_interceptors,
    verify_interceptors,
)

__all__ = [
    "parse_fixture",
    "parse_fixture_string",
    "InterceptorHandle",
    "cleanup_interceptors",
    "create_mock",
    "install_interceptors",
    "intercepted",
    "pending_interceptors",
    "verify_interceptors",
]
