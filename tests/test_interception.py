from __future__ import annotations

import pytest
import requests

from action_testing.errors import InterceptorNotSatisfied, UnresolvedStep, UnsupportedMethod
from action_testing.scenario.schema import Fixture, RequestSpec, Step
from action_testing.transport.interception import (
    NETWORK_ERROR_MESSAGE,
    cleanup_interceptors,
    create_mock,
    install_interceptors,
    intercepted,
    split_url,
    verify_interceptors,
)

JSON_OK = Fixture(
    status_code=200,
    headers={"Content-Type": "application/json", "X-Request-Id": "req-1"},
    body='{"id":"usr123","status":"SUSPENDED"}',
)


def _step(method: str = "GET", url: str = "https://api.test/users/1", **kwargs) -> Step:
    headers = kwargs.pop("headers", None)
    return Step(request=RequestSpec(method=method, url=url, headers=headers), **kwargs)


def test_split_url() -> None:
    assert split_url("https://api.test:8443/a/b?x=1&y=2") == ("https://api.test:8443", "/a/b?x=1&y=2")
    assert split_url("https://api.test") == ("https://api.test", "/")


def test_replies_with_fixture() -> None:
    with intercepted([_step(fixture_data=JSON_OK)]) as handles:
        response = requests.get("https://api.test/users/1", timeout=5)
        verify_interceptors(handles)

    assert response.status_code == 200
    assert response.json() == {"id": "usr123", "status": "SUSPENDED"}
    assert response.headers["Content-Type"] == "application/json"
    assert response.headers["X-Request-Id"] == "req-1"
    assert handles[0].satisfied


def test_method_is_case_insensitive() -> None:
    with intercepted([_step(method="post", fixture_data=JSON_OK)]) as handles:
        requests.post("https://api.test/users/1", timeout=5)

    assert handles[0].satisfied


def test_query_string_must_match() -> None:
    step = _step(url="https://api.test/users?page=2", fixture_data=JSON_OK)

    with intercepted([step]) as handles:
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://api.test/users?page=3", timeout=5)
        requests.get("https://api.test/users?page=2", timeout=5)

    assert handles[0].satisfied


def test_url_without_query_rejects_added_query() -> None:
    step = _step(url="https://api.test/users", fixture_data=JSON_OK)

    with intercepted([step]) as handles:
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://api.test/users?x=1", timeout=5)
        assert not handles[0].satisfied
        requests.get("https://api.test/users", timeout=5)

    assert handles[0].satisfied


def test_header_constraint_allows_extra_headers() -> None:
    step = _step(headers={"Authorization": "SSWS token"}, fixture_data=JSON_OK)

    with intercepted([step]) as handles:
        response = requests.get(
            "https://api.test/users/1",
            headers={"Authorization": "SSWS token", "Accept": "application/json"},
            timeout=5,
        )

    assert response.status_code == 200
    assert handles[0].satisfied


def test_header_constraint_rejects_wrong_value() -> None:
    step = _step(headers={"Authorization": "SSWS token"}, fixture_data=JSON_OK)

    with intercepted([step]) as handles:
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://api.test/users/1", headers={"Authorization": "SSWS other"}, timeout=5)

    assert not handles[0].satisfied


def test_network_error_raises_connection_error() -> None:
    with intercepted([_step(network_error=True)]) as handles:
        with pytest.raises(requests.exceptions.ConnectionError, match="connection refused"):
            requests.get("https://api.test/users/1", timeout=5)

    assert handles[0].satisfied
    assert NETWORK_ERROR_MESSAGE == "Network error: connection refused"


def test_unmatched_requests_never_reach_network() -> None:
    with intercepted([_step(fixture_data=JSON_OK)]):
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://elsewhere.test/", timeout=5)


def test_interceptors_are_single_use() -> None:
    with intercepted([_step(fixture_data=JSON_OK)]):
        requests.get("https://api.test/users/1", timeout=5)
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://api.test/users/1", timeout=5)


def test_same_request_twice_needs_two_steps() -> None:
    not_found = Fixture(status_code=404, headers={}, body="")
    steps = [_step(fixture_data=not_found), _step(fixture_data=JSON_OK)]

    with intercepted(steps) as handles:
        first = requests.get("https://api.test/users/1", timeout=5)
        second = requests.get("https://api.test/users/1", timeout=5)
        verify_interceptors(handles)

    assert (first.status_code, second.status_code) == (404, 200)


def test_verify_fails_for_untriggered_interceptor() -> None:
    with intercepted([_step(fixture_data=JSON_OK)]) as handles:
        with pytest.raises(InterceptorNotSatisfied, match="GET https://api.test/users/1"):
            handles[0].verify()


def test_verify_interceptors_lists_every_pending_request() -> None:
    steps = [_step(fixture_data=JSON_OK), _step(method="DELETE", url="https://api.test/users/2", fixture_data=JSON_OK)]

    with intercepted(steps) as handles:
        with pytest.raises(InterceptorNotSatisfied) as exc_info:
            verify_interceptors(handles)

    assert "GET https://api.test/users/1" in str(exc_info.value)
    assert "DELETE https://api.test/users/2" in str(exc_info.value)


def test_unsupported_method() -> None:
    mock = create_mock()
    try:
        with pytest.raises(UnsupportedMethod, match="TRACE"):
            install_interceptors(mock, [_step(method="TRACE", fixture_data=JSON_OK)])
    finally:
        mock.reset()


def test_unresolved_step() -> None:
    mock = create_mock()
    try:
        with pytest.raises(UnresolvedStep):
            install_interceptors(mock, [_step(fixture="not-loaded.http")])
    finally:
        mock.reset()


def test_teardown_runs_when_body_raises() -> None:
    with pytest.raises(RuntimeError):
        with intercepted([_step(fixture_data=JSON_OK)]):
            raise RuntimeError("scenario failed")

    # A fresh mock sees no leftover interceptors
    with intercepted([]) as handles:
        with pytest.raises(requests.exceptions.ConnectionError):
            requests.get("https://api.test/users/1", timeout=5)
    assert handles == []


def test_cleanup_interceptors_stops_active_mock() -> None:
    mock = create_mock()
    mock.start()
    install_interceptors(mock, [_step(fixture_data=JSON_OK)])

    cleanup_interceptors(mock)

    assert len(mock.registered()) == 0
