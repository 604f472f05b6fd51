"""HTTP interception for scenario steps.

Registers one single-use `responses` interceptor per step. While a mock is
active every `requests` call that matches no remaining interceptor fails
with a connection error, so the script under test can't reach the network.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import urlsplit

import requests
import responses
from responses import matchers
from responses.registries import FirstMatchRegistry

from ..errors import InterceptorNotSatisfied, UnresolvedStep, UnsupportedMethod
from ..scenario.schema import SUPPORTED_METHODS, Step

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error: connection refused"


class SingleUseRegistry(FirstMatchRegistry):
    """Registry whose interceptors are consumed by the first matching call."""

    def find(self, request):
        match_failed_reasons = []
        for index, response in enumerate(self.registered):
            matched, reason = response.matches(request)
            if matched:
                return self.registered.pop(index), match_failed_reasons
            match_failed_reasons.append(reason)
        return None, match_failed_reasons


@dataclass
class InterceptorHandle:
    """An installed interceptor for one step."""
    step: Step
    response: responses.BaseResponse

    @property
    def satisfied(self) -> bool:
        return self.response.call_count > 0

    def verify(self) -> None:
        """Raise if the intercepted request was never made.

        Raises:
            InterceptorNotSatisfied: If the interceptor never fired.
        """
        if not self.satisfied:
            raise InterceptorNotSatisfied(
                f"Expected request was not made: {self.step.request}"
            )


def create_mock() -> responses.RequestsMock:
    """Create an inactive mock that blocks unmatched requests."""
    return responses.RequestsMock(
        assert_all_requests_are_fired=False,
        registry=SingleUseRegistry,
    )


def split_url(url: str) -> tuple[str, str]:
    """Split a URL into origin and path+query."""
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}"
    path = parts.path or "/"
    if parts.query:
        path += f"?{parts.query}"
    return origin, path


def install_interceptors(
    mock: responses.RequestsMock, steps: list[Step]
) -> list[InterceptorHandle]:
    """Register one interceptor per resolved step.

    Args:
        mock: Active (or about to be started) RequestsMock.
        steps: Steps with fixture_data or network_error resolved.

    Returns:
        Handles in step order.

    Raises:
        UnsupportedMethod: If a step uses an unsupported HTTP verb.
        UnresolvedStep: If a step has neither fixture data nor network error.
    """
    handles = []

    for step in steps:
        request = step.request
        method = request.method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethod(f"Unsupported HTTP method: {request.method}")

        origin, path = split_url(request.url)
        route, _, query = path.partition("?")
        # An empty query string only matches requests without one
        match = [matchers.query_string_matcher(query)]
        if request.headers:
            match.append(matchers.header_matcher(
                {str(k): str(v) for k, v in request.headers.items()}
            ))

        if step.network_error:
            response = mock.add(
                method,
                origin + route,
                body=requests.exceptions.ConnectionError(NETWORK_ERROR_MESSAGE),
                match=match,
            )
        elif step.fixture_data is not None:
            fixture = step.fixture_data
            headers = dict(fixture.headers)
            content_type = _pop_content_type(headers)
            response = mock.add(
                method,
                origin + route,
                body=fixture.body,
                status=fixture.status_code,
                headers=headers,
                content_type=content_type,
                match=match,
            )
        else:
            raise UnresolvedStep(
                f"Step for {request} has no fixtureData or networkError"
            )

        logger.debug("Intercepting %s %s%s", method, origin, path)
        handles.append(InterceptorHandle(step=step, response=response))

    return handles


def pending_interceptors(handles: list[InterceptorHandle]) -> list[InterceptorHandle]:
    """Handles whose request was never made."""
    return [h for h in handles if not h.satisfied]


def verify_interceptors(handles: list[InterceptorHandle]) -> None:
    """Verify every interceptor fired.

    Raises:
        InterceptorNotSatisfied: Listing every request that was not made.
    """
    pending = pending_interceptors(handles)
    if len(pending) == 1:
        pending[0].verify()
    elif pending:
        listed = ", ".join(str(h.step.request) for h in pending)
        raise InterceptorNotSatisfied(f"Expected requests were not made: {listed}")


def cleanup_interceptors(mock: responses.RequestsMock) -> None:
    """Remove all interceptors and restore unrestricted networking."""
    mock.stop(allow_assert=False)
    mock.reset()


@contextmanager
def intercepted(steps: list[Step]) -> Iterator[list[InterceptorHandle]]:
    """Block real network access and intercept the given steps.

    Interceptors are removed and networking is restored on every exit path.
    """
    mock = create_mock()
    mock.start()
    try:
        yield install_interceptors(mock, steps)
    finally:
        cleanup_interceptors(mock)


def _pop_content_type(headers: dict[str, str]) -> Optional[str]:
    for name in list(headers):
        if name.lower() == "content-type":
            return headers.pop(name)
    return None
