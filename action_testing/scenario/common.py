"""Built-in common error scenarios.

Every HTTP-calling action should fail loudly on auth errors, throttling,
server errors and dropped connections. Each template builds its steps from
the action's own first request so the generated scenario hits the same
endpoint.
"""

from .schema import CommonScenarioTemplate, Fixture, RequestSpec, Step, Throws

JSON_HEADERS = {"Content-Type": "application/json"}
HTML_HEADERS = {"Content-Type": "text/html"}


def _status_template(name: str, status_code: int, headers: dict, body: str) -> CommonScenarioTemplate:
    def generate(base_request: RequestSpec):
        step = Step(
            request=RequestSpec(method=base_request.method, url=base_request.url),
            fixture_data=Fixture(status_code=status_code, headers=dict(headers), body=body),
        )
        return [step], Throws("")

    return CommonScenarioTemplate(name=name, generate=generate)


def _network_error(base_request: RequestSpec):
    step = Step(
        request=RequestSpec(method=base_request.method, url=base_request.url),
        network_error=True,
    )
    return [step], Throws("")


COMMON_SCENARIOS: tuple[CommonScenarioTemplate, ...] = (
    _status_template(
        "handles 401 unauthorized", 401, JSON_HEADERS,
        '{"error":"Unauthorized","message":"Invalid or expired token"}',
    ),
    _status_template(
        "handles 403 forbidden", 403, JSON_HEADERS,
        '{"error":"Forbidden","message":"Insufficient permissions"}',
    ),
    _status_template(
        "handles 429 rate limit", 429, {**JSON_HEADERS, "Retry-After": "30"},
        '{"error":"Too Many Requests","message":"Rate limit exceeded"}',
    ),
    _status_template(
        "handles 500 internal server error", 500, JSON_HEADERS,
        '{"error":"Internal Server Error"}',
    ),
    _status_template(
        "handles 502 bad gateway", 502, HTML_HEADERS,
        "<html><body>Bad Gateway</body></html>",
    ),
    _status_template(
        "handles 503 service unavailable", 503, JSON_HEADERS,
        '{"error":"Service Unavailable"}',
    ),
    _status_template(
        "handles 504 gateway timeout", 504, HTML_HEADERS,
        "<html><body>Gateway Timeout</body></html>",
    ),
    CommonScenarioTemplate(name="handles network error", generate=_network_error),
)

COMMON_SCENARIO_NAMES = tuple(t.name for t in COMMON_SCENARIOS)
