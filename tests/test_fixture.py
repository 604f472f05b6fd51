from __future__ import annotations

from pathlib import Path

import pytest

from action_testing.errors import FixtureNotFound, MalformedFixture
from action_testing.scenario.schema import Fixture
from action_testing.transport.fixture import parse_fixture, parse_fixture_string


def test_parses_status_headers_and_body() -> None:
    raw = 'HTTP/1.1 200 OK\nContent-Type: application/json\nX-Request-Id: abc\n\n{"id":"usr123"}'

    fixture = parse_fixture_string(raw)

    assert fixture.status_code == 200
    assert fixture.headers == {"Content-Type": "application/json", "X-Request-Id": "abc"}
    assert fixture.body == '{"id":"usr123"}'


def test_normalizes_crlf_line_endings() -> None:
    raw = "HTTP/1.1 404 Not Found\r\nContent-Type: text/plain\r\n\r\nmissing\r\n"

    fixture = parse_fixture_string(raw)

    assert fixture.status_code == 404
    assert fixture.headers == {"Content-Type": "text/plain"}
    assert fixture.body == "missing\n"


def test_body_keeps_internal_blank_lines() -> None:
    raw = "HTTP/1.1 200 OK\n\nline one\n\nline three\n"

    fixture = parse_fixture_string(raw)

    assert fixture.headers == {}
    assert fixture.body == "line one\n\nline three\n"


def test_missing_blank_line_means_empty_body() -> None:
    fixture = parse_fixture_string("HTTP/1.1 204 No Content\nX-Trace: 1")

    assert fixture.status_code == 204
    assert fixture.headers == {"X-Trace": "1"}
    assert fixture.body == ""


def test_accepts_http2_status_line_without_reason() -> None:
    assert parse_fixture_string("HTTP/2 503\n\n").status_code == 503


def test_header_values_split_on_first_colon_and_trimmed() -> None:
    fixture = parse_fixture_string("HTTP/1.1 302 Found\nLocation:   https://example.com:8443/next  \n\n")

    assert fixture.headers == {"Location": "https://example.com:8443/next"}


def test_repeated_header_last_wins() -> None:
    fixture = parse_fixture_string("HTTP/1.1 200 OK\nSet-Cookie: a=1\nSet-Cookie: b=2\n\n")

    assert fixture.headers == {"Set-Cookie": "b=2"}


def test_lines_without_colon_are_ignored() -> None:
    fixture = parse_fixture_string("HTTP/1.1 200 OK\ngarbage line\nA: b\n\n")

    assert fixture.headers == {"A": "b"}


@pytest.mark.parametrize("raw", ["", "200 OK\n\n{}", "Content-Type: text/plain\n\nbody", "HTTP/1.1 OK\n\n"])
def test_rejects_missing_status_line(raw: str) -> None:
    with pytest.raises(MalformedFixture, match="expected status line"):
        parse_fixture_string(raw)


def test_round_trip_through_http_text() -> None:
    original = Fixture(
        status_code=429,
        headers={"Content-Type": "application/json", "Retry-After": "30"},
        body='{"error":"Too Many Requests"}\n\ntrailing',
    )

    text = original.to_http()

    assert text.startswith("HTTP/1.1 429 Too Many Requests\n")
    assert parse_fixture_string(text) == original
    assert parse_fixture_string(parse_fixture_string(text).to_http()) == original


def test_parse_fixture_resolves_relative_to_base_dir(tmp_path: Path) -> None:
    (tmp_path / "fixtures").mkdir()
    (tmp_path / "fixtures" / "ok.http").write_text("HTTP/1.1 200 OK\n\nok", encoding="utf-8")

    fixture = parse_fixture("fixtures/ok.http", tmp_path)

    assert fixture.body == "ok"


def test_parse_fixture_accepts_absolute_path(tmp_path: Path) -> None:
    path = tmp_path / "created.http"
    path.write_text("HTTP/1.1 201 Created\n\n", encoding="utf-8")

    assert parse_fixture(path, "/somewhere/else").status_code == 201


def test_parse_fixture_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FixtureNotFound, match="missing.http"):
        parse_fixture("missing.http", tmp_path)


def test_fixture_not_found_is_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_fixture(tmp_path / "nope.http")
