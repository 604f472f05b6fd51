"""Parser for `.http` fixture files.

Fixtures are raw HTTP responses as captured by `curl -i`:

    HTTP/1.1 200 OK
    Content-Type: application/json

    {"key": "value"}
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from ..errors import FixtureNotFound, MalformedFixture
from ..scenario.schema import Fixture

logger = logging.getLogger(__name__)

STATUS_LINE_RE = re.compile(r"^HTTP/[\d.]+\s+(\d{3})(?:\s+.*)?$")


def parse_fixture_string(raw: str) -> Fixture:
    """Parse raw HTTP response text into a Fixture.

    Raises:
        MalformedFixture: If the first line is not an HTTP status line.
    """
    normalized = raw.replace("\r\n", "\n").replace("\r", "\n")

    # Split on the first blank line; the body is kept verbatim
    head, separator, body = normalized.partition("\n\n")
    if not separator:
        body = ""

    header_lines = head.split("\n")
    status_line = header_lines[0]

    match = STATUS_LINE_RE.match(status_line)
    if not match:
        raise MalformedFixture(
            f"Invalid HTTP fixture: expected status line, got \"{status_line}\""
        )

    headers: dict[str, str] = {}
    for line in header_lines[1:]:
        name, colon, value = line.partition(":")
        if not colon:
            continue
        # Repeated names overwrite; last one wins
        headers[name.strip()] = value.strip()

    return Fixture(status_code=int(match.group(1)), headers=headers, body=body)


def parse_fixture(
    file_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None
) -> Fixture:
    """Read and parse a `.http` fixture file.

    Args:
        file_path: Absolute path, or a path relative to base_dir.
        base_dir: Directory for resolving relative paths (default: cwd).

    Raises:
        FixtureNotFound: If the file can't be read.
        MalformedFixture: If the content has no status line.
    """
    path = Path(file_path)
    if not path.is_absolute():
        path = Path(base_dir or Path.cwd()) / path

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FixtureNotFound(f"Fixture file not found: {path}") from e

    logger.debug("Loaded fixture %s", path)
    return parse_fixture_string(raw)
