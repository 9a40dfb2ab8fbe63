"""Code page detection — asks the shell which code page is active."""

from __future__ import annotations

from typing import Callable

from poshell.errors import (
    CodePageDetectionError,
    InvalidCodePageOutputError,
    NonNumericCodePageError,
    PoshellError,
)

CODE_PAGE_QUERY = "chcp"
DELIMITER = ": "


def parse_code_page(output: str) -> int:
    """Extract the number after the last ``": "`` in ``chcp`` output.

    >>> parse_code_page("Active code page: 65001\\r\\n")
    65001
    """
    out = output.rstrip(" \r\n")
    i = out.rfind(DELIMITER)
    if i == -1:
        raise InvalidCodePageOutputError(output)
    try:
        return int(out[i + len(DELIMITER):])
    except ValueError as e:
        raise NonNumericCodePageError(output) from e


def detect_code_page(execute: Callable[[str], str]) -> int:
    """Run the code page query through ``execute`` and parse the answer.

    ``execute`` must still be using the pass-through codec, since the code
    page is not known yet.
    """
    try:
        output = execute(CODE_PAGE_QUERY)
    except PoshellError as e:
        raise CodePageDetectionError(f"get codepage: {e}") from e
    return parse_code_page(output)
