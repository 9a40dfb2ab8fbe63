"""Command framing — wraps a user command so its end can be detected."""

from __future__ import annotations

import logging
from typing import BinaryIO

from poshell.encoding import Codec
from poshell.errors import EncodingError, WriteError

logger = logging.getLogger(__name__)

NEWLINE = "\r\n"


def frame_command(command: str, boundary: str) -> str:
    """Append statements echoing ``boundary`` to stdout and stderr.

    >>> frame_command("dir", "$commandab")
    "dir; echo '$commandab'; [Console]::Error.WriteLine('$commandab')\\r\\n"
    """
    return (
        f"{command}; echo '{boundary}'; "
        f"[Console]::Error.WriteLine('{boundary}'){NEWLINE}"
    )


def write_all(pipe: BinaryIO, data: bytes) -> None:
    """Write every byte of ``data``; raw pipes may accept only part of it per call."""
    view = memoryview(data)
    while view:
        n = pipe.write(view)
        if n is None:
            n = 0
        view = view[n:]
    pipe.flush()


def send_command(stdin: BinaryIO, codec: Codec, text: str) -> None:
    """Encode ``text`` and write all of it to the shell's input pipe.

    Raises:
        EncodingError: ``codec`` cannot represent ``text``.
        WriteError: the pipe is closed or the process is gone.
    """
    try:
        data = codec.encode(text)
    except UnicodeError as e:
        raise EncodingError(f"encode command: {e}") from e

    try:
        write_all(stdin, data)
    except (OSError, ValueError) as e:
        # ValueError: write to a closed file object
        raise WriteError(f"write command: {e}") from e
    logger.debug("Sent %d bytes", len(data))
