"""Dual-stream reader — collects one command's stdout and stderr."""

from __future__ import annotations

import codecs
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO

from poshell.encoding import Codec
from poshell.protocol.framing import NEWLINE

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64


def read_output(
    pipe: BinaryIO,
    decoder: codecs.IncrementalDecoder,
    boundary: str,
    chunk_size: int = CHUNK_SIZE,
) -> str:
    """Read ``pipe`` until its decoded text ends with the boundary line.

    Reads raw chunks of at most ``chunk_size`` bytes so the marker is seen as
    soon as it arrives. The marker (``boundary`` followed by CRLF) is stripped
    from the result.

    End of stream, read errors and decode errors all stop the loop; whatever
    was accumulated so far is returned without raising.
    """
    marker = boundary + NEWLINE
    parts: list[str] = []
    tail = ""
    while True:
        try:
            chunk = pipe.read(chunk_size)
        except (OSError, ValueError) as e:
            logger.debug("Read failed before boundary: %s", e)
            break
        if not chunk:
            logger.debug("Stream closed before boundary")
            break

        try:
            text = decoder.decode(chunk)
        except UnicodeDecodeError as e:
            logger.debug("Decode failed before boundary: %s", e)
            break

        if not text:
            continue
        parts.append(text)
        # Only the last len(marker) characters matter for the suffix check.
        tail = (tail + text)[-len(marker):]
        if tail == marker:
            out = "".join(parts)
            return out[: -len(marker)]

    return "".join(parts)


def read_both(
    stdout: BinaryIO,
    stderr: BinaryIO,
    codec: Codec,
    boundary: str,
    chunk_size: int = CHUNK_SIZE,
) -> tuple[str, str]:
    """Read both streams concurrently and wait for both to finish.

    Each stream gets its own decoder. Returns ``(stdout_text, stderr_text)``.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="poshell-reader") as pool:
        out = pool.submit(
            read_output, stdout, codec.incremental_decoder(), boundary, chunk_size
        )
        err = pool.submit(
            read_output, stderr, codec.incremental_decoder(), boundary, chunk_size
        )
        return out.result(), err.result()
