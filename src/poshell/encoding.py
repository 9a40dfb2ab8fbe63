"""Code page registry — maps console code pages to Python codecs."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Mapping

from poshell.errors import UnsupportedCodePageError


@dataclass(frozen=True)
class Codec:
    """A strict text codec used for one session.

    Encoding and decoding never substitute characters: anything the code page
    cannot represent raises ``UnicodeError``.
    """

    name: str

    def __post_init__(self) -> None:
        # Fail at registration time rather than on the first command.
        codecs.lookup(self.name)

    def encode(self, text: str) -> bytes:
        return codecs.encode(text, self.name, "strict")

    def incremental_decoder(self) -> codecs.IncrementalDecoder:
        """Return a fresh decoder that keeps partial multi-byte state across chunks."""
        return codecs.getincrementaldecoder(self.name)(errors="strict")


# One byte per code point, every byte value valid: bytes pass through untouched.
NOP = Codec("latin-1")

# Default entries. Extend with register_encoding() before creating sessions.
ENCODINGS: dict[int, Codec] = {
    932: Codec("cp932"),
    936: Codec("gbk"),
    949: Codec("cp949"),
    950: Codec("big5"),
    65001: Codec("utf-8"),
}


def register_encoding(code_page: int, codec: Codec | str) -> Codec:
    """Add or replace the codec for ``code_page``.

    Args:
        code_page: Console code page number (e.g. 1252).
        codec: A :class:`Codec` or a Python codec name (e.g. ``"cp1252"``).

    Returns:
        The registered codec.

    Raises:
        LookupError: ``codec`` names no known Python codec.
    """
    if isinstance(codec, str):
        codec = Codec(codec)
    ENCODINGS[code_page] = codec
    return codec


def lookup(code_page: int, overrides: Mapping[int, str] | None = None) -> Codec:
    """Resolve the codec for ``code_page``.

    Per-session ``overrides`` (code page to codec name) win over the
    process-wide registry.

    Raises:
        UnsupportedCodePageError: no codec is known for ``code_page``.
    """
    if overrides and code_page in overrides:
        return Codec(overrides[code_page])
    codec = ENCODINGS.get(code_page)
    if codec is None:
        raise UnsupportedCodePageError(code_page)
    return codec
