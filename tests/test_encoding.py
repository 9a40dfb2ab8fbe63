"""Tests for poshell.encoding (Codec, registry)."""

from __future__ import annotations

import pytest

from poshell import encoding
from poshell.encoding import ENCODINGS, NOP, Codec, lookup, register_encoding
from poshell.errors import UnsupportedCodePageError


@pytest.fixture(autouse=True)
def restore_registry():
    saved = dict(ENCODINGS)
    yield
    ENCODINGS.clear()
    ENCODINGS.update(saved)


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


class TestCodec:
    def test_unknown_codec_name_rejected(self) -> None:
        with pytest.raises(LookupError):
            Codec("no-such-codec")

    def test_encode_is_strict(self) -> None:
        with pytest.raises(UnicodeEncodeError):
            Codec("cp932").encode("emoji \U0001f600")

    def test_shift_jis_roundtrip(self) -> None:
        codec = Codec("cp932")
        data = codec.encode("こんにちは")
        assert codec.incremental_decoder().decode(data) == "こんにちは"

    def test_decoder_keeps_partial_sequence(self) -> None:
        data = "こ".encode("utf-8")
        dec = Codec("utf-8").incremental_decoder()
        assert dec.decode(data[:1]) == ""
        assert dec.decode(data[1:2]) == ""
        assert dec.decode(data[2:]) == "こ"

    def test_decoders_are_independent(self) -> None:
        codec = Codec("utf-8")
        a = codec.incremental_decoder()
        b = codec.incremental_decoder()
        a.decode("é".encode("utf-8")[:1])
        assert b.decode(b"x") == "x"

    def test_nop_passes_every_byte(self) -> None:
        data = bytes(range(256))
        text = NOP.incremental_decoder().decode(data)
        assert len(text) == 256
        assert NOP.encode(text) == data


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_default_code_pages(self) -> None:
        assert lookup(65001).name == "utf-8"
        assert lookup(932).name == "cp932"
        assert lookup(949).name == "cp949"
        assert {936, 950}.issubset(ENCODINGS)

    def test_unsupported(self) -> None:
        with pytest.raises(UnsupportedCodePageError) as exc_info:
            lookup(437)
        assert exc_info.value.code_page == 437

    def test_register_by_name(self) -> None:
        codec = register_encoding(437, "cp437")
        assert codec == Codec("cp437")
        assert lookup(437) is codec

    def test_register_replaces(self) -> None:
        replacement = Codec("utf-8-sig")
        register_encoding(65001, replacement)
        assert lookup(65001) is replacement

    def test_register_bad_name_leaves_registry_alone(self) -> None:
        with pytest.raises(LookupError):
            register_encoding(1, "bogus-codec")
        assert 1 not in encoding.ENCODINGS

    def test_overrides_win(self) -> None:
        assert lookup(65001, {65001: "latin-1"}).name == "latin-1"

    def test_overrides_add_code_pages(self) -> None:
        assert lookup(1252, {1252: "cp1252"}).name == "cp1252"
        with pytest.raises(UnsupportedCodePageError):
            lookup(1252)
