import pytest

from detat.errors import DecodeError, NoEncodingError
from detat.transcode import Trap, transcode


def test_transcode_decodes_legacy_encoding():
    assert transcode("café".encode("cp1252"), "cp1252") == "café"


def test_strict_trap_raises_decode_error_with_codec_reason():
    with pytest.raises(DecodeError) as excinfo:
        transcode(b"ok \xff", "utf-8", Trap.STRICT)
    assert "invalid start byte" in excinfo.value.reason
    assert excinfo.value.error_kind == "decode"


def test_replace_and_ignore_never_fail():
    assert transcode(b"ok \xff", "utf-8", Trap.REPLACE) == "ok �"
    assert transcode(b"ok \xff", "utf-8", Trap.IGNORE) == "ok "


def test_unknown_encoding_carries_both_labels():
    with pytest.raises(NoEncodingError) as excinfo:
        transcode(b"abc", "x-unknown", Trap.REPLACE, detected="ascii")
    assert excinfo.value.encoding == "x-unknown"
    assert excinfo.value.charset == "ascii"


def test_non_text_codec_is_not_an_encoding():
    with pytest.raises(NoEncodingError):
        transcode(b"YWJj", "base64")


def test_trap_accepts_plain_names():
    assert transcode(b"\xff", "ascii", "replace") == "�"


def test_codec_name_with_nul_is_not_an_encoding():
    with pytest.raises(NoEncodingError) as excinfo:
        transcode(b"abc", "utf\x008", detected="ascii")
    assert excinfo.value.charset == "ascii"


def test_lone_surrogates_are_replaced():
    text = transcode(b"a\\ud800b", "unicode_escape")
    assert text == "a?b"
    text.encode("utf-8")
