"""Decode a byte buffer under a resolved encoding and an error trap."""

from __future__ import annotations

from enum import Enum

from detat.errors import DecodeError, NoEncodingError


class Trap(str, Enum):
    """How invalid byte sequences are handled; values are codec ``errors=`` names."""

    STRICT = "strict"
    REPLACE = "replace"
    IGNORE = "ignore"


def transcode(data: bytes, encoding: str, trap: Trap = Trap.STRICT, detected: str = "") -> str:
    """Decode ``data`` as ``encoding`` into text.

    ``detected`` is the detector's original label, reported alongside ``encoding``
    when the codec lookup fails (the two differ when a fallback was used).
    """
    try:
        text = data.decode(encoding, errors=Trap(trap).value)
    except UnicodeDecodeError as exc:
        raise DecodeError(str(exc)) from exc
    except LookupError as exc:
        # unknown codec, or a non-text codec such as base64
        raise NoEncodingError(encoding, detected or encoding) from exc
    except ValueError as exc:
        # malformed codec name, e.g. one with an embedded NUL
        raise NoEncodingError(encoding, detected or encoding) from exc
    # lone surrogates (e.g. from unicode_escape) have no UTF-8 form
    return text.encode("utf-8", errors="replace").decode("utf-8")
