"""Typed failures for the detection/transcoding pipeline.

Every per-item failure carries an ``error_kind`` so the runner (and tests) can
tell them apart without parsing messages. I/O problems stay plain ``OSError``.
"""

from __future__ import annotations

ERROR_KIND_INVALID_OPT = "invalid_opt"
ERROR_KIND_IS_BINARY = "is_binary"
ERROR_KIND_NO_ENCODING = "no_encoding"
ERROR_KIND_LOW_CONFIDENCE = "low_confidence"
ERROR_KIND_DECODE = "decode"


class DetatError(RuntimeError):
    def __init__(self, message: str, *, error_kind: str) -> None:
        super().__init__(message)
        self.error_kind = error_kind


class ConfigError(DetatError):
    """Malformed option value or option/backend mismatch."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_kind=ERROR_KIND_INVALID_OPT)


class BinaryInputError(DetatError):
    def __init__(self, message: str = "Input is binary") -> None:
        super().__init__(message, error_kind=ERROR_KIND_IS_BINARY)


class NoEncodingError(DetatError):
    def __init__(self, encoding: str, charset: str) -> None:
        super().__init__(
            f'no encoding: "{encoding}" (charset: "{charset}")', error_kind=ERROR_KIND_NO_ENCODING
        )
        self.encoding = encoding
        self.charset = charset


class DecodeError(DetatError):
    def __init__(self, reason: str) -> None:
        super().__init__(reason, error_kind=ERROR_KIND_DECODE)
        self.reason = reason


class LowConfidenceError(DetatError):
    """Raised after output was written for an item whose confidence did not clear."""

    def __init__(self, charset: str, confidence: float | bool, minimum: float | None) -> None:
        if isinstance(confidence, bool) or minimum is None:
            message = f"no confidence (predicted: {charset})"
        else:
            message = f"confidence: {confidence} < {minimum} (predicted: {charset})"
        super().__init__(message, error_kind=ERROR_KIND_LOW_CONFIDENCE)
        self.charset = charset
        self.confidence = confidence
        self.minimum = minimum
