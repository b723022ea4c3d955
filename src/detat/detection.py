"""Charset detection backends.

Two heuristics are supported and normalized into a single ``DetectionResult``:

- ``chardet`` reports a graded confidence score plus an optional language guess.
- ``charset_normalizer`` is used as a boolean backend: a label plus a flag telling
  whether the best match stayed under the library's mess threshold.

Detectors never raise for any byte content; "not text" is an empty label.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from enum import Enum

import chardet
from charset_normalizer import from_bytes

from detat.transcode import Trap

logger = logging.getLogger(__name__)

# charset_normalizer's default mess ratio threshold.
DEFAULT_CHAOS_MAX = 0.2


@dataclass(frozen=True)
class GradedConfidence:
    score: float = 0.0

    @property
    def value(self) -> float:
        return self.score

    def clears(self, minimum: float | None) -> bool:
        # ties count as clearing the threshold
        return self.score >= (minimum or 0.0)

    def __str__(self) -> str:
        return str(self.score)


@dataclass(frozen=True)
class BooleanConfidence:
    has_confidence: bool = False

    @property
    def value(self) -> bool:
        return self.has_confidence

    def clears(self, minimum: float | None = None) -> bool:
        return self.has_confidence

    def __str__(self) -> str:
        return "true" if self.has_confidence else "false"


ConfidenceSignal = GradedConfidence | BooleanConfidence


@dataclass(frozen=True)
class DetectionResult:
    label: str = ""
    confidence: ConfidenceSignal = field(default_factory=GradedConfidence)
    language: str | None = ""

    @property
    def is_binary(self) -> bool:
        return not self.label

    def to_dict(self) -> dict[str, object]:
        return {
            "charset": self.label,
            "confidence": self.confidence.value,
            "language": self.language,
        }


def encoding_for_charset(charset: str) -> str:
    """Map a detector label to Python's canonical codec name.

    Labels the codec registry does not know are returned unchanged so the
    transcoder can report them with both names.
    """
    try:
        return codecs.lookup(charset).name
    except LookupError:
        return charset


class ChardetDetector:
    name = "chardet"
    graded = True
    fixed_trap: Trap | None = None

    def detect(self, data: bytes) -> DetectionResult:
        result = chardet.detect(data)
        return DetectionResult(
            label=result.get("encoding") or "",
            confidence=GradedConfidence(float(result.get("confidence") or 0.0)),
            language=result.get("language") or "",
        )

    def blank(self) -> DetectionResult:
        return DetectionResult(confidence=GradedConfidence(0.0), language="")


class CharsetNormalizerDetector:
    name = "charset-normalizer"
    graded = False
    # decoding through this backend always substitutes invalid sequences
    fixed_trap: Trap | None = Trap.REPLACE

    def __init__(self, chaos_max: float = DEFAULT_CHAOS_MAX) -> None:
        self.chaos_max = chaos_max

    def detect(self, data: bytes) -> DetectionResult:
        best = from_bytes(data).best()
        if best is None:
            return self.blank()
        logger.debug("charset_normalizer match %s (chaos=%.3f)", best.encoding, best.chaos)
        return DetectionResult(
            label=best.encoding,
            confidence=BooleanConfidence(best.chaos <= self.chaos_max),
            language=None,
        )

    def blank(self) -> DetectionResult:
        return DetectionResult(confidence=BooleanConfidence(False), language=None)


Detector = ChardetDetector | CharsetNormalizerDetector


class DetectorName(str, Enum):
    CHARDET = "chardet"
    CHARSET_NORMALIZER = "charset-normalizer"


def get_detector(name: DetectorName | str) -> Detector:
    key = DetectorName(name)
    if key is DetectorName.CHARSET_NORMALIZER:
        return CharsetNormalizerDetector()
    return ChardetDetector()
