"""Resolution policy: turn a detection result plus options into one decision.

The decision is a plain value. Expected outcomes such as binary input are
returned, not raised, so the runner decides how each one affects the exit status.
The only failure raised from here is the post-hoc confidence check, which runs
after an item's best-effort output was already written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from detat.detection import DetectionResult, encoding_for_charset
from detat.errors import LowConfidenceError
from detat.metadata import Metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyConfig:
    # None means "no numeric threshold" (boolean backends, or graded default of 0)
    confidence_min: float | None = None
    fallback: str | None = None
    allow_binary: bool = False


@dataclass(frozen=True)
class Decode:
    encoding: str
    used_fallback: bool = False


@dataclass(frozen=True)
class PassThroughBinary:
    pass


@dataclass(frozen=True)
class RejectBinary:
    reason: str = "Input is binary"


Decision = Decode | PassThroughBinary | RejectBinary


def resolve(detection: DetectionResult, policy: PolicyConfig) -> Decision:
    if detection.is_binary:
        return PassThroughBinary() if policy.allow_binary else RejectBinary()

    if detection.confidence.clears(policy.confidence_min):
        return Decode(encoding_for_charset(detection.label))

    if policy.fallback:
        logger.info(
            "confidence %s did not clear for %s; falling back to %s",
            detection.confidence,
            detection.label,
            policy.fallback,
        )
        return Decode(policy.fallback, used_fallback=True)

    # best effort: decode with the low-confidence guess, fail the item afterwards
    return Decode(encoding_for_charset(detection.label))


def check_confidence(metadata: Metadata, policy: PolicyConfig) -> None:
    """Raise ``LowConfidenceError`` for a processed item whose guess was not trusted."""
    detection = metadata.detection
    if metadata.read_bytes == 0 or metadata.used_fallback or detection.is_binary:
        return
    if detection.confidence.clears(policy.confidence_min):
        return
    raise LowConfidenceError(detection.label, detection.confidence.value, policy.confidence_min)
