"""Per-item audit record and its JSON Lines form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import orjson

from detat.detection import DetectionResult


@dataclass(frozen=True)
class Metadata:
    detection: DetectionResult = field(default_factory=DetectionResult)
    encoding: str = ""
    used_fallback: bool = False
    read_bytes: int = 0

    @staticmethod
    def empty(detection: DetectionResult | None = None) -> Metadata:
        """Zero value for an empty input: nothing detected, nothing decided."""
        return Metadata(detection=detection or DetectionResult())

    def to_dict(self) -> dict[str, Any]:
        return {
            "chardet": self.detection.to_dict(),
            "encoding": self.encoding,
            "fallbacked": self.used_fallback,
            "read_bytes": self.read_bytes,
        }


@dataclass(frozen=True)
class OutputRecord:
    path: str | None
    metadata: Metadata
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "metadata": self.metadata.to_dict(), "content": self.content}

    def to_json_line(self) -> bytes:
        return orjson.dumps(self.to_dict()) + b"\n"
