"""Presentations written to the output sink: raw content, stat blocks, JSON Lines."""

from __future__ import annotations

from enum import Enum
from typing import BinaryIO

from detat.metadata import Metadata, OutputRecord

STAT_SEPARATOR = "---"
STDIN_NAME = "-"


class Mode(str, Enum):
    RAW = "raw"
    STAT = "stat"
    JSON = "json"


def select_mode(json: bool, stat: bool) -> Mode:
    # JSON framing wins over the human-readable block
    if json:
        return Mode.JSON
    if stat:
        return Mode.STAT
    return Mode.RAW


def format_stat(metadata: Metadata, path: str | None) -> str:
    detection = metadata.detection
    lines = [
        STAT_SEPARATOR,
        f"Path: {path or STDIN_NAME}",
        f"Charset: {detection.label}",
        f"Confidence: {detection.confidence}",
    ]
    if detection.language is not None:
        lines.append(f"Language: {detection.language}")
    return "\n".join(lines) + "\n"


def write_stat(sink: BinaryIO, metadata: Metadata, path: str | None) -> None:
    sink.write(format_stat(metadata, path).encode("utf-8"))


def write_content(sink: BinaryIO, content: str | bytes) -> None:
    """Write decoded text as UTF-8, or pass-through bytes untouched."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    sink.write(content)


def write_json(sink: BinaryIO, record: OutputRecord) -> None:
    sink.write(record.to_json_line())
