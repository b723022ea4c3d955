"""Per-item pipeline and the batch loop over input paths.

Each item is read whole, detected, resolved, transcoded and rendered before the
next one starts. Failures are logged and recorded; the batch never stops early,
and the exit status is 1 when any item failed.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from detat.config import DetatConfig
from detat.detection import Detector, get_detector
from detat.errors import BinaryInputError, DetatError
from detat.metadata import Metadata, OutputRecord
from detat.policy import PassThroughBinary, RejectBinary, check_confidence, resolve
from detat.render import STDIN_NAME, Mode, select_mode, write_content, write_json, write_stat
from detat.transcode import transcode

logger = logging.getLogger(__name__)


def is_stdin(path: str) -> bool:
    return path in ("", STDIN_NAME)


class Detat:
    def __init__(
        self,
        config: DetatConfig,
        sink: BinaryIO | None = None,
        stdin: BinaryIO | None = None,
        detector: Detector | None = None,
    ) -> None:
        self.config = config
        self.detector = detector or get_detector(config.detector)
        self.policy = config.policy()
        self.trap = config.effective_trap
        self.mode = select_mode(config.json, config.stat)
        self.sink = sink if sink is not None else sys.stdout.buffer
        self.stdin = stdin if stdin is not None else sys.stdin.buffer

    def process(self, data: bytes, path: str | None) -> Metadata:
        """Detect, resolve and transcode one buffer, writing the rendered result."""
        if not data:
            metadata = Metadata.empty(self.detector.blank())
            self._emit(metadata, path, None)
            return metadata

        detection = self.detector.detect(data)
        logger.info(
            "predicted: %s, confidence: %s, language: %s",
            detection.label,
            detection.confidence,
            detection.language,
        )
        decision = resolve(detection, self.policy)
        if isinstance(decision, RejectBinary):
            raise BinaryInputError(decision.reason)
        if isinstance(decision, PassThroughBinary):
            metadata = Metadata(detection=detection, read_bytes=len(data))
            self._emit(metadata, path, data)
            return metadata

        metadata = Metadata(
            detection=detection,
            encoding=decision.encoding,
            used_fallback=decision.used_fallback,
            read_bytes=len(data),
        )
        if self.config.stat:
            self._emit(metadata, path, None)
            return metadata

        text = transcode(data, decision.encoding, self.trap, detected=detection.label)
        self._emit(metadata, path, text)
        return metadata

    def _emit(self, metadata: Metadata, path: str | None, content: str | bytes | None) -> None:
        if self.mode is Mode.JSON:
            text = content if isinstance(content, str) else None
            write_json(self.sink, OutputRecord(path=path, metadata=metadata, content=text))
        elif self.mode is Mode.STAT:
            write_stat(self.sink, metadata, path)
        elif content is not None:
            write_content(self.sink, content)

    def _read(self, path: str) -> bytes:
        if is_stdin(path):
            return self.stdin.read()
        return Path(path).read_bytes()

    def run(self, path: str) -> Metadata:
        """Process one input and apply the post-hoc confidence check."""
        display = None if is_stdin(path) else path
        metadata = self.process(self._read(path), display)
        # output for this item is complete even if it is failed below
        self.sink.flush()
        check_confidence(metadata, self.policy)
        return metadata

    def run_all(self, paths: Iterable[str]) -> int:
        failed = False
        for path in list(paths) or [STDIN_NAME]:
            try:
                self.run(path)
            except (DetatError, OSError) as exc:
                logger.error("%s: %s", path or STDIN_NAME, exc)
                failed = True
        return 1 if failed else 0
