"""Run configuration: defaults, optional YAML/JSON file, CLI overrides."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from detat.detection import DetectorName, get_detector
from detat.errors import ConfigError
from detat.policy import PolicyConfig
from detat.transcode import Trap

CONFIG_ENV_VAR = "DETAT_CONFIG"
BOOL_KEYS = {"json", "stat", "allow_binary"}


@dataclass(frozen=True)
class DetatConfig:
    confidence_min: float | None = None
    fallback: str | None = None
    json: bool = False
    stat: bool = False
    allow_binary: bool = False
    trap: Trap | None = None
    detector: DetectorName = DetectorName.CHARDET

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> DetatConfig:
        known = {f.name for f in fields(DetatConfig)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, raw in payload.items():
            if raw is None:
                continue
            values[key] = _coerce(key, raw)
        return DetatConfig(**values)

    def merged(self, **overrides: Any) -> DetatConfig:
        """Apply CLI overrides; ``None`` means "not given" and keeps the current value."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in BOOL_KEYS & changes.keys():
            # flags can only switch a file setting on
            changes[key] = bool(changes[key] or getattr(self, key))
        return replace(self, **changes)

    @property
    def effective_trap(self) -> Trap:
        fixed = get_detector(self.detector).fixed_trap
        return self.trap or fixed or Trap.STRICT

    def validate(self) -> DetatConfig:
        detector = get_detector(self.detector)
        if detector.graded:
            # above 1.0 forces the fallback for every item
            if self.confidence_min is not None and not math.isfinite(self.confidence_min):
                raise ConfigError(f"confidence minimum must be finite: {self.confidence_min}")
        else:
            if self.confidence_min is not None:
                raise ConfigError(
                    f"the {detector.name} detector reports no graded confidence; "
                    "--confidence-min is not supported"
                )
            if self.trap is not None and self.trap is not detector.fixed_trap:
                raise ConfigError(
                    f"the {detector.name} detector always decodes with the "
                    f"'{detector.fixed_trap.value}' trap"
                )
        if self.fallback is not None and not self.fallback.strip():
            raise ConfigError("fallback encoding must not be empty")
        return self

    def policy(self) -> PolicyConfig:
        confidence_min = self.confidence_min
        if confidence_min is None and get_detector(self.detector).graded:
            confidence_min = 0.0
        return PolicyConfig(
            confidence_min=confidence_min,
            fallback=self.fallback,
            allow_binary=self.allow_binary,
        )


def _coerce(key: str, raw: Any) -> Any:
    try:
        if key in BOOL_KEYS:
            if not isinstance(raw, bool):
                raise ValueError(f"expected true/false, got {raw!r}")
            return raw
        if key == "confidence_min":
            value = float(raw)
            if math.isnan(value):
                raise ValueError("NaN")
            return value
        if key == "trap":
            return Trap(str(raw).lower())
        if key == "detector":
            return DetectorName(str(raw).lower())
        return str(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value for {key}: {exc}") from exc


def load_config_file(path: Path) -> DetatConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigError(f"cannot parse config {path}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return DetatConfig.from_mapping(payload)
