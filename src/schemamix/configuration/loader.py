"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import MergeJob, MixerConfiguration


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> MixerConfiguration:
    """Load and validate the mixer configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return MixerConfiguration(path=path, jobs=_parse_mixers_section(parsed.get("mixers")))


def _parse_mixers_section(value: Any) -> tuple[MergeJob, ...]:
    if value is None:
        raise ConfigurationError("Configuration section 'mixers' is required.")
    if isinstance(value, (str, Mapping)) or not isinstance(value, Sequence):
        raise ConfigurationError("mixers must be a list of mixer definitions.")
    if not value:
        raise ConfigurationError("mixers must contain at least one mixer.")
    return tuple(_parse_mixer(item, index) for index, item in enumerate(value))


def _parse_mixer(value: Any, index: int) -> MergeJob:
    section = _require_mapping(value, f"mixers[{index}]")
    inputs = _normalize_input_patterns(section.get("input"), f"mixers[{index}].input")
    output = _require_non_empty_string(section.get("output"), f"mixers[{index}].output")
    return MergeJob(inputs=inputs, output=output)


def _normalize_input_patterns(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    patterns: list[str] = []
    if isinstance(value, str):
        patterns = [value.strip()] if value.strip() else []
    elif isinstance(value, Sequence):
        for item in value:
            patterns.append(_require_non_empty_string(item, f"{field_name} entries"))
    else:
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    if not patterns:
        raise ConfigurationError(f"{field_name} must contain at least one pattern.")
    return tuple(patterns)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
