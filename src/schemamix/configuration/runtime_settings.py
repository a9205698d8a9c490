"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MergeJob:
    """One mixer: ordered input glob patterns composed into one output file."""

    inputs: tuple[str, ...]
    output: str


@dataclass(frozen=True)
class MixerConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    jobs: tuple[MergeJob, ...]
