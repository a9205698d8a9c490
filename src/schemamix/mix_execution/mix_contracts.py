"""Mix execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schemamix.schema_management.schema_models import SchemaDocument


@dataclass(frozen=True)
class MixRequest:
    """Input contract for executing every configured mixer."""

    config_path: str
    base_dir: str | None = None


@dataclass(frozen=True)
class LoadedDocuments:
    """Documents loaded for one mixer, in pattern-declared order."""

    documents: tuple[SchemaDocument, ...]
    unmatched_patterns: tuple[str, ...]
    failed_documents: tuple[Path, ...]


@dataclass(frozen=True)
class MixOutcome:
    """Output contract for one executed mixer."""

    output_path: Path
    documents_loaded: int
    models_written: int
    unmatched_patterns: tuple[str, ...] = ()
    failed_documents: tuple[Path, ...] = ()
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return True when the output file was written."""
        return self.error is None
