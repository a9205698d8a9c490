"""Schema document discovery and loading service."""

from __future__ import annotations

import glob
import logging
from collections.abc import Callable
from pathlib import Path

from schemamix.attribute_mining import inject_mined_attributes, mine_custom_attributes
from schemamix.configuration.runtime_settings import MergeJob
from schemamix.schema_management.schema_models import ParsedSchema, SchemaDocument
from schemamix.schema_management.schema_parser import SchemaParseError, parse_schema_text

from .mix_contracts import LoadedDocuments

logger = logging.getLogger(__name__)

SchemaParser = Callable[[str], ParsedSchema]


def load_job_documents(
    job: MergeJob,
    *,
    base_dir: Path,
    parse_schema: SchemaParser = parse_schema_text,
) -> LoadedDocuments:
    """Load every document matched by the job's patterns, in declared order.

    Patterns matching nothing and documents failing to parse are logged and
    skipped; loading always continues with the remaining inputs.
    """
    documents: list[SchemaDocument] = []
    unmatched_patterns: list[str] = []
    failed_documents: list[Path] = []

    for pattern in job.inputs:
        matches = expand_input_pattern(pattern, base_dir)
        if not matches:
            logger.error(
                "No schema file matches input pattern '%s'. "
                "Check the mixer configuration and whether the file exists.",
                pattern,
            )
            unmatched_patterns.append(pattern)
            continue
        for path in matches:
            try:
                documents.append(load_schema_document(path, parse_schema=parse_schema))
            except (SchemaParseError, OSError, UnicodeDecodeError) as exc:
                logger.error(
                    "Failed to parse schema located at '%s': %s. Models referenced from "
                    "another schema need a stub alias model declaring at least the @id field.",
                    path,
                    exc,
                )
                failed_documents.append(path)

    return LoadedDocuments(
        documents=tuple(documents),
        unmatched_patterns=tuple(unmatched_patterns),
        failed_documents=tuple(failed_documents),
    )


def expand_input_pattern(pattern: str, base_dir: Path) -> list[Path]:
    """Return files matching `pattern` relative to `base_dir`, sorted by path."""
    matches = glob.glob(pattern, root_dir=base_dir, recursive=True)
    paths = [base_dir / match for match in sorted(matches)]
    return [path for path in paths if path.is_file()]


def load_schema_document(
    path: Path, *, parse_schema: SchemaParser = parse_schema_text
) -> SchemaDocument:
    """Read, parse and enrich one schema document with mined attributes."""
    text = path.read_text(encoding="utf-8")
    parsed = parse_schema(text)
    models = inject_mined_attributes(parsed.models, mine_custom_attributes(text))
    logger.info("Loaded schema %s (%d models)", path, len(models))
    return SchemaDocument(
        path=path,
        text=text,
        schema=ParsedSchema(
            models=models,
            enums=parsed.enums,
            datasources=parsed.datasources,
            generators=parsed.generators,
        ),
    )
