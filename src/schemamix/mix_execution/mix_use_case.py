"""Mix execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from schemamix.configuration import ConfigurationError, load_configuration
from schemamix.configuration.runtime_settings import MergeJob, MixerConfiguration
from schemamix.schema_management.schema_models import ComposedSchema, Model
from schemamix.schema_management.schema_parser import parse_schema_text
from schemamix.schema_management.schema_serializer import render_schema

from .document_loading import SchemaParser, load_job_documents
from .mix_contracts import MixOutcome, MixRequest
from .schema_composition import compose_documents, with_generated_banner

logger = logging.getLogger(__name__)

SchemaRenderer = Callable[[ComposedSchema], str]


class MixExecutionError(Exception):
    """Raised when the mixers cannot be started."""


def execute_mix_request(
    request: MixRequest,
    *,
    parse_schema: SchemaParser | None = None,
    render: SchemaRenderer | None = None,
) -> tuple[MixOutcome, ...]:
    """Load the configuration named by `request` and execute every mixer."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        raise MixExecutionError(str(exc)) from exc
    base_dir = (
        Path(request.base_dir).resolve()
        if request.base_dir
        else configuration.path.resolve().parent
    )
    return execute_mix_jobs(
        configuration,
        base_dir=base_dir,
        parse_schema=parse_schema or parse_schema_text,
        render=render or render_schema,
    )


def execute_mix_jobs(
    configuration: MixerConfiguration,
    *,
    base_dir: Path,
    parse_schema: SchemaParser = parse_schema_text,
    render: SchemaRenderer = render_schema,
) -> tuple[MixOutcome, ...]:
    """Execute each mixer independently; one failing mixer never stops the others."""
    return tuple(
        _execute_job(job, base_dir=base_dir, parse_schema=parse_schema, render=render)
        for job in configuration.jobs
    )


def _execute_job(
    job: MergeJob,
    *,
    base_dir: Path,
    parse_schema: SchemaParser,
    render: SchemaRenderer,
) -> MixOutcome:
    output_path = _resolve_path(base_dir, job.output)
    try:
        return _compose_and_write(
            job, output_path, base_dir=base_dir, parse_schema=parse_schema, render=render
        )
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Mixer for '%s' failed: %s", output_path, exc)
        return MixOutcome(
            output_path=output_path,
            documents_loaded=0,
            models_written=0,
            unmatched_patterns=(),
            failed_documents=(),
            error=str(exc),
        )


def _compose_and_write(
    job: MergeJob,
    output_path: Path,
    *,
    base_dir: Path,
    parse_schema: SchemaParser,
    render: SchemaRenderer,
) -> MixOutcome:
    loaded = load_job_documents(job, base_dir=base_dir, parse_schema=parse_schema)
    composed = compose_documents(loaded.documents)
    _warn_about_stub_models(composed.models)
    rendered = with_generated_banner(render(composed))

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write composed schema to '%s': %s", output_path, exc)
        return MixOutcome(
            output_path=output_path,
            documents_loaded=len(loaded.documents),
            models_written=0,
            unmatched_patterns=loaded.unmatched_patterns,
            failed_documents=loaded.failed_documents,
            error=str(exc),
        )

    logger.info(
        "Wrote %s from %d schema(s) with %d model(s)",
        output_path,
        len(loaded.documents),
        len(composed.models),
    )
    return MixOutcome(
        output_path=output_path,
        documents_loaded=len(loaded.documents),
        models_written=len(composed.models),
        unmatched_patterns=loaded.unmatched_patterns,
        failed_documents=loaded.failed_documents,
    )


def _warn_about_stub_models(models: Sequence[Model]) -> None:
    for model in models:
        if model.is_stub:
            logger.warning(
                "Model %s is only declared as a stub; no schema provides its full definition.",
                model.name,
            )


def _resolve_path(base_dir: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return base_dir / candidate
    return candidate
