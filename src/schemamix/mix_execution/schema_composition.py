"""Composition of loaded documents into one schema."""

from __future__ import annotations

from collections.abc import Sequence

from schemamix.model_merging import merge_models, select_datasources, select_generators
from schemamix.schema_management.schema_models import ComposedSchema, SchemaDocument

GENERATED_BANNER = "// *** GENERATED BY SCHEMAMIX :: DO NOT EDIT ***"


def compose_documents(documents: Sequence[SchemaDocument]) -> ComposedSchema:
    """Merge models by name and select one datasource and generator set."""
    schemas = [document.schema for document in documents]
    return ComposedSchema(
        models=merge_models(model for schema in schemas for model in schema.models),
        enums=tuple(enum for schema in schemas for enum in schema.enums),
        datasources=select_datasources(schemas),
        generators=select_generators(schemas),
    )


def with_generated_banner(rendered: str) -> str:
    """Prefix rendered schema text with the generated-file banner."""
    return "\n".join(part for part in (GENERATED_BANNER, rendered) if part)
