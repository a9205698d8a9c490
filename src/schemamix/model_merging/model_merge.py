"""Same-name model merging service."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from schemamix.schema_management.schema_models import Field, Model

from .key_fields import resolve_key_fields

logger = logging.getLogger(__name__)


def merge_models(models: Iterable[Model]) -> tuple[Model, ...]:
    """Fold models sharing a name into one model per name.

    Output keeps the order in which each name was first seen. Later
    declarations take precedence field by field (see `merge_model_pair`).
    """
    merged: dict[str, Model] = {}
    for model in models:
        existing = merged.get(model.name)
        merged[model.name] = model if existing is None else merge_model_pair(existing, model)

    for model in merged.values():
        logger.debug("Model %s identity tuples: %s", model.name, resolve_key_fields(model))
    return tuple(merged.values())


def merge_model_pair(base: Model, incoming: Model) -> Model:
    """Merge `incoming` into `base` and return the combined model.

    A field already present on `base` is replaced in place by the incoming
    field of the same name; new fields are appended. Table mapping, primary
    key and documentation keep the first value set. Index and unique
    metadata accumulate without deduplication.
    """
    return replace(
        base,
        fields=_merge_fields(base, incoming),
        db_name=base.db_name or incoming.db_name,
        primary_key=base.primary_key or incoming.primary_key,
        documentation=base.documentation or incoming.documentation,
        unique_fields=base.unique_fields + incoming.unique_fields,
        unique_indexes=base.unique_indexes + incoming.unique_indexes,
        extra_indexes=base.extra_indexes + incoming.extra_indexes,
        is_stub=base.is_stub and incoming.is_stub,
    )


def _merge_fields(base: Model, incoming: Model) -> tuple[Field, ...]:
    fields = list(base.fields)
    positions = {field.name: index for index, field in enumerate(fields)}
    for field in incoming.fields:
        position = positions.get(field.name)
        if position is None:
            positions[field.name] = len(fields)
            fields.append(field)
            continue
        if fields[position] != field:
            logger.debug("Replacing field %s.%s with later declaration", base.name, field.name)
        fields[position] = field
    return tuple(fields)
