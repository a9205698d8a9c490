"""Injection of mined attributes onto parsed models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace

from schemamix.schema_management.schema_models import Field, Model

from .mined_attributes import MinedFieldAttributes, MinedModelAttributes

_NO_FIELD_ATTRIBUTES = MinedFieldAttributes()
_NO_MODEL_ATTRIBUTES = MinedModelAttributes()


def inject_mined_attributes(
    models: Sequence[Model], mined: Mapping[str, MinedModelAttributes]
) -> tuple[Model, ...]:
    """Return copies of `models` carrying the attributes recovered for them."""
    return tuple(_inject_model(model, mined.get(model.name)) for model in models)


def _inject_model(model: Model, attributes: MinedModelAttributes | None) -> Model:
    attributes = attributes or _NO_MODEL_ATTRIBUTES
    return replace(
        model,
        fields=tuple(
            _inject_field(field, attributes.fields.get(field.name)) for field in model.fields
        ),
        extra_indexes=attributes.extra_indexes,
        is_stub=attributes.is_stub,
    )


def _inject_field(field: Field, attributes: MinedFieldAttributes | None) -> Field:
    bag = attributes or _NO_FIELD_ATTRIBUTES
    return replace(
        field,
        column_name=bag.column_name,
        db_type=bag.db_type,
        relation_on_update=bag.relation_on_update,
        shareable=bag.shareable,
        inaccessible=bag.inaccessible,
        external=bag.external,
        requires=bag.requires,
    )
