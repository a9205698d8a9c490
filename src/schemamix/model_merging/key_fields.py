"""Identity tuple resolution for models."""

from __future__ import annotations

from schemamix.schema_management.schema_models import Model

IdentityTuple = tuple[str, ...]


def resolve_key_fields(model: Model) -> tuple[IdentityTuple, ...]:
    """Return every field combination that uniquely identifies a model row.

    Order: the compound primary key, each compound unique constraint, then one
    singleton per field that is both required and unique.
    """
    identities: list[IdentityTuple] = []
    if model.primary_key is not None and model.primary_key.fields:
        identities.append(tuple(model.primary_key.fields))
    identities.extend(tuple(fields) for fields in model.unique_fields)
    identities.extend(
        (field.name,) for field in model.fields if field.is_required and field.is_unique
    )
    return tuple(identities)
