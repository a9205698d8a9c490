"""Key field resolver tests."""

from __future__ import annotations

from schemamix.model_merging.key_fields import resolve_key_fields
from schemamix.schema_management.schema_models import Field, Model, PrimaryKey


def test_identity_tuples_follow_primary_key_then_unique_then_singletons() -> None:
    model = Model(
        name="Membership",
        fields=(
            Field(name="userId", type="String"),
            Field(name="groupId", type="String"),
            Field(name="slug", type="String", is_unique=True),
            Field(name="nickname", type="String", is_unique=True, is_required=False),
            Field(name="code", type="String", is_unique=True),
        ),
        primary_key=PrimaryKey(fields=("userId", "groupId")),
        unique_fields=(("groupId", "slug"), ("userId", "code")),
    )

    assert resolve_key_fields(model) == (
        ("userId", "groupId"),
        ("groupId", "slug"),
        ("userId", "code"),
        ("slug",),
        ("code",),
    )


def test_model_without_declared_keys_has_no_identity_tuples() -> None:
    model = Model(name="Log", fields=(Field(name="message", type="String"),))

    assert resolve_key_fields(model) == ()


def test_field_level_id_is_not_a_required_unique_singleton() -> None:
    model = Model(name="User", fields=(Field(name="id", type="String", is_id=True),))

    assert resolve_key_fields(model) == ()
