"""Attribute mining entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MinedFieldAttributes:
    """Field attributes recovered from raw schema text."""

    column_name: str | None = None
    db_type: str | None = None
    relation_on_update: str | None = None
    shareable: bool = False
    inaccessible: bool = False
    external: bool = False
    requires: bool = False

    @property
    def is_empty(self) -> bool:
        """Return True when no attribute was recovered."""
        return not (
            self.column_name
            or self.db_type
            or self.relation_on_update
            or self.shareable
            or self.inaccessible
            or self.external
            or self.requires
        )


@dataclass(frozen=True)
class MinedModelAttributes:
    """Attributes recovered for one model block."""

    fields: Mapping[str, MinedFieldAttributes] = field(default_factory=dict)
    extra_indexes: tuple[str, ...] = ()
    is_stub: bool = False
