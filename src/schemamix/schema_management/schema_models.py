"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

RELATION_ACTIONS = ("Cascade", "NoAction", "Restrict", "SetDefault", "SetNull")


class FieldKind(str, Enum):
    """How a field type resolves within its document."""

    SCALAR = "scalar"
    OBJECT = "object"
    ENUM = "enum"


@dataclass(frozen=True)
class Relation:
    """Arguments of a `@relation(...)` attribute."""

    name: str | None = None
    fields: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    on_delete: str | None = None


@dataclass(frozen=True)
class Field:  # pylint: disable=too-many-instance-attributes
    """One field line of a model block.

    The attributes after `documentation` are never set by the structured
    parser; they are recovered from raw text by the attribute miner.
    """

    name: str
    type: str
    kind: FieldKind = FieldKind.SCALAR
    is_list: bool = False
    is_required: bool = True
    is_id: bool = False
    is_unique: bool = False
    is_updated_at: bool = False
    default: str | None = None
    relation: Relation | None = None
    documentation: str | None = None
    column_name: str | None = None
    db_type: str | None = None
    relation_on_update: str | None = None
    shareable: bool = False
    inaccessible: bool = False
    external: bool = False
    requires: bool = False


@dataclass(frozen=True)
class PrimaryKey:
    """Compound primary key declared with `@@id`."""

    fields: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class UniqueIndex:
    """Compound unique constraint declared with `@@unique`."""

    fields: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class Model:  # pylint: disable=too-many-instance-attributes
    """Model block: the unit merged across documents by name."""

    name: str
    fields: tuple[Field, ...] = ()
    db_name: str | None = None
    primary_key: PrimaryKey | None = None
    unique_fields: tuple[tuple[str, ...], ...] = ()
    unique_indexes: tuple[UniqueIndex, ...] = ()
    extra_indexes: tuple[str, ...] = ()
    is_stub: bool = False
    documentation: str | None = None

    def field_named(self, name: str) -> Field | None:
        """Return the field called `name`, if declared."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True)
class EnumValue:
    """One value of an enum block."""

    name: str
    db_name: str | None = None


@dataclass(frozen=True)
class SchemaEnum:
    """Enum block."""

    name: str
    values: tuple[EnumValue, ...]
    db_name: str | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class DataSourceUrl:
    """Connection url given either literally or through `env("VAR")`."""

    value: str | None = None
    from_env_var: str | None = None

    @property
    def is_populated(self) -> bool:
        """Return True when the url names a connection value or variable."""
        return bool(self.value or self.from_env_var)


@dataclass(frozen=True)
class DataSource:
    """Datasource block."""

    name: str
    provider: str
    url: DataSourceUrl
    properties: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class GeneratorConfig:
    """Generator block."""

    name: str
    provider: str
    properties: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ParsedSchema:
    """Structured content of one schema document."""

    models: tuple[Model, ...] = ()
    enums: tuple[SchemaEnum, ...] = ()
    datasources: tuple[DataSource, ...] = ()
    generators: tuple[GeneratorConfig, ...] = ()


@dataclass(frozen=True)
class SchemaDocument:
    """One loaded input file and its parsed content."""

    path: Path
    text: str
    schema: ParsedSchema


@dataclass(frozen=True)
class ComposedSchema:
    """Final state of one mix job, ready for serialization."""

    models: tuple[Model, ...]
    enums: tuple[SchemaEnum, ...]
    datasources: tuple[DataSource, ...]
    generators: tuple[GeneratorConfig, ...]
