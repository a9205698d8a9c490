"""Schema management exports."""

from .schema_models import (
    ComposedSchema,
    DataSource,
    DataSourceUrl,
    EnumValue,
    Field,
    FieldKind,
    GeneratorConfig,
    Model,
    ParsedSchema,
    PrimaryKey,
    Relation,
    SchemaDocument,
    SchemaEnum,
    UniqueIndex,
)
from .schema_parser import SchemaParseError, parse_schema_text
from .schema_serializer import (
    render_schema,
    serialize_datasources,
    serialize_enums,
    serialize_generators,
    serialize_models,
)

__all__ = [
    "ComposedSchema",
    "DataSource",
    "DataSourceUrl",
    "EnumValue",
    "Field",
    "FieldKind",
    "GeneratorConfig",
    "Model",
    "ParsedSchema",
    "PrimaryKey",
    "Relation",
    "SchemaDocument",
    "SchemaEnum",
    "UniqueIndex",
    "SchemaParseError",
    "parse_schema_text",
    "render_schema",
    "serialize_datasources",
    "serialize_enums",
    "serialize_generators",
    "serialize_models",
]
