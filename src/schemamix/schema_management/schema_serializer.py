"""Schema rendering service."""

from __future__ import annotations

from collections.abc import Sequence

from .schema_models import (
    ComposedSchema,
    DataSource,
    Field,
    FieldKind,
    GeneratorConfig,
    Model,
    SchemaEnum,
)

_INDENT = "  "
_FEDERATION_FLAGS = ("shareable", "inaccessible", "external", "requires")


def render_schema(schema: ComposedSchema) -> str:
    """Render every non-empty section of a composed schema."""
    sections = [
        serialize_datasources(schema.datasources),
        serialize_generators(schema.generators),
        serialize_models(schema.models),
        serialize_enums(schema.enums),
    ]
    return "\n".join(section for section in sections if section)


def serialize_datasources(datasources: Sequence[DataSource]) -> str:
    """Render datasource blocks."""
    blocks = []
    for datasource in datasources:
        lines = [f'provider = "{datasource.provider}"']
        if datasource.url.from_env_var:
            lines.append(f'url = env("{datasource.url.from_env_var}")')
        elif datasource.url.value:
            lines.append(f'url = "{datasource.url.value}"')
        lines.extend(f"{key} = {value}" for key, value in datasource.properties)
        blocks.append(_render_block("datasource", datasource.name, lines))
    return "\n".join(blocks)


def serialize_generators(generators: Sequence[GeneratorConfig]) -> str:
    """Render generator blocks."""
    blocks = []
    for generator in generators:
        lines = [f'provider = "{generator.provider}"']
        lines.extend(f"{key} = {value}" for key, value in generator.properties)
        blocks.append(_render_block("generator", generator.name, lines))
    return "\n".join(blocks)


def serialize_models(models: Sequence[Model]) -> str:
    """Render model blocks including attributes recovered by the miner."""
    blocks = []
    for model in models:
        lines: list[str] = []
        for field in model.fields:
            lines.extend(_documentation_lines(field.documentation))
            lines.append(_render_field(field))
        block_attributes = _render_model_attributes(model)
        if block_attributes:
            lines.append("")
            lines.extend(block_attributes)
        blocks.append(_render_block("model", model.name, lines, model.documentation))
    return "\n".join(blocks)


def serialize_enums(enums: Sequence[SchemaEnum]) -> str:
    """Render enum blocks."""
    blocks = []
    for enum in enums:
        lines = [
            f'{value.name} @map("{value.db_name}")' if value.db_name else value.name
            for value in enum.values
        ]
        if enum.db_name:
            lines.append(f'@@map("{enum.db_name}")')
        blocks.append(_render_block("enum", enum.name, lines, enum.documentation))
    return "\n".join(blocks)


def _render_block(
    keyword: str, name: str, lines: Sequence[str], documentation: str | None = None
) -> str:
    body = [f"{_INDENT}{line}" if line else "" for line in lines]
    header = _documentation_lines(documentation)
    return "\n".join([*header, f"{keyword} {name} {{", *body, "}", ""])


def _documentation_lines(documentation: str | None) -> list[str]:
    if not documentation:
        return []
    return [f"/// {line}".rstrip() for line in documentation.splitlines()]


def _render_field(field: Field) -> str:
    if field.is_list:
        type_text = f"{field.type}[]"
    elif not field.is_required:
        type_text = f"{field.type}?"
    else:
        type_text = field.type

    attributes = []
    if field.is_id:
        attributes.append("@id")
    if field.is_unique:
        attributes.append("@unique")
    if field.default is not None:
        attributes.append(f"@default({field.default})")
    if field.is_updated_at:
        attributes.append("@updatedAt")
    if field.column_name:
        attributes.append(f'@map("{field.column_name}")')
    if field.db_type:
        attributes.append(f"@db.{field.db_type}")
    relation = _render_relation(field)
    if relation:
        attributes.append(relation)

    directives = [f"//@{flag}" for flag in _FEDERATION_FLAGS if getattr(field, flag)]
    return " ".join([field.name, type_text, *attributes, *directives])


def _render_relation(field: Field) -> str | None:
    relation = field.relation
    if relation is None and not field.relation_on_update:
        return None
    if field.kind is not FieldKind.OBJECT and relation is None:
        return None

    arguments = []
    if relation is not None:
        if relation.name:
            arguments.append(f'"{relation.name}"')
        if relation.fields:
            arguments.append(f"fields: [{', '.join(relation.fields)}]")
        if relation.references:
            arguments.append(f"references: [{', '.join(relation.references)}]")
        if relation.on_delete:
            arguments.append(f"onDelete: {relation.on_delete}")
    if field.relation_on_update:
        arguments.append(f"onUpdate: {field.relation_on_update}")
    return f"@relation({', '.join(arguments)})"


def _render_model_attributes(model: Model) -> list[str]:
    lines = []
    if model.primary_key is not None:
        lines.append(_render_compound("@@id", model.primary_key.fields, model.primary_key.name))
    lines.extend(
        _render_compound("@@unique", index.fields, index.name) for index in model.unique_indexes
    )
    lines.extend(model.extra_indexes)
    if model.db_name:
        lines.append(f'@@map("{model.db_name}")')
    if model.is_stub:
        lines.append("//@stub")
    return lines


def _render_compound(attribute: str, fields: Sequence[str], name: str | None) -> str:
    arguments = f"[{', '.join(fields)}]"
    if name:
        arguments += f', name: "{name}"'
    return f"{attribute}({arguments})"
