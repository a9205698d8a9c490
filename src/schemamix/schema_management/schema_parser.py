"""Structured schema parsing service."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .schema_models import (
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
    SchemaEnum,
    UniqueIndex,
)

SCALAR_TYPES = frozenset(
    {"String", "Boolean", "Int", "BigInt", "Float", "Decimal", "DateTime", "Json", "Bytes"}
)

_BLOCK_HEADER = re.compile(r"^(?P<keyword>[A-Za-z]+)\s+(?P<name>[A-Za-z_]\w*)\s*\{$")
_FIELD_LINE = re.compile(
    r"^(?P<name>[A-Za-z_]\w*)\s+"
    r"(?P<type>Unsupported\(\"[^\"]*\"\)|[A-Za-z_]\w*)"
    r"(?P<list>\[\])?(?P<optional>\?)?(?P<rest>.*)$"
)
_ENUM_VALUE_LINE = re.compile(r"^(?P<name>[A-Za-z_]\w*)(?P<rest>.*)$")
_PROPERTY_LINE = re.compile(r"^(?P<key>[A-Za-z_]\w*)\s*=\s*(?P<value>.+)$")
_ENV_CALL = re.compile(r"^env\(\s*\"(?P<var>[^\"]+)\"\s*\)$")
_ATTRIBUTE_NAME = re.compile(r"@{1,2}[A-Za-z_][\w.]*")
_SUPPORTED_BLOCKS = ("model", "enum", "datasource", "generator")


class SchemaParseError(Exception):
    """Raised when schema text cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"{message}{location}")


@dataclass(frozen=True)
class _Attribute:
    name: str
    arguments: str | None
    line_number: int


@dataclass
class _PendingBlock:
    keyword: str
    name: str
    line_number: int
    documentation: str | None
    body: list[tuple[int, str]] = field(default_factory=list)


def parse_schema_text(text: str) -> ParsedSchema:
    """Parse schema text into models, enums, datasources and generators."""
    blocks = _split_blocks(text)
    model_names = {block.name for block in blocks if block.keyword == "model"}
    enum_names = {block.name for block in blocks if block.keyword == "enum"}

    models: list[Model] = []
    enums: list[SchemaEnum] = []
    datasources: list[DataSource] = []
    generators: list[GeneratorConfig] = []
    for block in blocks:
        if block.keyword == "model":
            models.append(_parse_model(block, model_names=model_names, enum_names=enum_names))
        elif block.keyword == "enum":
            enums.append(_parse_enum(block))
        elif block.keyword == "datasource":
            datasources.append(_parse_datasource(block))
        else:
            generators.append(_parse_generator(block))

    _ensure_unique_names([block for block in blocks if block.keyword in ("model", "enum")])
    return ParsedSchema(
        models=tuple(models),
        enums=tuple(enums),
        datasources=tuple(datasources),
        generators=tuple(generators),
    )


def _split_blocks(text: str) -> list[_PendingBlock]:
    blocks: list[_PendingBlock] = []
    current: _PendingBlock | None = None
    documentation: list[str] = []

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        stripped = raw_line.strip()
        if current is not None:
            if _strip_comment(stripped) == "}":
                blocks.append(current)
                current = None
            else:
                current.body.append((line_number, stripped))
            continue

        if stripped.startswith("///"):
            documentation.append(stripped[3:].strip())
            continue
        content = _strip_comment(stripped)
        if not content:
            if not stripped:
                documentation = []
            continue
        header = _BLOCK_HEADER.match(content)
        if header is None:
            raise SchemaParseError(f"Unexpected content outside of a block: {content}", line_number)
        keyword = header.group("keyword")
        if keyword not in _SUPPORTED_BLOCKS:
            raise SchemaParseError(f"Unsupported block type '{keyword}'", line_number)
        current = _PendingBlock(
            keyword=keyword,
            name=header.group("name"),
            line_number=line_number,
            documentation="\n".join(documentation) or None,
        )
        documentation = []

    if current is not None:
        raise SchemaParseError(
            f"Block '{current.keyword} {current.name}' is never closed", current.line_number
        )
    return blocks


def _ensure_unique_names(blocks: Sequence[_PendingBlock]) -> None:
    seen: set[str] = set()
    for block in blocks:
        if block.name in seen:
            raise SchemaParseError(
                f"The {block.keyword} '{block.name}' cannot be defined more than once",
                block.line_number,
            )
        seen.add(block.name)


def _parse_model(
    block: _PendingBlock, *, model_names: set[str], enum_names: set[str]
) -> Model:
    fields: list[Field] = []
    db_name: str | None = None
    primary_key: PrimaryKey | None = None
    unique_indexes: list[UniqueIndex] = []
    documentation: list[str] = []

    for line_number, line in block.body:
        if line.startswith("///"):
            documentation.append(line[3:].strip())
            continue
        content = _strip_comment(line)
        if not content:
            continue
        if content.startswith("@@"):
            for attribute in _parse_attributes(content, line_number):
                if attribute.name == "@@map":
                    db_name = _unquote(_positional(attribute))
                elif attribute.name == "@@id":
                    primary_key = PrimaryKey(
                        fields=_field_list(attribute), name=_named(attribute, "name")
                    )
                elif attribute.name == "@@unique":
                    unique_indexes.append(
                        UniqueIndex(fields=_field_list(attribute), name=_named(attribute, "name"))
                    )
            documentation = []
            continue

        parsed = _parse_field(
            content,
            line_number,
            documentation="\n".join(documentation) or None,
            model_names=model_names,
            enum_names=enum_names,
        )
        if any(existing.name == parsed.name for existing in fields):
            raise SchemaParseError(
                f"Field '{parsed.name}' is already defined on model '{block.name}'", line_number
            )
        fields.append(parsed)
        documentation = []

    return Model(
        name=block.name,
        fields=tuple(fields),
        db_name=db_name,
        primary_key=primary_key,
        unique_fields=tuple(index.fields for index in unique_indexes),
        unique_indexes=tuple(unique_indexes),
        documentation=block.documentation,
    )


def _parse_field(
    content: str,
    line_number: int,
    *,
    documentation: str | None,
    model_names: set[str],
    enum_names: set[str],
) -> Field:
    match = _FIELD_LINE.match(content)
    if match is None:
        raise SchemaParseError(f"Invalid field declaration: {content}", line_number)

    type_name = match.group("type")
    if type_name in model_names:
        kind = FieldKind.OBJECT
    elif type_name in enum_names:
        kind = FieldKind.ENUM
    elif type_name in SCALAR_TYPES or type_name.startswith("Unsupported("):
        kind = FieldKind.SCALAR
    else:
        raise SchemaParseError(
            f"Type '{type_name}' is neither a built-in type, nor refers to another model or enum",
            line_number,
        )

    is_id = is_unique = is_updated_at = False
    default: str | None = None
    relation: Relation | None = None
    for attribute in _parse_attributes(match.group("rest"), line_number):
        if attribute.name == "@id":
            is_id = True
        elif attribute.name == "@unique":
            is_unique = True
        elif attribute.name == "@updatedAt":
            is_updated_at = True
        elif attribute.name == "@default":
            default = attribute.arguments
        elif attribute.name == "@relation":
            relation = _parse_relation(attribute)

    return Field(
        name=match.group("name"),
        type=type_name,
        kind=kind,
        is_list=match.group("list") is not None,
        is_required=match.group("optional") is None and match.group("list") is None,
        is_id=is_id,
        is_unique=is_unique,
        is_updated_at=is_updated_at,
        default=default,
        relation=relation,
        documentation=documentation,
    )


def _parse_relation(attribute: _Attribute) -> Relation:
    name = _named(attribute, "name")
    arguments = _split_arguments(attribute.arguments or "", attribute.line_number)
    if arguments and ":" not in arguments[0]:
        name = _unquote(arguments[0])
    return Relation(
        name=name,
        fields=_list_argument(_named(attribute, "fields"), attribute.line_number),
        references=_list_argument(_named(attribute, "references"), attribute.line_number),
        on_delete=_named(attribute, "onDelete"),
    )


def _parse_enum(block: _PendingBlock) -> SchemaEnum:
    values: list[EnumValue] = []
    db_name: str | None = None
    for line_number, line in block.body:
        content = _strip_comment(line)
        if not content:
            continue
        if content.startswith("@@"):
            for attribute in _parse_attributes(content, line_number):
                if attribute.name == "@@map":
                    db_name = _unquote(_positional(attribute))
            continue
        match = _ENUM_VALUE_LINE.match(content)
        if match is None:
            raise SchemaParseError(f"Invalid enum value: {content}", line_number)
        value_db_name: str | None = None
        for attribute in _parse_attributes(match.group("rest"), line_number):
            if attribute.name == "@map":
                value_db_name = _unquote(_positional(attribute))
        values.append(EnumValue(name=match.group("name"), db_name=value_db_name))
    return SchemaEnum(
        name=block.name,
        values=tuple(values),
        db_name=db_name,
        documentation=block.documentation,
    )


def _parse_datasource(block: _PendingBlock) -> DataSource:
    properties = _parse_properties(block)
    provider = properties.pop("provider", None)
    if provider is None:
        raise SchemaParseError(
            f"Datasource '{block.name}' is missing a provider", block.line_number
        )
    raw_url = properties.pop("url", None)
    url = DataSourceUrl()
    if raw_url is not None:
        env_call = _ENV_CALL.match(raw_url)
        url = (
            DataSourceUrl(from_env_var=env_call.group("var"))
            if env_call
            else DataSourceUrl(value=_unquote(raw_url))
        )
    return DataSource(
        name=block.name,
        provider=_unquote(provider),
        url=url,
        properties=tuple(properties.items()),
    )


def _parse_generator(block: _PendingBlock) -> GeneratorConfig:
    properties = _parse_properties(block)
    provider = properties.pop("provider", None)
    if provider is None:
        raise SchemaParseError(f"Generator '{block.name}' is missing a provider", block.line_number)
    return GeneratorConfig(
        name=block.name,
        provider=_unquote(provider),
        properties=tuple(properties.items()),
    )


def _parse_properties(block: _PendingBlock) -> dict[str, str]:
    properties: dict[str, str] = {}
    for line_number, line in block.body:
        content = _strip_comment(line)
        if not content:
            continue
        match = _PROPERTY_LINE.match(content)
        if match is None:
            raise SchemaParseError(f"Invalid {block.keyword} property: {content}", line_number)
        properties[match.group("key")] = match.group("value").strip()
    return properties


def _parse_attributes(text: str, line_number: int) -> list[_Attribute]:
    attributes: list[_Attribute] = []
    position = 0
    while position < len(text):
        if text[position].isspace():
            position += 1
            continue
        match = _ATTRIBUTE_NAME.match(text, position)
        if match is None:
            raise SchemaParseError(f"Unexpected token: {text[position:].strip()}", line_number)
        position = match.end()
        arguments: str | None = None
        if position < len(text) and text[position] == "(":
            closing = _find_closing(text, position, line_number)
            arguments = text[position + 1 : closing].strip()
            position = closing + 1
        attributes.append(_Attribute(match.group(0), arguments, line_number))
    return attributes


def _find_closing(text: str, opening: int, line_number: int) -> int:
    depth = 0
    in_string = False
    index = opening
    while index < len(text):
        char = text[index]
        if in_string:
            if char == "\\":
                index += 1
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    raise SchemaParseError("Unbalanced parentheses in attribute arguments", line_number)


def _split_arguments(text: str, line_number: int | None) -> list[str]:
    arguments: list[str] = []
    depth = 0
    in_string = False
    current: list[str] = []
    for char in text:
        if in_string:
            in_string = char != '"' or (bool(current) and current[-1] == "\\")
        elif char == '"':
            in_string = True
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if depth != 0 or in_string:
        raise SchemaParseError("Unbalanced attribute arguments", line_number)
    tail = "".join(current).strip()
    if tail:
        arguments.append(tail)
    return arguments


def _positional(attribute: _Attribute) -> str:
    arguments = _split_arguments(attribute.arguments or "", attribute.line_number)
    if not arguments:
        raise SchemaParseError(f"{attribute.name} requires an argument", attribute.line_number)
    first = arguments[0]
    if first.startswith(("name:", "fields:")):
        return first.split(":", 1)[1].strip()
    return first


def _named(attribute: _Attribute, key: str) -> str | None:
    for argument in _split_arguments(attribute.arguments or "", attribute.line_number):
        argument_key, separator, value = argument.partition(":")
        if separator and argument_key.strip() == key:
            return _unquote(value.strip())
    return None


def _field_list(attribute: _Attribute) -> tuple[str, ...]:
    explicit = _named(attribute, "fields")
    if explicit is not None:
        return _list_argument(explicit, attribute.line_number)
    return _list_argument(_positional(attribute), attribute.line_number)


def _list_argument(value: str | None, line_number: int | None = None) -> tuple[str, ...]:
    if value is None:
        return ()
    inner = value.strip()
    if inner.startswith("[") and inner.endswith("]"):
        inner = inner[1:-1]
    # sort/length modifiers such as `title(sort: Desc)` keep only the field name
    return tuple(
        item.split("(", 1)[0].strip() for item in _split_arguments(inner, line_number)
    )


def _strip_comment(line: str) -> str:
    in_string = False
    index = 0
    while index < len(line):
        char = line[index]
        if in_string:
            if char == "\\":
                index += 1
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif line.startswith("//", index):
            return line[:index].rstrip()
        index += 1
    return line.strip()


def _unquote(value: str) -> str:
    stripped = value.strip()
    if len(stripped) >= 2 and stripped.startswith('"') and stripped.endswith('"'):
        return stripped[1:-1].replace('\\"', '"')
    return stripped
