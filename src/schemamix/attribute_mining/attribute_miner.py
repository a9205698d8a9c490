"""Raw-text attribute mining service.

The structured parser drops `@map`, `@db.*`, `onUpdate`, `@@index` and comment
directives. This module recovers them line by line from the raw document so
they can be injected back onto parsed models.
"""

from __future__ import annotations

import re

from schemamix.schema_management.schema_models import RELATION_ACTIONS

from .mined_attributes import MinedFieldAttributes, MinedModelAttributes

_BLOCK_DELIMITER = "\n}"
_MODEL_HEADER = re.compile(r"^model\s+(?P<name>\S+)\s*\{")
_COLUMN_MAPPING = re.compile(r'(?<!@)@map\(\s*"(?P<name>[^"]*)"\s*\)')
_NATIVE_TYPE = re.compile(r"@db\.(?P<type>\w+(?:\([^)]*\))?)")
_RELATION_ON_UPDATE = re.compile(
    rf"onUpdate:\s*(?P<action>{'|'.join(RELATION_ACTIONS)})\b"
)
_FEDERATION_DIRECTIVE = re.compile(
    r"//\s*@(?P<directive>shareable|inaccessible|external|requires)\b", re.IGNORECASE
)
_STUB_DIRECTIVE = re.compile(r"^//\s*@stub\b", re.IGNORECASE)
_EXTRA_INDEX = re.compile(r"(?P<index>@@index\(.*\))")


def mine_custom_attributes(text: str) -> dict[str, MinedModelAttributes]:
    """Return attributes recovered from every model block, keyed by model name."""
    mined: dict[str, MinedModelAttributes] = {}
    for chunk in text.split(_BLOCK_DELIMITER):
        lines = [line.strip() for line in chunk.splitlines() if line.strip()]
        model_name = _find_model_name(lines)
        if model_name is None:
            continue
        mined[model_name] = _mine_block(lines)
    return mined


def _find_model_name(lines: list[str]) -> str | None:
    for line in lines:
        if line.startswith("//"):
            continue
        match = _MODEL_HEADER.match(line)
        if match:
            return match.group("name")
    return None


def _mine_block(lines: list[str]) -> MinedModelAttributes:
    fields: dict[str, MinedFieldAttributes] = {}
    extra_indexes: list[str] = []
    is_stub = False
    for line in lines:
        if line.startswith("//"):
            is_stub = is_stub or bool(_STUB_DIRECTIVE.match(line))
            continue
        index = _EXTRA_INDEX.search(line)
        if index:
            extra_indexes.append(index.group("index"))
            continue
        attributes = _mine_line(line)
        if not attributes.is_empty:
            fields[line.split()[0]] = attributes
    return MinedModelAttributes(fields=fields, extra_indexes=tuple(extra_indexes), is_stub=is_stub)


def _mine_line(line: str) -> MinedFieldAttributes:
    column_name = _COLUMN_MAPPING.search(line)
    native_type = _NATIVE_TYPE.search(line)
    on_update = _RELATION_ON_UPDATE.search(line)
    directives = {
        match.group("directive").lower() for match in _FEDERATION_DIRECTIVE.finditer(line)
    }
    return MinedFieldAttributes(
        column_name=column_name.group("name") if column_name else None,
        db_type=native_type.group("type") if native_type else None,
        relation_on_update=on_update.group("action") if on_update else None,
        shareable="shareable" in directives,
        inaccessible="inaccessible" in directives,
        external="external" in directives,
        requires="requires" in directives,
    )
