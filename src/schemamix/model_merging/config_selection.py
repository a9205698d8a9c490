"""Datasource and generator precedence rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from schemamix.schema_management.schema_models import (
    DataSource,
    GeneratorConfig,
    ParsedSchema,
)

_T = TypeVar("_T")


def select_last_non_empty(
    candidates: Iterable[Sequence[_T]],
    *,
    accept: Callable[[Sequence[_T]], bool] = bool,
) -> tuple[_T, ...]:
    """Return the last candidate list that is non-empty and passes `accept`."""
    selected: tuple[_T, ...] = ()
    for candidate in candidates:
        if candidate and accept(candidate):
            selected = tuple(candidate)
    return selected


def select_datasources(schemas: Iterable[ParsedSchema]) -> tuple[DataSource, ...]:
    """Select the datasources of the last schema declaring a populated url."""
    return select_last_non_empty(
        (schema.datasources for schema in schemas),
        accept=_has_populated_url,
    )


def select_generators(schemas: Iterable[ParsedSchema]) -> tuple[GeneratorConfig, ...]:
    """Select the generators of the last schema declaring any."""
    return select_last_non_empty(schema.generators for schema in schemas)


def _has_populated_url(datasources: Sequence[DataSource]) -> bool:
    return any(datasource.url.is_populated for datasource in datasources)
