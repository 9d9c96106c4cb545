from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Final

from apicompat.model.description import Description
from apicompat.model.errors import DescriptionErrorCode, build_description_error
from apicompat.model.schema import TypeEntry
from apicompat.model.tree import ApiNode, ElementNode

DEFAULT_TYPE_NAME: Final[str] = "ObjectIO"
TYPE_NAME_KEY: Final[str] = "typeName"


def resolve_metadata(node: ApiNode | None, description: Description) -> dict[str, object]:
    """Return the effective metadata of ``node`` within ``description``.

    Versioned descriptions are sparse: the element's own metadata is layered
    over the defaults of its type and all of that type's ancestors. Legacy
    descriptions already carry every value on the element and are returned
    unchanged. A node without a metadata block contributes an empty map.
    """
    element_metadata: Mapping[str, object] = (
        node.metadata if isinstance(node, ElementNode) else {}
    )
    if description.is_legacy:
        return copy.deepcopy(dict(element_metadata))

    type_name = element_metadata.get(TYPE_NAME_KEY)
    if not isinstance(type_name, str) or not type_name:
        type_name = DEFAULT_TYPE_NAME
    resolved = resolve_defaults(type_name, description)
    _merge_into(resolved, element_metadata)
    return resolved


def resolve_defaults(type_name: str, description: Description) -> dict[str, object]:
    """Merge the defaults of ``type_name``'s supertype chain, most specific last.

    The result is a fresh copy the caller may mutate. A type without defaults
    contributes nothing. A type missing from the registry means the registry is
    malformed; that is asserted, and with assertions disabled the chain simply
    stops at the missing link.
    """
    resolved: dict[str, object] = {}
    for entry in reversed(_supertype_chain(type_name, description)):
        if entry.defaults:
            _merge_into(resolved, entry.defaults)
    return resolved


def _supertype_chain(type_name: str, description: Description) -> list[TypeEntry]:
    chain: list[TypeEntry] = []
    visited: list[str] = []
    current: str | None = type_name
    while current is not None:
        if current in visited:
            cycle = tuple(visited[visited.index(current) :])
            raise build_description_error(
                DescriptionErrorCode.E_TYPE_HIERARCHY_CYCLE,
                f"supertype cycle detected: {' -> '.join(cycle + (current,))}",
                witness=cycle,
            )
        entry = description.types.get(current)
        assert entry is not None, f"entry missing: {current}"
        if entry is None:
            break
        visited.append(current)
        chain.append(entry)
        current = entry.supertype
    return chain


def _merge_into(target: dict[str, object], source: Mapping[str, object]) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        else:
            target[key] = copy.deepcopy(dict(value) if isinstance(value, Mapping) else value)
