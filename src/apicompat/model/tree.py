from __future__ import annotations

import copy
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

METADATA_KEY: Final[str] = "_metadata"
DATA_KEY: Final[str] = "_data"
INITIAL_STATE_KEY: Final[str] = "initialState"
RESERVED_KEYS: frozenset[str] = frozenset((METADATA_KEY, DATA_KEY))
PATH_SEPARATOR: Final[str] = "."

# Stands for a key that is absent, as opposed to one explicitly set to null.
MISSING: Final[object] = object()

_NO_CHILDREN: Mapping[str, ApiNode] = MappingProxyType({})


def is_child_key(key: str) -> bool:
    return key not in RESERVED_KEYS


def is_truthy(value: object) -> bool:
    if value is None or value is MISSING or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, float):
        return value != 0 and not math.isnan(value)
    if isinstance(value, int):
        return value != 0
    return True


def join_path(trail: tuple[str, ...]) -> str:
    return PATH_SEPARATOR.join(trail)


def child_path(path: str, component_name: str) -> str:
    if not path:
        return component_name
    return f"{path}{PATH_SEPARATOR}{component_name}"


@dataclass(frozen=True, slots=True)
class NamespaceNode:
    children: Mapping[str, ApiNode] = field(default=_NO_CHILDREN)


@dataclass(frozen=True, slots=True)
class ElementNode:
    metadata: Mapping[str, object]
    children: Mapping[str, ApiNode] = field(default=_NO_CHILDREN)
    initial_state: object = MISSING

    @property
    def has_initial_state(self) -> bool:
        return is_truthy(self.initial_state)


type ApiNode = NamespaceNode | ElementNode


def build_node(raw: object) -> ApiNode:
    """Decide once whether a raw tree node is an instrumented element or a namespace.

    Anything that is not a mapping, and any mapping whose metadata block is not
    itself a mapping, becomes a namespace.
    """
    if not isinstance(raw, Mapping):
        return NamespaceNode()

    children: dict[str, ApiNode] = {}
    for key, value in raw.items():
        if is_child_key(key):
            children[key] = build_node(value)
    frozen_children = MappingProxyType(children) if children else _NO_CHILDREN

    metadata = raw.get(METADATA_KEY)
    if not isinstance(metadata, Mapping):
        return NamespaceNode(children=frozen_children)
    return ElementNode(
        metadata=MappingProxyType(copy.deepcopy(dict(metadata))),
        children=frozen_children,
        initial_state=_initial_state(raw.get(DATA_KEY)),
    )


def _initial_state(data: object) -> object:
    if not isinstance(data, Mapping) or INITIAL_STATE_KEY not in data:
        return MISSING
    return copy.deepcopy(data[INITIAL_STATE_KEY])


def iter_elements(
    node: ApiNode, trail: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], ElementNode]]:
    if isinstance(node, ElementNode):
        yield (trail, node)
    for name, child in node.children.items():
        yield from iter_elements(child, trail + (name,))
