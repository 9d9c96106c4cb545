from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .normalize import to_structured_tree
from .schema import ApiVersion, RawDescription, TypeEntry, validate_raw_description
from .tree import ApiNode, build_node


@dataclass(frozen=True, slots=True)
class Description:
    """A read-only, canonical view of one exported instrumentation surface."""

    root: ApiNode
    types: Mapping[str, TypeEntry]
    version: ApiVersion | None = None
    app_id: str | None = None

    @property
    def is_legacy(self) -> bool:
        return self.version is None


def parse_description(payload: Description | RawDescription | Mapping[str, object]) -> Description:
    if isinstance(payload, Description):
        return payload
    raw = validate_raw_description(payload)
    if raw.is_legacy:
        raw = to_structured_tree(raw)
    return Description(
        root=build_node(raw.elements),
        types=MappingProxyType(dict(raw.types)),
        version=raw.version,
        app_id=raw.app_id,
    )
