from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Final

from .errors import DescriptionErrorCode, build_description_error
from .schema import RawDescription, validate_raw_description
from .tree import METADATA_KEY

# Legacy exports were committed with '.' between component names. This must
# stay '.' even if the live separator changes.
LEGACY_PATH_SEPARATOR: Final[str] = "."


def to_structured_tree(description: RawDescription | Mapping[str, object]) -> RawDescription:
    """Rebuild a legacy flat element map as a tree.

    Each legacy key is split into component names, intermediate namespace nodes
    are created as needed, and the complete legacy metadata map is attached to
    the leaf verbatim. Defaults are not factored out. The input is left
    untouched; the returned description is a deep copy.
    """
    raw = validate_raw_description(description)
    elements: dict[str, object] = {}
    for element_id, entry in raw.elements.items():
        if not isinstance(entry, Mapping):
            raise build_description_error(
                DescriptionErrorCode.E_DESC_ELEMENTS_INVALID,
                f"legacy element '{element_id}' must map to a metadata object",
                witness=(element_id,),
            )
        level = elements
        for component_name in element_id.split(LEGACY_PATH_SEPARATOR):
            next_level = level.get(component_name)
            if not isinstance(next_level, dict):
                next_level = {}
                level[component_name] = next_level
            level = next_level
        level[METADATA_KEY] = copy.deepcopy(dict(entry))
    return raw.model_copy(update={"elements": elements}, deep=True)
