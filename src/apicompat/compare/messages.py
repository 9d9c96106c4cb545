"""Problem message templates.

Messages are compared verbatim against historical reports, so values are
rendered the way those reports rendered them: ``true``/``false``, ``null``,
``undefined`` for an absent key, integral numbers without a fraction and lists
joined with commas.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Final

from apicompat.model.tree import MISSING, child_path

ADVISORY_SUFFIX: Final[str] = (
    "This may or may not be a breaking change, but we are reporting it just in case."
)


def render_value(value: object) -> str:
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, list | tuple):
        return ",".join(
            "" if item is None or item is MISSING else render_value(item) for item in value
        )
    return str(value)


def _render_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def render_json(value: object) -> str:
    if value is MISSING:
        return "undefined"
    return json.dumps(
        _json_compatible(value), separators=(",", ":"), ensure_ascii=False, default=str
    )


def _json_compatible(value: object) -> object:
    # Integral floats lose their fraction and non-finite floats become null.
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, Mapping):
        return {key: _json_compatible(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_json_compatible(item) for item in value]
    return value


def _joined(values: Sequence[str]) -> str:
    return ", ".join(values)


def metadata_changed(path: str, key: str, reference_value: object, proposed_value: object) -> str:
    return (
        f"{child_path(path, key)} changed from "
        f'"{render_value(reference_value)}" to "{render_value(proposed_value)}"'
    )


def initial_state_missing(path: str) -> str:
    return f"{child_path(path, '_data.initialState')} is missing"


def initial_state_differs(path: str, reference_state: object, proposed_state: object) -> str:
    return (
        f"{child_path(path, '_data.initialState')} differs. \n"
        f"Expected:\n{render_json(reference_state)}\n"
        f" actual:\n{render_json(proposed_state)}\n"
    )


def element_missing(path: str) -> str:
    return f"Element missing: {path}"


def element_added(path: str) -> str:
    return f"New element not in reference: {path}"


def type_missing(type_name: str) -> str:
    return f"Type missing: {type_name}"


def method_missing(type_name: str, method_name: str) -> str:
    return f"Method missing, type={type_name}, method={method_name}"


def method_parameter_types_changed(
    type_name: str,
    method_name: str,
    reference_params: Sequence[str],
    proposed_params: Sequence[str],
) -> str:
    return (
        f"{type_name}.{method_name} has different parameter types: "
        f"[{_joined(reference_params)}] => [{_joined(proposed_params)}]"
    )


def method_return_type_changed(
    type_name: str, method_name: str, reference_type: object, proposed_type: object
) -> str:
    return (
        f"{type_name}.{method_name} has a different return type "
        f"{render_value(reference_type)} => {render_value(proposed_type)}"
    )


def event_missing(type_name: str, event: str) -> str:
    return f"{type_name} is missing event: {event}"


def supertype_changed(type_name: str, reference_supertype: object, proposed_supertype: object) -> str:
    return (
        f'{type_name} supertype changed from "{render_value(reference_supertype)}" '
        f'to "{render_value(proposed_supertype)}". {ADVISORY_SUFFIX}'
    )


def type_params_changed(
    type_name: str, reference_params: Sequence[str], proposed_params: Sequence[str]
) -> str:
    return (
        f"{type_name} parameter types changed from [{_joined(reference_params)}] "
        f"to [{_joined(proposed_params)}]. {ADVISORY_SUFFIX}"
    )


def type_default_changed(
    type_name: str, key: str, reference_value: object, proposed_value: object
) -> str:
    return (
        f'{type_name} metadata value {key} changed from "{render_value(reference_value)}" '
        f'to "{render_value(proposed_value)}". {ADVISORY_SUFFIX}'
    )
