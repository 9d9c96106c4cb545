from __future__ import annotations

from functools import cache
from pathlib import Path
from typing import cast

import yaml

from apicompat.compare.overrides import (
    DEFAULT_STATE_OVERRIDES,
    STATE_OVERRIDE_KINDS,
    StateOverride,
    build_state_override,
)
from apicompat.compare.problems import CompareOptions
from apicompat.compare.state import DEFAULT_NUMERIC_PLACES


class CompareConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


def load_compare_options(path: str | Path) -> CompareOptions:
    """Read a comparison profile.

    Profile state overrides are consulted after the built-in table.
    """
    return _load_compare_options_cached(str(Path(path).resolve()))


@cache
def _load_compare_options_cached(path: str) -> CompareOptions:
    raw = _read_yaml_file(Path(path))
    return compare_options_from_profile(raw)


def compare_options_from_profile(raw: dict[str, object]) -> CompareOptions:
    options_block = _optional_mapping(raw, "options")
    overrides = tuple(
        _parse_state_override(index, item)
        for index, item in enumerate(_optional_list(raw, "state_overrides"))
    )
    try:
        return CompareOptions(
            compare_breaking=_optional_bool(options_block, "compare_breaking", True),
            compare_designed=_optional_bool(options_block, "compare_designed", True),
            numeric_places=_optional_int(options_block, "numeric_places", DEFAULT_NUMERIC_PLACES),
            state_overrides=DEFAULT_STATE_OVERRIDES + overrides,
        )
    except ValueError as exc:
        raise CompareConfigError("E_CONFIG_INVALID", str(exc)) from exc


def _parse_state_override(index: int, item: object) -> StateOverride:
    if not isinstance(item, dict):
        raise CompareConfigError(
            "E_CONFIG_INVALID", f"state override at index {index} must be a mapping"
        )
    entry = cast(dict[str, object], item)
    path = _require_string(entry, "path")
    kind = _require_string(entry, "kind")
    if kind not in STATE_OVERRIDE_KINDS:
        raise CompareConfigError(
            "E_CONFIG_INVALID",
            f"unsupported state override kind '{kind}' at index {index}",
        )
    field = entry.get("field")
    fields = entry.get("fields", [])
    if field is not None and not isinstance(field, str):
        raise CompareConfigError("E_CONFIG_INVALID", f"invalid field at index {index}")
    if not isinstance(fields, list) or not all(isinstance(name, str) for name in fields):
        raise CompareConfigError("E_CONFIG_INVALID", f"invalid fields at index {index}")
    try:
        return build_state_override(path, kind, field=field, fields=tuple(fields))
    except ValueError as exc:
        raise CompareConfigError("E_CONFIG_INVALID", str(exc)) from exc


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CompareConfigError(
            "E_CONFIG_READ_FAILED",
            f"unable to read comparison profile '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise CompareConfigError(
            "E_CONFIG_PARSE_FAILED",
            f"invalid comparison profile yaml in '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise CompareConfigError(
            "E_CONFIG_INVALID",
            "comparison profile root must be a mapping",
        )
    return cast(dict[str, object], payload)


def _optional_mapping(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    raise CompareConfigError("E_CONFIG_INVALID", f"invalid mapping for key '{key}'")


def _optional_list(data: dict[str, object], key: str) -> list[object]:
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, list):
        return cast(list[object], value)
    raise CompareConfigError("E_CONFIG_INVALID", f"invalid list for key '{key}'")


def _require_string(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    raise CompareConfigError("E_CONFIG_INVALID", f"missing or invalid string for key '{key}'")


def _optional_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    raise CompareConfigError("E_CONFIG_INVALID", f"invalid bool for key '{key}'")


def _optional_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise CompareConfigError("E_CONFIG_INVALID", f"invalid integer for key '{key}'")
