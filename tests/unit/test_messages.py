from __future__ import annotations

import pytest

from apicompat.compare import messages
from apicompat.model import MISSING

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (MISSING, "undefined"),
        (None, "null"),
        (True, "true"),
        (False, "false"),
        ("NodeIO", "NodeIO"),
        (3, "3"),
        (3.0, "3"),
        (0.5, "0.5"),
        (float("nan"), "NaN"),
        (float("-inf"), "-Infinity"),
        ({"a": 1}, "[object Object]"),
        (["a", None, 2], "a,,2"),
    ],
)
def test_render_value(value: object, expected: str) -> None:
    assert messages.render_value(value) == expected


def test_render_json_is_compact() -> None:
    assert messages.render_json({"a": [1, "b"], "c": None}) == '{"a":[1,"b"],"c":null}'
    assert messages.render_json(MISSING) == "undefined"


def test_messages_at_tree_root_have_no_leading_separator() -> None:
    assert messages.metadata_changed("", "typeName", "A", "B") == (
        'typeName changed from "A" to "B"'
    )
    assert messages.initial_state_missing("") == "_data.initialState is missing"


def test_registry_messages() -> None:
    assert messages.type_missing("NodeIO") == "Type missing: NodeIO"
    assert messages.event_missing("NodeIO", "changed") == "NodeIO is missing event: changed"
    assert messages.method_return_type_changed("NodeIO", "m", None, "VoidIO") == (
        "NodeIO.m has a different return type null => VoidIO"
    )
    assert messages.supertype_changed("NodeIO", "ObjectIO", None).startswith(
        'NodeIO supertype changed from "ObjectIO" to "null". '
    )
    assert messages.type_default_changed("NodeIO", "stateful", True, MISSING).endswith(
        messages.ADVISORY_SUFFIX
    )


def test_render_json_normalizes_floats() -> None:
    assert messages.render_json({"v": 1.0, "w": [2.5, -0.0]}) == '{"v":1,"w":[2.5,0]}'
    assert messages.render_json([float("nan"), float("inf")]) == "[null,null]"


def test_initial_state_message_shows_integral_floats_without_fraction() -> None:
    assert messages.initial_state_differs("app", {"v": 1.0}, {"v": 2.5}) == (
        'app._data.initialState differs. \nExpected:\n{"v":1}\n actual:\n{"v":2.5}\n'
    )
