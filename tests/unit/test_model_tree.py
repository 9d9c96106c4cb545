from __future__ import annotations

import pytest

from apicompat.model.tree import (
    MISSING,
    ElementNode,
    NamespaceNode,
    build_node,
    child_path,
    is_truthy,
    iter_elements,
    join_path,
)

pytestmark = pytest.mark.unit


def test_metadata_block_decides_element_kind_once() -> None:
    root = build_node(
        {
            "app": {
                "screen": {
                    "button": {"_metadata": {"typeName": "NodeIO"}},
                },
                "_metadata": {"typeName": "ObjectIO"},
            }
        }
    )

    assert isinstance(root, NamespaceNode)
    app = root.children["app"]
    assert isinstance(app, ElementNode)
    assert isinstance(app.children["screen"], NamespaceNode)
    button = app.children["screen"].children["button"]
    assert isinstance(button, ElementNode)
    assert dict(button.metadata) == {"typeName": "NodeIO"}


def test_reserved_keys_are_not_children() -> None:
    node = build_node(
        {"_metadata": {}, "_data": {"initialState": {"value": 1}}, "child": {}}
    )

    assert isinstance(node, ElementNode)
    assert list(node.children) == ["child"]
    assert node.initial_state == {"value": 1}
    assert node.has_initial_state


def test_malformed_nodes_degrade_to_namespaces() -> None:
    root = build_node(
        {
            "bad_metadata": {"_metadata": "not a mapping", "child": {}},
            "scalar": 3,
            "data_only": {"_data": {"initialState": {"value": 1}}},
        }
    )

    assert isinstance(root.children["bad_metadata"], NamespaceNode)
    assert list(root.children["bad_metadata"].children) == ["child"]
    assert root.children["scalar"] == NamespaceNode()
    assert isinstance(root.children["data_only"], NamespaceNode)


def test_initial_state_presence_follows_truthiness() -> None:
    absent = build_node({"_metadata": {}})
    null_state = build_node({"_metadata": {}, "_data": {"initialState": None}})
    empty_object = build_node({"_metadata": {}, "_data": {"initialState": {}}})

    assert isinstance(absent, ElementNode)
    assert absent.initial_state is MISSING
    assert not absent.has_initial_state
    assert isinstance(null_state, ElementNode)
    assert not null_state.has_initial_state
    assert isinstance(empty_object, ElementNode)
    assert empty_object.has_initial_state


def test_built_tree_does_not_alias_input() -> None:
    raw = {"a": {"_metadata": {"values": [1, 2]}}}
    node = build_node(raw)
    raw["a"]["_metadata"]["values"].append(3)

    element = node.children["a"]
    assert isinstance(element, ElementNode)
    assert element.metadata["values"] == [1, 2]
    with pytest.raises(TypeError):
        element.metadata["values"] = []  # type: ignore[index]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, False),
        (MISSING, False),
        (False, False),
        (0, False),
        (0.0, False),
        (float("nan"), False),
        ("", False),
        (True, True),
        (1, True),
        ("x", True),
        ({}, True),
        ([], True),
        (10**400, True),
    ],
)
def test_is_truthy(value: object, expected: bool) -> None:
    assert is_truthy(value) is expected


def test_paths_and_iteration() -> None:
    root = build_node(
        {
            "app": {
                "_metadata": {},
                "one": {"_metadata": {}},
                "ns": {"two": {"_metadata": {}}},
            }
        }
    )

    assert [trail for trail, _ in iter_elements(root)] == [
        ("app",),
        ("app", "one"),
        ("app", "ns", "two"),
    ]
    assert join_path(("app", "ns", "two")) == "app.ns.two"
    assert join_path(()) == ""
    assert child_path("", "app") == "app"
    assert child_path("app.ns", "two") == "app.ns.two"
