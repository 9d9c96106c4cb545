from __future__ import annotations

import copy
from random import Random

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from apicompat import compare_apis
from apicompat.compare import SubsetOf, numbers_match, resolve_defaults
from apicompat.compare.state import Comparison, structurally_equal
from apicompat.model import parse_description

pytestmark = pytest.mark.property

_NAMES = st.sampled_from(("a", "b", "c", "screen", "model", "view"))
_TYPES: dict[str, object] = {
    "ObjectIO": {
        "defaults": {
            "typeName": "ObjectIO",
            "documentation": "",
            "stateful": True,
            "readOnly": False,
            "eventType": "MODEL",
            "archetypeID": None,
            "designed": False,
        },
        "events": ["changed"],
    },
    "NodeIO": {"supertype": "ObjectIO", "defaults": {"readOnly": True}},
}

_STATES = st.recursive(
    st.none()
    | st.booleans()
    | st.integers(min_value=-(10**6), max_value=10**6)
    | st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
    | st.text(max_size=6),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=4), children, max_size=3),
    max_leaves=8,
)

_METADATA = st.fixed_dictionaries(
    {"typeName": st.sampled_from(("ObjectIO", "NodeIO"))},
    optional={
        "stateful": st.booleans(),
        "designed": st.booleans(),
        "documentation": st.text(max_size=8),
    },
)


@st.composite
def _nodes(draw: st.DrawFn, depth: int) -> dict[str, object]:
    node: dict[str, object] = {}
    if draw(st.booleans()):
        node["_metadata"] = draw(_METADATA)
        if draw(st.booleans()):
            node["_data"] = {"initialState": draw(_STATES)}
    if depth > 0:
        for name in draw(st.lists(_NAMES, unique=True, max_size=3)):
            node[name] = draw(_nodes(depth - 1))
    return node


@st.composite
def _descriptions(draw: st.DrawFn) -> dict[str, object]:
    elements = {
        name: draw(_nodes(2)) for name in draw(st.lists(_NAMES, unique=True, max_size=3))
    }
    return {
        "elements": elements,
        "types": copy.deepcopy(_TYPES),
        "version": {"major": 1, "minor": 0},
    }


@given(_descriptions())
def test_every_description_is_compatible_with_itself(payload: dict[str, object]) -> None:
    result = compare_apis(payload, copy.deepcopy(payload))

    assert result.breaking == []
    assert result.designed == []


@given(_descriptions(), st.data())
def test_removing_a_top_level_element_is_breaking(
    payload: dict[str, object], data: st.DataObject
) -> None:
    elements = payload["elements"]
    assert isinstance(elements, dict)
    assume(elements)
    removed = data.draw(st.sampled_from(sorted(elements)))
    proposed = copy.deepcopy(payload)
    del proposed["elements"][removed]  # type: ignore[index]

    result = compare_apis(payload, proposed)

    assert result.breaking == [f"Element missing: {removed}"]


@given(st.floats(min_value=-1000, max_value=1000, allow_nan=False))
def test_numbers_equal_at_ten_places_match(value: float) -> None:
    assert numbers_match(value, float(f"{value:.10f}"))


@given(st.floats(min_value=-1000, max_value=1000, allow_nan=False))
def test_numbers_differing_beyond_tolerance_do_not_match(value: float) -> None:
    assert not numbers_match(value, value + 1e-6)


@given(
    st.lists(st.text(max_size=5), unique=True, max_size=6),
    st.lists(st.text(max_size=5), max_size=4),
    st.randoms(use_true_random=False),
)
def test_events_may_be_added_but_not_removed(
    events: list[str], extra: list[str], rng: Random
) -> None:
    grown = events + [event for event in extra if event not in events]
    rng.shuffle(grown)

    def describe(type_events: list[str]) -> dict[str, object]:
        return {
            "elements": {},
            "types": {"NodeIO": {"events": type_events}},
            "version": {"major": 1, "minor": 0},
        }

    assert compare_apis(describe(events), describe(grown)).is_compatible
    if events:
        shrunk = compare_apis(describe(events), describe(events[1:]))
        assert shrunk.breaking == [f"NodeIO is missing event: {events[0]}"]


@given(
    st.lists(st.text(max_size=4), unique=True, min_size=1, max_size=6),
    st.lists(st.text(max_size=4), max_size=3),
    st.data(),
)
def test_subset_override_accepts_supersets_only(
    values: list[str], extra: list[str], data: st.DataObject
) -> None:
    superset = values + [value for value in extra if value not in values]
    shuffled = data.draw(st.permutations(superset))
    subset = SubsetOf("validValues")

    accepted = subset({"validValues": values}, {"validValues": shuffled}, structurally_equal)
    rejected = subset({"validValues": values}, {"validValues": values[1:]}, structurally_equal)

    assert accepted is Comparison.EQUAL
    assert rejected is Comparison.NOT_EQUAL


@given(
    st.lists(
        st.dictionaries(
            st.sampled_from(("stateful", "readOnly", "documentation", "featured")),
            st.booleans() | st.text(max_size=4),
            max_size=3,
        ),
        min_size=1,
        max_size=5,
    )
)
def test_default_resolution_is_deterministic_and_most_specific_wins(
    chain_defaults: list[dict[str, object]],
) -> None:
    types: dict[str, object] = {}
    for index, defaults in enumerate(chain_defaults):
        entry: dict[str, object] = {"defaults": defaults}
        if index > 0:
            entry["supertype"] = f"Level{index - 1}IO"
        types[f"Level{index}IO"] = entry
    description = parse_description(
        {"elements": {}, "types": types, "version": {"major": 1, "minor": 0}}
    )
    leaf = f"Level{len(chain_defaults) - 1}IO"

    first = resolve_defaults(leaf, description)
    second = resolve_defaults(leaf, description)

    assert first == second
    for key, value in chain_defaults[-1].items():
        assert first[key] == value
    assert set(first) == set().union(*chain_defaults)
