from __future__ import annotations

import math
import sys
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Final, Protocol

DEFAULT_NUMERIC_PLACES: Final[int] = 10
# Above this magnitude numbers are compared by significant digits instead of
# decimal places.
PRECISION_SWITCH_THRESHOLD: Final[float] = 10000.0


class Comparison(StrEnum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    USE_DEFAULT = "use_default"

    @classmethod
    def of(cls, matches: bool) -> Comparison:
        return cls.EQUAL if matches else cls.NOT_EQUAL


type EqualFn = Callable[[object, object], bool]
type Customizer = Callable[[object, object], Comparison]


class StateComparator(Protocol):
    def __call__(self, reference: object, proposed: object, equal: EqualFn) -> Comparison: ...


def is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def render_number(value: float, places: int, *, significant: bool) -> str:
    if significant:
        return f"{float(value):.{max(places - 1, 0)}e}"
    return f"{float(value):.{places}f}"


def numbers_match(reference: float, proposed: float, places: int = DEFAULT_NUMERIC_PLACES) -> bool:
    # Integers are exact, and may exceed float range.
    if isinstance(reference, int) and isinstance(proposed, int):
        return reference == proposed
    if not (_fits_float(reference) and _fits_float(proposed)):
        return reference == proposed
    significant = reference > PRECISION_SWITCH_THRESHOLD
    return render_number(reference, places, significant=significant) == render_number(
        proposed, places, significant=significant
    )


def is_equal_with(reference: object, proposed: object, customizer: Customizer | None = None) -> bool:
    """Structural equality, consulting ``customizer`` at every node first."""
    if customizer is not None:
        verdict = customizer(reference, proposed)
        if verdict is not Comparison.USE_DEFAULT:
            return verdict is Comparison.EQUAL

    if isinstance(reference, Mapping) and isinstance(proposed, Mapping):
        if len(reference) != len(proposed) or reference.keys() != proposed.keys():
            return False
        return all(
            is_equal_with(reference[key], proposed[key], customizer) for key in reference
        )
    if _is_sequence(reference) and _is_sequence(proposed):
        if len(reference) != len(proposed):
            return False
        return all(
            is_equal_with(ref_item, prop_item, customizer)
            for ref_item, prop_item in zip(reference, proposed, strict=True)
        )
    return _leaf_equal(reference, proposed)


def structurally_equal(reference: object, proposed: object) -> bool:
    return is_equal_with(reference, proposed)


def states_match(
    reference: object,
    proposed: object,
    *,
    override: StateComparator | None = None,
    numeric_places: int = DEFAULT_NUMERIC_PLACES,
) -> bool:
    """Compare two captured state payloads.

    ``override`` only applies to the payload roots. Roots are recognized by
    identity, so a nested value shaped like the root is never treated as one.
    Numeric leaves anywhere are compared at ``numeric_places`` precision.
    """

    def tolerant_equal(left: object, right: object) -> bool:
        return is_equal_with(left, right, numeric_leaves)

    def numeric_leaves(ref_value: object, prop_value: object) -> Comparison:
        if is_number(ref_value) and is_number(prop_value):
            return Comparison.of(
                numbers_match(ref_value, prop_value, numeric_places)  # type: ignore[arg-type]
            )
        return Comparison.USE_DEFAULT

    def customizer(ref_value: object, prop_value: object) -> Comparison:
        if override is not None and ref_value is reference and prop_value is proposed:
            verdict = override(ref_value, prop_value, tolerant_equal)
            if verdict is not Comparison.USE_DEFAULT:
                return verdict
        return numeric_leaves(ref_value, prop_value)

    return is_equal_with(reference, proposed, customizer)


def _fits_float(value: float) -> bool:
    return not isinstance(value, int) or abs(value) <= sys.float_info.max


def _is_sequence(value: object) -> bool:
    return isinstance(value, list | tuple)


def _is_nan(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _leaf_equal(reference: object, proposed: object) -> bool:
    if reference is proposed:
        return True
    if is_number(reference) and is_number(proposed):
        # NaN matches NaN
        if _is_nan(reference) and _is_nan(proposed):
            return True
        return reference == proposed
    if isinstance(reference, bool) or isinstance(proposed, bool):
        return False
    return type(reference) is type(proposed) and reference == proposed
