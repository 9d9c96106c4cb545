"""Known-volatile captured-state locations and their comparators.

Some captured initial states legitimately differ between two exports of the
same surface (locale lists grow, pointer state depends on the test browser,
layouts depend on the window). Each entry here maps an element path to the
comparator used for that element's state root. Paths may start with
``{root}``, which expands to the first component of the element's trail.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from .state import Comparison, EqualFn, StateComparator

ROOT_PLACEHOLDER: Final[str] = "{root}"


@dataclass(frozen=True, slots=True)
class SubsetOf:
    """Every value listed under ``field`` in the reference must remain listed."""

    field: str

    def __call__(self, reference: object, proposed: object, equal: EqualFn) -> Comparison:
        if not isinstance(reference, Mapping) or not isinstance(proposed, Mapping):
            return Comparison.USE_DEFAULT
        reference_values = reference.get(self.field)
        if not isinstance(reference_values, list | tuple):
            return Comparison.USE_DEFAULT
        proposed_values = proposed.get(self.field)
        if not isinstance(proposed_values, list | tuple):
            return Comparison.NOT_EQUAL
        return Comparison.of(
            all(
                any(equal(value, candidate) for candidate in proposed_values)
                for value in reference_values
            )
        )


@dataclass(frozen=True, slots=True)
class IgnoringFields:
    fields: tuple[str, ...]

    def __call__(self, reference: object, proposed: object, equal: EqualFn) -> Comparison:
        if not isinstance(reference, Mapping) or not isinstance(proposed, Mapping):
            return Comparison.USE_DEFAULT
        masked_reference = {**reference, **dict.fromkeys(self.fields)}
        masked_proposed = {**proposed, **dict.fromkeys(self.fields)}
        return Comparison.of(equal(masked_reference, masked_proposed))


@dataclass(frozen=True, slots=True)
class AlwaysEqual:
    def __call__(self, reference: object, proposed: object, equal: EqualFn) -> Comparison:
        del reference, proposed, equal
        return Comparison.EQUAL


@dataclass(frozen=True, slots=True)
class StateOverride:
    path: str
    comparator: StateComparator

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("state override path must be non-empty")

    def matches(self, element_path: str, root_name: str) -> bool:
        return self.path.replace(ROOT_PLACEHOLDER, root_name) == element_path


STATE_OVERRIDE_KINDS: tuple[str, ...] = ("always_equal", "ignore_fields", "subset")


def build_state_override(
    path: str,
    kind: str,
    *,
    field: str | None = None,
    fields: Sequence[str] = (),
) -> StateOverride:
    if kind == "subset":
        if not field:
            raise ValueError(f"subset state override '{path}' requires a field")
        return StateOverride(path, SubsetOf(field))
    if kind == "ignore_fields":
        if not fields:
            raise ValueError(f"ignore_fields state override '{path}' requires fields")
        return StateOverride(path, IgnoringFields(tuple(fields)))
    if kind == "always_equal":
        return StateOverride(path, AlwaysEqual())
    raise ValueError(
        f"unsupported state override kind '{kind}', use one of: {','.join(STATE_OVERRIDE_KINDS)}"
    )


DEFAULT_STATE_OVERRIDES: tuple[StateOverride, ...] = (
    # New translations add locales; removing one is still a break.
    StateOverride(f"{ROOT_PLACEHOLDER}.general.model.localeProperty", SubsetOf("validValues")),
    # Pointers only exist if a mouse hovered the exporting browser.
    StateOverride(f"{ROOT_PLACEHOLDER}.general.controller.input", IgnoringFields(("pointers",))),
    # Startup scale follows the window aspect ratio.
    StateOverride("density.mysteryScreen.model.scale", AlwaysEqual()),
    # Start position depends on the browser running the export.
    StateOverride(
        "greenhouseEffect.layerModelScreen.model.fluxMeter.wireMeterAttachmentPositionProperty",
        AlwaysEqual(),
    ),
    StateOverride(
        "greenhouseEffect.photonsScreen.model.fluxMeter.wireMeterAttachmentPositionProperty",
        AlwaysEqual(),
    ),
)


def find_state_override(
    overrides: Iterable[StateOverride], element_path: str, root_name: str
) -> StateOverride | None:
    for override in overrides:
        if override.matches(element_path, root_name):
            return override
    return None
