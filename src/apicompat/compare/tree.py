from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from apicompat.model.description import Description
from apicompat.model.tree import MISSING, ApiNode, ElementNode, child_path, is_truthy, join_path

from . import messages
from .metadata import resolve_metadata
from .overrides import find_state_override
from .problems import CompareOptions, ProblemCollector
from .state import states_match, structurally_equal

DESIGNED_KEY: Final[str] = "designed"
ARCHETYPE_ID_KEY: Final[str] = "archetypeID"
_ANY_CHANGE: Final[object] = object()


@dataclass(frozen=True, slots=True)
class MetadataPolicy:
    """A tracked metadata key.

    With ``breaking_value`` left unset any change is breaking. Otherwise only a
    change *to* ``breaking_value`` is breaking and the opposite change is an
    accepted widening.
    """

    key: str
    breaking_value: object = _ANY_CHANGE


BREAKING_METADATA_POLICIES: tuple[MetadataPolicy, ...] = (
    MetadataPolicy("typeName"),
    MetadataPolicy("eventType"),
    MetadataPolicy("playback"),
    MetadataPolicy("dynamicElement"),
    MetadataPolicy("isArchetype"),
    MetadataPolicy(ARCHETYPE_ID_KEY),
    MetadataPolicy("stateful", breaking_value=False),
    MetadataPolicy("readOnly", breaking_value=True),
)


@dataclass(frozen=True, slots=True)
class _TreeContext:
    reference: Description
    proposed: Description
    collector: ProblemCollector
    options: CompareOptions


def diff_element_trees(
    reference: Description,
    proposed: Description,
    collector: ProblemCollector,
    options: CompareOptions | None = None,
) -> None:
    context = _TreeContext(
        reference=reference,
        proposed=proposed,
        collector=collector,
        options=options if options is not None else CompareOptions(),
    )
    _visit(context, (), reference.root, proposed.root, False)


def _visit(
    context: _TreeContext,
    trail: tuple[str, ...],
    reference: ApiNode,
    proposed: ApiNode,
    is_designed_inherited: bool,
) -> None:
    path = join_path(trail)
    is_designed = is_designed_inherited

    if isinstance(reference, ElementNode):
        is_designed = is_designed or is_truthy(reference.metadata.get(DESIGNED_KEY))
        _check_metadata(context, path, reference, proposed, is_designed)
        if reference.has_initial_state:
            _check_initial_state(context, trail, path, reference, proposed, is_designed)

    for component_name, reference_child in reference.children.items():
        proposed_child = proposed.children.get(component_name)
        if proposed_child is None:
            context.collector.append_breaking(
                messages.element_missing(child_path(path, component_name)),
                also_designed=is_designed,
            )
        else:
            _visit(
                context, trail + (component_name,), reference_child, proposed_child, is_designed
            )

    if is_designed:
        for component_name in proposed.children:
            if component_name not in reference.children:
                context.collector.append(
                    messages.element_added(child_path(path, component_name)), True
                )


def _check_metadata(
    context: _TreeContext,
    path: str,
    reference: ElementNode,
    proposed: ApiNode,
    is_designed: bool,
) -> None:
    reference_metadata = resolve_metadata(reference, context.reference)
    proposed_metadata = resolve_metadata(proposed, context.proposed)

    for policy in BREAKING_METADATA_POLICIES:
        _report_difference(
            context,
            path,
            policy.key,
            reference_metadata,
            proposed_metadata,
            is_designed_change=False,
            breaking_value=policy.breaking_value,
        )

    if is_designed:
        for key in reference_metadata:
            _report_difference(
                context,
                path,
                key,
                reference_metadata,
                proposed_metadata,
                is_designed_change=True,
                breaking_value=_ANY_CHANGE,
            )


def _report_difference(  # noqa: PLR0913
    context: _TreeContext,
    path: str,
    key: str,
    reference_metadata: dict[str, object],
    proposed_metadata: dict[str, object],
    *,
    is_designed_change: bool,
    breaking_value: object,
) -> None:
    reference_value = reference_metadata.get(key, MISSING)
    proposed_value = proposed_metadata.get(key, MISSING)
    if structurally_equal(reference_value, proposed_value):
        return
    if _is_legacy_archetype_artifact(context, key, reference_value, proposed_value):
        return
    if (
        is_designed_change
        or breaking_value is _ANY_CHANGE
        or structurally_equal(proposed_value, breaking_value)
    ):
        context.collector.append(
            messages.metadata_changed(path, key, reference_value, proposed_value),
            is_designed_change,
        )


def _is_legacy_archetype_artifact(
    context: _TreeContext, key: str, reference_value: object, proposed_value: object
) -> bool:
    # Legacy exports were sparse for the archetype id; the versioned format
    # made null its default.
    if key != ARCHETYPE_ID_KEY:
        return False
    if context.proposed.is_legacy and reference_value is None and proposed_value is MISSING:
        return True
    return context.reference.is_legacy and proposed_value is None and reference_value is MISSING


def _check_initial_state(  # noqa: PLR0913
    context: _TreeContext,
    trail: tuple[str, ...],
    path: str,
    reference: ElementNode,
    proposed: ApiNode,
    is_designed: bool,
) -> None:
    if not isinstance(proposed, ElementNode) or not proposed.has_initial_state:
        context.collector.append_breaking(
            messages.initial_state_missing(path), also_designed=is_designed
        )
        return

    override = find_state_override(
        context.options.state_overrides, path, trail[0] if trail else ""
    )
    matches = states_match(
        reference.initial_state,
        proposed.initial_state,
        override=None if override is None else override.comparator,
        numeric_places=context.options.numeric_places,
    )
    if not matches:
        context.collector.append_breaking(
            messages.initial_state_differs(path, reference.initial_state, proposed.initial_state),
            also_designed=is_designed,
        )
