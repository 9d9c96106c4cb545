from __future__ import annotations

from apicompat.model.description import Description
from apicompat.model.schema import TypeEntry
from apicompat.model.tree import MISSING

from . import messages
from .problems import ProblemCollector
from .state import structurally_equal


def diff_type_registries(
    reference: Description, proposed: Description, collector: ProblemCollector
) -> None:
    """Compare the type registries of two descriptions.

    Runs independently of the element trees and of the designed flag; every
    problem found here is breaking-class.
    """
    compare_defaults = not reference.is_legacy and not proposed.is_legacy
    for type_name, reference_entry in reference.types.items():
        proposed_entry = proposed.types.get(type_name)
        if proposed_entry is None:
            collector.append(messages.type_missing(type_name))
            continue
        _diff_methods(type_name, reference_entry, proposed_entry, collector)
        _diff_events(type_name, reference_entry, proposed_entry, collector)
        _diff_supertype(type_name, reference_entry, proposed_entry, collector)
        _diff_type_params(type_name, reference_entry, proposed_entry, collector)
        if compare_defaults:
            _diff_defaults(type_name, reference_entry, proposed_entry, collector)


def _diff_methods(
    type_name: str, reference: TypeEntry, proposed: TypeEntry, collector: ProblemCollector
) -> None:
    for method_name, reference_method in reference.methods.items():
        proposed_method = proposed.methods.get(method_name)
        if proposed_method is None:
            collector.append(messages.method_missing(type_name, method_name))
            continue
        if reference_method.param_types != proposed_method.param_types:
            collector.append(
                messages.method_parameter_types_changed(
                    type_name,
                    method_name,
                    reference_method.param_types,
                    proposed_method.param_types,
                )
            )
        if reference_method.return_type != proposed_method.return_type:
            collector.append(
                messages.method_return_type_changed(
                    type_name,
                    method_name,
                    reference_method.return_type,
                    proposed_method.return_type,
                )
            )


def _diff_events(
    type_name: str, reference: TypeEntry, proposed: TypeEntry, collector: ProblemCollector
) -> None:
    proposed_events = set(proposed.events)
    for event in reference.events:
        if event not in proposed_events:
            collector.append(messages.event_missing(type_name, event))


def _diff_supertype(
    type_name: str, reference: TypeEntry, proposed: TypeEntry, collector: ProblemCollector
) -> None:
    if reference.supertype != proposed.supertype:
        collector.append(
            messages.supertype_changed(type_name, reference.supertype, proposed.supertype)
        )


def _diff_type_params(
    type_name: str, reference: TypeEntry, proposed: TypeEntry, collector: ProblemCollector
) -> None:
    reference_params = reference.type_params or ()
    proposed_params = proposed.type_params or ()
    if sorted(reference_params) != sorted(proposed_params):
        collector.append(
            messages.type_params_changed(type_name, reference_params, proposed_params)
        )


def _diff_defaults(
    type_name: str, reference: TypeEntry, proposed: TypeEntry, collector: ProblemCollector
) -> None:
    reference_defaults = reference.defaults or {}
    proposed_defaults = proposed.defaults or {}
    for key, reference_value in reference_defaults.items():
        proposed_value = proposed_defaults.get(key, MISSING)
        if not structurally_equal(reference_value, proposed_value):
            collector.append(
                messages.type_default_changed(type_name, key, reference_value, proposed_value)
            )
