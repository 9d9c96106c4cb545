from .compare import compare_apis
from .metadata import DEFAULT_TYPE_NAME, resolve_defaults, resolve_metadata
from .overrides import (
    DEFAULT_STATE_OVERRIDES,
    AlwaysEqual,
    IgnoringFields,
    StateOverride,
    SubsetOf,
    build_state_override,
)
from .problems import CompareOptions, ComparisonResult, ProblemCollector
from .registry import diff_type_registries
from .state import Comparison, numbers_match, states_match
from .tree import BREAKING_METADATA_POLICIES, MetadataPolicy, diff_element_trees

__all__ = [
    "BREAKING_METADATA_POLICIES",
    "DEFAULT_STATE_OVERRIDES",
    "DEFAULT_TYPE_NAME",
    "AlwaysEqual",
    "CompareOptions",
    "Comparison",
    "ComparisonResult",
    "IgnoringFields",
    "MetadataPolicy",
    "ProblemCollector",
    "StateOverride",
    "SubsetOf",
    "build_state_override",
    "compare_apis",
    "diff_element_trees",
    "diff_type_registries",
    "numbers_match",
    "resolve_defaults",
    "resolve_metadata",
    "states_match",
]
