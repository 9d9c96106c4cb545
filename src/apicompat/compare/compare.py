from __future__ import annotations

import logging
from collections.abc import Mapping

from apicompat.model.description import Description, parse_description
from apicompat.model.schema import RawDescription
from apicompat.model.tree import iter_elements

from .problems import CompareOptions, ComparisonResult, ProblemCollector
from .registry import diff_type_registries
from .tree import diff_element_trees

logger = logging.getLogger(__name__)

type DescriptionInput = Description | RawDescription | Mapping[str, object]


def compare_apis(
    reference: DescriptionInput,
    proposed: DescriptionInput,
    options: CompareOptions | None = None,
) -> ComparisonResult:
    """Report how ``proposed`` deviates from ``reference``.

    Either side may be in the legacy flat format; it is upgraded to the tree
    format on a copy first. Neither input is modified. The element trees are
    compared first, then the type registries, and both phases feed one
    collector, so each result list is in traversal order.
    """
    resolved_options = options if options is not None else CompareOptions()
    reference_description = parse_description(reference)
    proposed_description = parse_description(proposed)

    collector = ProblemCollector(resolved_options)
    diff_element_trees(
        reference_description, proposed_description, collector, options=resolved_options
    )
    diff_type_registries(reference_description, proposed_description, collector)
    result = collector.result()

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "compared %d reference elements and %d reference types: %d breaking, %d designed",
            sum(1 for _ in iter_elements(reference_description.root)),
            len(reference_description.types),
            len(result.breaking),
            len(result.designed),
        )
    return result
