from .description import Description, parse_description
from .errors import DescriptionError, DescriptionErrorCode, DescriptionErrorDetail, TypeHierarchyError
from .normalize import LEGACY_PATH_SEPARATOR, to_structured_tree
from .schema import ApiVersion, MethodSignature, RawDescription, TypeEntry, validate_raw_description
from .tree import MISSING, ApiNode, ElementNode, NamespaceNode, build_node, iter_elements

__all__ = [
    "LEGACY_PATH_SEPARATOR",
    "MISSING",
    "ApiNode",
    "ApiVersion",
    "Description",
    "DescriptionError",
    "DescriptionErrorCode",
    "DescriptionErrorDetail",
    "ElementNode",
    "MethodSignature",
    "NamespaceNode",
    "RawDescription",
    "TypeEntry",
    "TypeHierarchyError",
    "build_node",
    "iter_elements",
    "parse_description",
    "to_structured_tree",
    "validate_raw_description",
]
