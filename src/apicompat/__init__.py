from .compare import CompareOptions, ComparisonResult, compare_apis
from .model import Description, parse_description, to_structured_tree

__version__ = "1.0.0"

__all__ = [
    "CompareOptions",
    "ComparisonResult",
    "Description",
    "__version__",
    "compare_apis",
    "parse_description",
    "to_structured_tree",
]
