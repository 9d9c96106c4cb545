from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DescriptionErrorCode(StrEnum):
    E_DESC_NOT_MAPPING = "E_DESC_NOT_MAPPING"
    E_DESC_SCHEMA_INVALID = "E_DESC_SCHEMA_INVALID"
    E_DESC_ELEMENTS_INVALID = "E_DESC_ELEMENTS_INVALID"
    E_DESC_READ_FAILED = "E_DESC_READ_FAILED"
    E_DESC_JSON_INVALID = "E_DESC_JSON_INVALID"
    E_TYPE_HIERARCHY_CYCLE = "E_TYPE_HIERARCHY_CYCLE"


@dataclass(frozen=True, slots=True)
class DescriptionErrorDetail:
    code: str
    message: str
    witness: tuple[str, ...] | None = None


class DescriptionError(ValueError):
    def __init__(self, detail: DescriptionErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


class TypeHierarchyError(DescriptionError):
    """Raised when a supertype chain loops back on itself."""


def build_description_error(
    code: DescriptionErrorCode,
    message: str,
    witness: tuple[str, ...] | None = None,
) -> DescriptionError:
    detail = DescriptionErrorDetail(code=code.value, message=message, witness=witness)
    if code is DescriptionErrorCode.E_TYPE_HIERARCHY_CYCLE:
        return TypeHierarchyError(detail)
    return DescriptionError(detail)
