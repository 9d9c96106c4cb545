from __future__ import annotations

from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from apicompat.compare.problems import ComparisonResult

REPORT_SCHEMA_VERSION: Final[int] = 1


class ReportStatus(StrEnum):
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


class ComparisonReport(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int = REPORT_SCHEMA_VERSION
    reference: str = Field(min_length=1)
    proposed: str = Field(min_length=1)
    status: ReportStatus
    exit_code: int = Field(ge=0, le=2)
    breaking: tuple[str, ...] = ()
    designed: tuple[str, ...] = ()
    error: str | None = None


def exit_code_for(result: ComparisonResult) -> int:
    return 0 if result.is_compatible else 1


def build_report(*, reference: str, proposed: str, result: ComparisonResult) -> ComparisonReport:
    exit_code = exit_code_for(result)
    return ComparisonReport(
        reference=reference,
        proposed=proposed,
        status=ReportStatus.PASS if exit_code == 0 else ReportStatus.FAIL,
        exit_code=exit_code,
        **result.as_dict(),
    )


def build_error_report(*, reference: str, proposed: str, error: str) -> ComparisonReport:
    return ComparisonReport(
        reference=reference,
        proposed=proposed,
        status=ReportStatus.ERROR,
        exit_code=2,
        error=error,
    )
