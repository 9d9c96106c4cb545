from __future__ import annotations

from dataclasses import dataclass, field

from .overrides import DEFAULT_STATE_OVERRIDES, StateOverride
from .state import DEFAULT_NUMERIC_PLACES


@dataclass(frozen=True, slots=True)
class CompareOptions:
    compare_breaking: bool = True
    compare_designed: bool = True
    numeric_places: int = DEFAULT_NUMERIC_PLACES
    state_overrides: tuple[StateOverride, ...] = field(default=DEFAULT_STATE_OVERRIDES)

    def __post_init__(self) -> None:
        if isinstance(self.numeric_places, bool) or not isinstance(self.numeric_places, int):
            raise ValueError("numeric_places must be an integer")
        if not 0 <= self.numeric_places <= 100:
            raise ValueError("numeric_places must be within [0, 100]")
        object.__setattr__(self, "state_overrides", tuple(self.state_overrides))


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    breaking: list[str]
    designed: list[str]

    @property
    def is_compatible(self) -> bool:
        return not self.breaking and not self.designed

    def as_dict(self) -> dict[str, list[str]]:
        return {"breaking": list(self.breaking), "designed": list(self.designed)}


class ProblemCollector:
    """Routes each problem into the breaking or designed list, or drops it.

    Problems keep the order they were appended in and are never deduplicated.
    """

    __slots__ = ("_breaking", "_designed", "_options")

    def __init__(self, options: CompareOptions | None = None) -> None:
        self._options = options if options is not None else CompareOptions()
        self._breaking: list[str] = []
        self._designed: list[str] = []

    def append(self, message: str, is_designed: bool = False) -> None:
        if is_designed:
            if self._options.compare_designed:
                self._designed.append(message)
        elif self._options.compare_breaking:
            self._breaking.append(message)

    def append_breaking(self, message: str, *, also_designed: bool) -> None:
        self.append(message)
        if also_designed:
            self.append(message, True)

    def result(self) -> ComparisonResult:
        return ComparisonResult(breaking=list(self._breaking), designed=list(self._designed))
