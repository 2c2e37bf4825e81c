"""
Tagged success/failure results returned by command orchestrators.

Orchestrators never raise for expected failures; they return `Err` with the
pipeline stage that failed and let the CLI boundary turn it into a printed
message and an exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from .errors import AecliError

T = TypeVar("T")


class Stage(str, Enum):
    VALIDATING = "validating"
    ACQUIRING = "acquiring"
    NORMALIZING = "normalizing"
    INVOKING = "invoking"
    DISPATCHING = "dispatching"
    DONE = "done"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: AecliError
    stage: Stage

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error)


Result = Union[Ok[T], Err]

__all__ = ["Stage", "Ok", "Err", "Result"]
