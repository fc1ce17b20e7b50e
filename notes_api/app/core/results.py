"""
Result type for read paths that degrade instead of raising.

Public read operations return an empty list, ``None`` or ``False`` when
the store is unreachable or holds garbage.  Internally they go through
``ReadResult`` so the difference between "nothing stored" and "the
read failed" is still observable, e.g. by tests or by write paths that
must not overwrite a collection they failed to read.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ReadStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    FAULT = "fault"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Value read from the store together with how it was obtained."""

    value: T
    status: ReadStatus
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: T) -> "ReadResult[T]":
        return cls(value=value, status=ReadStatus.OK)

    @classmethod
    def absent(cls, default: T) -> "ReadResult[T]":
        return cls(value=default, status=ReadStatus.ABSENT)

    @classmethod
    def fault(cls, default: T, error: BaseException) -> "ReadResult[T]":
        return cls(value=default, status=ReadStatus.FAULT, error=error)

    @property
    def is_fault(self) -> bool:
        return self.status is ReadStatus.FAULT
