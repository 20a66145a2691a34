from enum import StrEnum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Outcome(StrEnum):
    OK = "ok"
    CANCELLED = "cancelled"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class OperationResult(BaseModel, Generic[T]):
    outcome: Outcome = Field(Outcome.OK)
    message: str = Field("Success")
    data: Optional[T] = Field(None)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK
