from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from app.core.errors import RankingError

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Success flag plus either a value or the error that stopped the operation."""

    success: bool
    value: Optional[T] = None
    error: Optional[RankingError] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: RankingError) -> "OperationResult[T]":
        return cls(success=False, error=error)
