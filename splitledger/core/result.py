"""
Tagged result returned by allocation operations.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from splitledger.core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the computed value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Rejected outcome carrying the validation error."""
    error: ValidationError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return self.error.reason

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]
