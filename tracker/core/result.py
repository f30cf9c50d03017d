"""Minimal Ok/Err result type for boundary calls that degrade instead of failing."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return True

    def unwrap_or(self, default: T) -> T:
        """Return the value."""
        _ = default
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying the error that caused it."""

    error: E

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return False

    def unwrap_or(self, default: T) -> T:
        """Return the substitute value."""
        return default


Result = Ok[T] | Err[E]
