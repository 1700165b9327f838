"""
Outcome of an engine operation.

Engine methods do not raise for zpool failures, they return
``Result.failure(ZpoolError)``. Raising is left to programming errors such
as reading the value of a failed result.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, cast

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Either a value or an error, never both.

    ``False`` and empty lists are values: ``Result.success(False)`` is how
    ``exists`` reports a missing pool.
    """
    _value: Optional[T] = None
    _error: Optional[E] = None

    def __post_init__(self):
        if (self._value is None) == (self._error is None):
            raise ValueError("Result needs exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        return cls(_value=value)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        """The success value; ValueError on a failed result."""
        if self._error is not None:
            raise ValueError(f"Failed result has no value: {self._error!r}")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """The error; ValueError on a successful result."""
        if self._error is None:
            raise ValueError(f"Successful result has no error: {self._value!r}")
        return self._error

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self._error is None:
            return f"Success({self._value!r})"
        return f"Failure({self._error!r})"
