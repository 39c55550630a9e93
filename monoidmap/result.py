"""Result type for per-key merge functions that can fail.

The effectful merges ``union_with_a`` and ``intersection_with_a`` call the
merge function once per key, in ascending key order. Returning ``Err``
aborts the whole merge; the error is handed back unchanged.
"""

from dataclasses import dataclass
from typing import TypeVar, Generic

T = TypeVar("T")
E = TypeVar("E")

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

type Result[T, E] = Ok[T] | Err[E]
