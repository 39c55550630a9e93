"""Data structures built on the public MonoidMap API."""

from .multimap import MultiMap
from .multiset import MultiSet
from .nested import NestedMonoidMap

__all__ = ["MultiMap", "MultiSet", "NestedMonoidMap"]
