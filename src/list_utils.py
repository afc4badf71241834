"""Cyclic list helpers for closed point sequences."""
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def safe_index(length: int) -> Callable[[int], int]:
    """Return a function mapping any integer onto [0, length).

    Python's modulo is already non-negative for a positive length, so
    index(-1) is the last element and index(length) wraps to 0.
    """
    if length <= 0:
        raise ValueError(f"safe_index needs a positive length, got {length}")
    return lambda i: i % length


def loopify_in_pairs(items: Sequence[T]) -> List[Tuple[T, T]]:
    """Consecutive pairs of a closed sequence, ending with (last, first)."""
    return loopify_in_groups(items, 2)


def loopify_in_groups(items: Sequence[T], size: int) -> List[Tuple[T, ...]]:
    """Cyclic windows of `size` items, one starting at each element."""
    if not items:
        return []
    index = safe_index(len(items))
    return [
        tuple(items[index(i + k)] for k in range(size))
        for i in range(len(items))
    ]
