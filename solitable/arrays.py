"""List helpers for removal, insertion and in-place sorting."""

from __future__ import annotations

from typing import Any, Callable, List, MutableSequence, TypeVar

T = TypeVar("T")


def _check_index(items: MutableSequence[Any], index: int) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"index {index} out of range for {len(items)} items")


def ordered_remove_by_index(items: MutableSequence[T], index: int) -> T:
    """Remove and return the item at ``index``, keeping the order of the rest."""
    _check_index(items, index)
    value = items[index]
    del items[index]
    return value


def unordered_remove_by_index(items: MutableSequence[T], index: int) -> T:
    """Remove and return the item at ``index`` by moving the last item into its place."""
    _check_index(items, index)
    value = items[index]
    last = items.pop()
    if index < len(items):
        items[index] = last
    return value


def unordered_remove_by_value(items: MutableSequence[T], value: T) -> bool:
    """Remove the first item equal to ``value``, filling its place with the last item."""
    for index, item in enumerate(items):
        if item == value:
            unordered_remove_by_index(items, index)
            return True
    return False


def add_if_unique(items: MutableSequence[T], value: T) -> bool:
    """Append ``value`` unless an equal item is present; return whether it was added."""
    if value in items:
        return False
    items.append(value)
    return True


def add_at_index(
    items: MutableSequence[Any], value: Any, index: int, fill: Any = None
) -> None:
    """Store ``value`` at ``index``, growing the list with ``fill`` when needed.

    An empty list simply receives ``value`` as its only item.
    """
    if index < 0:
        raise IndexError(f"negative index {index}")
    if not items:
        items.append(value)
        return
    if len(items) <= index:
        items.extend([fill] * (index + 1 - len(items)))
    items[index] = value


def peek_last(items: MutableSequence[T]) -> T:
    """Return the last item without removing it."""
    if not items:
        raise IndexError("peek at an empty list")
    return items[-1]


def quicksort(items: List[T], less: Callable[[T, T], bool]) -> None:
    """Sort ``items`` in place with a Lomuto-partition quicksort using ``less``."""
    pending = [(0, len(items) - 1)]
    while pending:
        lo, hi = pending.pop()
        if lo >= hi or lo < 0:
            continue
        pivot_value = items[hi]
        i = lo
        for j in range(lo, hi):
            if less(items[j], pivot_value):
                items[i], items[j] = items[j], items[i]
                i += 1
        items[i], items[hi] = items[hi], items[i]
        pending.append((i + 1, hi))
        pending.append((lo, i - 1))