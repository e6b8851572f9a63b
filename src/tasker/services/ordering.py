"""Index bookkeeping shared by the column and task services.

Columns within a project and tasks within a column carry a 1-based ``index``.
For every parent the indices of its children are exactly 1..n. The helpers
here compute the new positions; callers persist them.
"""

from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..models import Column, Direction, Task

Positioned = TypeVar("Positioned", Column, Task)


def next_index(siblings: Sequence[Positioned]) -> int:
    """Position for a child appended after ``siblings``."""
    return len(siblings) + 1


def neighbour_index(index: int, direction: Direction) -> int:
    """Position of the adjacent sibling in ``direction``."""
    return index + direction.step


def swap_positions(first: Positioned, second: Positioned) -> None:
    """Exchange the indices of two siblings in place."""
    first.index, second.index = second.index, first.index


def close_gap(siblings: Iterable[Positioned], removed_index: int) -> list[Positioned]:
    """Shift down every sibling after ``removed_index``.

    Returns only the siblings that moved, ordered by their new index.
    """
    shifted = sorted((s for s in siblings if s.index > removed_index), key=lambda s: s.index)
    for sibling in shifted:
        sibling.index -= 1
    return shifted


def append_all(children: Iterable[Positioned], existing_count: int) -> list[Positioned]:
    """Renumber ``children`` to follow ``existing_count`` siblings, keeping their relative order."""
    ordered = sorted(children, key=lambda c: c.index)
    for offset, child in enumerate(ordered, start=existing_count + 1):
        child.index = offset
    return ordered


def is_contiguous(indices: Iterable[int]) -> bool:
    """Whether ``indices`` are exactly 1..n with no gaps or duplicates."""
    ordered = sorted(indices)
    return ordered == list(range(1, len(ordered) + 1))
