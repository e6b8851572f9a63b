"""Unit tests for index bookkeeping helpers."""

from tasker.models import Column, Direction, Task
from tasker.services.ordering import (
    append_all,
    close_gap,
    is_contiguous,
    neighbour_index,
    next_index,
    swap_positions,
)


def make_tasks(*indices: int, column_id: int = 1) -> list[Task]:
    """Helper to build unsaved tasks at the given positions."""
    return [Task(id=i, name=f"t{i}", index=i, column_id=column_id) for i in indices]


class TestNextIndex:
    """Tests for next_index."""

    def test_empty_parent(self):
        """First child goes to position 1."""
        assert next_index([]) == 1

    def test_appends_after_siblings(self):
        """New child goes after the existing ones."""
        assert next_index(make_tasks(1, 2, 3)) == 4


class TestNeighbourIndex:
    """Tests for neighbour_index and Direction.step."""

    def test_left_and_up_go_towards_one(self):
        """left/up step to the previous position."""
        assert neighbour_index(3, Direction.LEFT) == 2
        assert neighbour_index(3, Direction.UP) == 2

    def test_right_and_down_go_away_from_one(self):
        """right/down step to the next position."""
        assert neighbour_index(3, Direction.RIGHT) == 4
        assert neighbour_index(3, Direction.DOWN) == 4


class TestSwapPositions:
    """Tests for swap_positions."""

    def test_swaps_indices(self):
        """Indices are exchanged, nothing else changes."""
        first = Column(id=1, name="a", index=1, project_id=1)
        second = Column(id=2, name="b", index=2, project_id=1)

        swap_positions(first, second)

        assert (first.index, second.index) == (2, 1)
        assert (first.name, second.name) == ("a", "b")


class TestCloseGap:
    """Tests for close_gap."""

    def test_shifts_only_later_siblings(self):
        """Siblings after the removed index move down by one."""
        tasks = make_tasks(1, 2, 3, 4)

        shifted = close_gap(tasks, 2)

        assert [t.id for t in shifted] == [3, 4]
        assert [t.index for t in shifted] == [2, 3]
        assert tasks[0].index == 1

    def test_removed_last_shifts_nothing(self):
        """Removing the last position moves nobody."""
        assert close_gap(make_tasks(1, 2, 3), 3) == []

    def test_result_ordered_by_index(self):
        """Shifted siblings come back ordered by index even if given unordered."""
        shifted = close_gap(make_tasks(5, 3, 4), 2)

        assert [t.index for t in shifted] == [2, 3, 4]


class TestAppendAll:
    """Tests for append_all."""

    def test_keeps_relative_order(self):
        """Children are renumbered after the existing count in their original order."""
        children = make_tasks(3, 1, 2)

        ordered = append_all(children, existing_count=2)

        assert [t.id for t in ordered] == [1, 2, 3]
        assert [t.index for t in ordered] == [3, 4, 5]

    def test_into_empty_parent(self):
        """Into an empty parent the first child becomes position 1."""
        ordered = append_all(make_tasks(4, 7), existing_count=0)

        assert [t.index for t in ordered] == [1, 2]


class TestIsContiguous:
    """Tests for is_contiguous."""

    def test_contiguous(self):
        assert is_contiguous([2, 1, 3])
        assert is_contiguous([])

    def test_gap(self):
        assert not is_contiguous([1, 3])

    def test_duplicate(self):
        assert not is_contiguous([1, 1, 2])

    def test_not_starting_at_one(self):
        assert not is_contiguous([2, 3])
