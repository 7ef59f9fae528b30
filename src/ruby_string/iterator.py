"""Segment iterator for RubyString."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ruby_string.types import PlainSegment, RubiedSegment, Segment

if TYPE_CHECKING:
    from ruby_string.string import RubyString


class SegmentIterator:
    """Forward-only cursor over the segments of a RubyString.

    Created by ``RubyString.segments()``. Yields alternating plain and
    rubied runs in text order; never revisits a range. Each step is O(1)
    plus the cost of slicing out the yielded text.

    The iterator only reads from the string. Pushing to the string while
    an iterator is live makes that iterator raise RuntimeError on its next
    step, like iterating a dict that changed size. Once exhausted, the
    iterator stays exhausted regardless of later pushes.
    """
    __slots__ = (
        "_string", "_next_text_start", "_next_placement_idx", "_mutations", "_done",
    )

    def __init__(self, string: RubyString) -> None:
        self._string = string
        # Start of the next segment
        self._next_text_start = 0
        # Index of the placement that starts at _next_text_start, or the
        # closest one after it
        self._next_placement_idx = 0
        self._mutations = string.mutation_count
        self._done = False

    @property
    def next_text_start(self) -> int:
        return self._next_text_start

    @property
    def next_placement_idx(self) -> int:
        return self._next_placement_idx

    def __iter__(self) -> SegmentIterator:
        return self

    def __next__(self) -> Segment:
        if self._done:
            raise StopIteration
        string = self._string
        if string.mutation_count != self._mutations:
            raise RuntimeError("RubyString mutated during iteration")

        text = string.packed_text
        if self._next_text_start >= len(text):
            # nothing left at all
            self._done = True
            raise StopIteration

        if self._next_placement_idx >= string.placement_count:
            # only plain text left
            segment = PlainSegment(text[self._next_text_start:])
            self._next_text_start = len(text)
            return segment

        placement = string.placement(self._next_placement_idx)
        if self._next_text_start < placement.text_start:
            # plain text up to the next rubied run
            segment = PlainSegment(text[self._next_text_start:placement.text_start])
            self._next_text_start = placement.text_start
            return segment

        rubied = RubiedSegment(
            text[placement.text_start:placement.text_end],
            string.packed_ruby[placement.ruby_start:placement.ruby_end],
        )
        self._next_text_start = placement.text_end
        self._next_placement_idx += 1
        return rubied

    def copy(self) -> SegmentIterator:
        """Return an independent cursor at the same position."""
        dup = SegmentIterator(self._string)
        dup._next_text_start = self._next_text_start
        dup._next_placement_idx = self._next_placement_idx
        dup._mutations = self._mutations
        dup._done = self._done
        return dup

    __copy__ = copy

    def __repr__(self) -> str:
        return (
            f"SegmentIterator(next_text_start={self._next_text_start}, "
            f"next_placement_idx={self._next_placement_idx})"
        )
