"""RubyString: a string type with ruby glosses attached to parts of it.

Memory layout
-------------
Text is held in two strings: the main text, and the concatenation of all
rubies. Placement of each ruby is stored as a list of offsets into both
strings. Compared to holding each rubied substring as a separate object,
this layout keeps the number of allocations independent of the number of
glosses, at the cost of slightly more involved indexing.

All offsets are char offsets (str indices), never byte offsets.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ruby_string.iterator import SegmentIterator
from ruby_string.types import PlainSegment, RubiedSegment, Segment, check_text


@dataclass(frozen=True, slots=True)
class Placement:
    """Offsets of one rubied run in the packed text and packed ruby.

    Invariants (enforced in __post_init__):
        - 0 <= text_start <= text_end
        - 0 <= ruby_start <= ruby_end

    Ordering across placements (each text_start >= the previous text_end)
    holds because RubyString only ever appends.
    """
    text_start: int   # Char offset (inclusive) in packed_text
    text_end: int     # Char offset (exclusive) in packed_text
    ruby_start: int   # Char offset (inclusive) in packed_ruby
    # Redundant with the next placement's ruby_start (or len(packed_ruby)
    # for the last one), kept so every placement is self-describing.
    ruby_end: int

    def __post_init__(self) -> None:
        if self.text_start < 0 or self.ruby_start < 0:
            raise ValueError(
                f"Placement offsets must be >= 0, got text_start={self.text_start}, "
                f"ruby_start={self.ruby_start}"
            )
        if self.text_end < self.text_start:
            raise ValueError(
                f"Placement.text_end ({self.text_end}) must be >= "
                f"text_start ({self.text_start})"
            )
        if self.ruby_end < self.ruby_start:
            raise ValueError(
                f"Placement.ruby_end ({self.ruby_end}) must be >= "
                f"ruby_start ({self.ruby_start})"
            )


class RubyString:
    """A string that can have ruby glosses attached to parts of it.

    Append-only: text can be pushed at the end, but never removed, edited
    in place or spliced. This is what allows placements to live in a flat
    ordered list instead of an interval structure.

    Usage::

        rs = RubyString()
        rs.push_str("ここは")
        rs.push_segment(RubiedSegment("東", "とう"))
        rs.push_segment(RubiedSegment("京", "きょう"))
        rs.push_str("です")
        rs.to_plain_text()             # "ここは東京です"
        [s for s in rs.segments()]     # 4 segments
    """
    __slots__ = ("_packed_text", "_packed_ruby", "_placements", "_mutations")

    def __init__(self, text: str = "") -> None:
        self._packed_text = check_text(text, "text")
        self._packed_ruby = ""
        self._placements: list[Placement] = []
        # Bumped on every push; live iterators compare against it.
        self._mutations = 0

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> RubyString:
        """Build a RubyString by pushing each segment in order."""
        rs = cls()
        rs.extend(segments)
        return rs

    @property
    def packed_text(self) -> str:
        return self._packed_text

    @property
    def packed_ruby(self) -> str:
        return self._packed_ruby

    @property
    def placements(self) -> tuple[Placement, ...]:
        """Placements in text order (read-only snapshot)."""
        return tuple(self._placements)

    @property
    def placement_count(self) -> int:
        return len(self._placements)

    def placement(self, idx: int) -> Placement:
        """Return one placement without copying the whole list."""
        return self._placements[idx]

    @property
    def mutation_count(self) -> int:
        return self._mutations

    # -- mutation ----------------------------------------------------------

    def push_str(self, text: str) -> None:
        """Append plain text (without a ruby gloss)."""
        self._packed_text += check_text(text, "text")
        self._mutations += 1

    def push_segment(self, segment: Segment) -> None:
        """Append a segment. Rubied segments record a new placement."""
        match segment:
            case PlainSegment(text=text):
                self.push_str(text)
            case RubiedSegment(text=text, ruby=ruby):
                text_start = len(self._packed_text)
                ruby_start = len(self._packed_ruby)
                self._packed_text += text
                self._packed_ruby += ruby
                self._placements.append(Placement(
                    text_start=text_start,
                    text_end=text_start + len(text),
                    ruby_start=ruby_start,
                    ruby_end=ruby_start + len(ruby),
                ))
                self._mutations += 1
            case _:
                raise TypeError(
                    f"expected PlainSegment or RubiedSegment, got "
                    f"{type(segment).__name__}"
                )

    def extend(self, segments: Iterable[Segment]) -> None:
        for segment in segments:
            self.push_segment(segment)

    # -- export ------------------------------------------------------------

    def to_plain_text(self) -> str:
        """Return the text with all ruby glosses dropped."""
        return self._packed_text

    def to_interlinear_encoding(self) -> str:
        """Encode as one string using interlinear annotation characters.

        Each rubied run becomes ``U+FFF9 text U+FFFA ruby U+FFFB``; plain
        runs are emitted verbatim.
        """
        return "".join(s.to_interlinear_encoding() for s in self.segments())

    def segments(self) -> SegmentIterator:
        """Return a new, independent iterator over the segments."""
        return SegmentIterator(self)

    # -- protocol ----------------------------------------------------------

    def copy(self) -> RubyString:
        dup = RubyString(self._packed_text)
        dup._packed_ruby = self._packed_ruby
        dup._placements = list(self._placements)
        return dup

    __copy__ = copy

    def __iter__(self) -> Iterator[Segment]:
        return self.segments()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RubyString):
            return NotImplemented
        return (
            self._packed_text == other._packed_text
            and self._packed_ruby == other._packed_ruby
            and self._placements == other._placements
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"RubyString({len(self._packed_text)} chars, "
            f"{len(self._placements)} rubies)"
        )
