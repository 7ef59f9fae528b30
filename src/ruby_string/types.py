"""Segment value types for ruby strings.

A segment is one run of a RubyString: either plain text, or text with
exactly one ruby gloss attached to all of it.

Type hierarchy:
  PlainSegment  : Text with no gloss
  RubiedSegment : Text with one gloss covering the whole text
  Segment       : PlainSegment | RubiedSegment

Consume segments with an exhaustive match::

    match segment:
        case PlainSegment(text=t): ...
        case RubiedSegment(text=t, ruby=r): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# Unicode interlinear annotation characters (U+FFF9..U+FFFB)
INTERLINEAR_ANCHOR = "\ufff9"
INTERLINEAR_SEPARATOR = "\ufffa"
INTERLINEAR_TERMINATOR = "\ufffb"

INTERLINEAR_MARKERS = frozenset(
    (INTERLINEAR_ANCHOR, INTERLINEAR_SEPARATOR, INTERLINEAR_TERMINATOR),
)


def check_text(value: object, field_name: str) -> str:
    """Validate one text field of a segment and return it.

    Raises:
        TypeError: If ``value`` is not a str.
        ValueError: If ``value`` contains an interlinear annotation character.
    """
    if not isinstance(value, str):
        raise TypeError(
            f"{field_name} must be str, got {type(value).__name__}"
        )
    if INTERLINEAR_MARKERS.isdisjoint(value):
        return value
    for idx, ch in enumerate(value):
        if ch in INTERLINEAR_MARKERS:
            raise ValueError(
                f"{field_name} contains interlinear annotation character "
                f"U+{ord(ch):04X} at index {idx}"
            )
    return value


@dataclass(frozen=True, slots=True)
class PlainSegment:
    """A piece of text that has no ruby gloss attached to it."""

    text: str

    def __post_init__(self) -> None:
        check_text(self.text, "text")

    def plain_text(self) -> str:
        return self.text

    def to_interlinear_encoding(self) -> str:
        """Plain text is emitted verbatim, without markers."""
        return self.text


@dataclass(frozen=True, slots=True)
class RubiedSegment:
    """A piece of text with exactly one ruby gloss attached to all of it."""

    text: str
    ruby: str

    def __post_init__(self) -> None:
        check_text(self.text, "text")
        check_text(self.ruby, "ruby")

    def plain_text(self) -> str:
        """Return the base text, ignoring the gloss."""
        return self.text

    def to_interlinear_encoding(self) -> str:
        """Encode as ``ANCHOR text SEPARATOR ruby TERMINATOR``.

        >>> RubiedSegment("東京", "とうきょう").to_interlinear_encoding()
        '\\ufff9東京\\ufffaとうきょう\\ufffb'
        """
        return (
            f"{INTERLINEAR_ANCHOR}{self.text}"
            f"{INTERLINEAR_SEPARATOR}{self.ruby}"
            f"{INTERLINEAR_TERMINATOR}"
        )


Segment: TypeAlias = PlainSegment | RubiedSegment
