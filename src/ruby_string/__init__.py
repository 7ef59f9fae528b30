"""A string type that can have ruby glosses attached to parts of it.

See https://en.wikipedia.org/wiki/Ruby_character for the concept.
"""

from ruby_string.io_utils import (
    iter_jsonl,
    load_ruby_string,
    ruby_string_from_records,
    ruby_string_segments,
    ruby_string_to_records,
    save_jsonl,
    save_ruby_string,
    segment_from_record,
    segment_to_record,
)
from ruby_string.iterator import SegmentIterator
from ruby_string.string import Placement, RubyString
from ruby_string.types import (
    INTERLINEAR_ANCHOR,
    INTERLINEAR_MARKERS,
    INTERLINEAR_SEPARATOR,
    INTERLINEAR_TERMINATOR,
    PlainSegment,
    RubiedSegment,
    Segment,
)

__all__ = [
    "INTERLINEAR_ANCHOR",
    "INTERLINEAR_MARKERS",
    "INTERLINEAR_SEPARATOR",
    "INTERLINEAR_TERMINATOR",
    "Placement",
    "PlainSegment",
    "RubiedSegment",
    "RubyString",
    "Segment",
    "SegmentIterator",
    "iter_jsonl",
    "load_ruby_string",
    "ruby_string_from_records",
    "ruby_string_segments",
    "ruby_string_to_records",
    "save_jsonl",
    "save_ruby_string",
    "segment_from_record",
    "segment_to_record",
]

__version__ = "0.1.0"
