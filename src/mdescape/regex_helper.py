"""Regular expression helpers: pattern combinators and segment filtering."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

PatternLike = str | re.Pattern[str]


@dataclass(frozen=True)
class Segment:
    """A slice of the input text, tagged by whether a pattern matched it."""

    index: int
    text: str
    is_match: bool

    @property
    def span(self) -> tuple[int, int, bool]:
        """(start, length, is_match) view of the segment."""
        return (self.index, len(self.text), self.is_match)


def _source(pattern: PatternLike) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def join_pattern_segments(fragments: Iterable[PatternLike], flags: int = 0) -> re.Pattern[str]:
    """Concatenate pattern fragments into a single pattern.

    Fragment sources are joined in order; capture groups and backreferences
    are left untouched, so a later fragment may refer to a group opened by an
    earlier one. Flags on compiled fragments are ignored, pass them here.

    Example:
        tag = join_pattern_segments([r"<(?P<name>\\w+)>", r".*?", r"</(?P=name)>"])
    """
    return re.compile("".join(_source(f) for f in fragments), flags)


def combine_patterns(patterns: Iterable[PatternLike], flags: int = 0) -> re.Pattern[str]:
    """Combine patterns into one that matches wherever any of them matches.

    Each source is wrapped in a non-capturing group and joined by alternation.
    Numbered groups shift once patterns are combined; use named groups for
    backreferences that must survive.
    """
    return re.compile("|".join(f"(?:{_source(p)})" for p in patterns), flags)


def split_segments(pattern: re.Pattern[str], text: str) -> list[Segment]:
    """Split text into contiguous segments of matched and unmatched text.

    Segments are ordered, never overlap, never empty, and together cover the
    whole string. Text with no match is returned as a single unmatched segment.
    """
    segments: list[Segment] = []
    end = 0

    for match in pattern.finditer(text):
        if match.start() == match.end():
            continue
        if match.start() > end:
            segments.append(Segment(end, text[end : match.start()], False))
        segments.append(Segment(match.start(), match.group(0), True))
        end = match.end()

    if end < len(text):
        segments.append(Segment(end, text[end:], False))

    return segments


def replace_when(
    pattern: re.Pattern[str],
    replace: Callable[[str], str],
    text: str,
    invert: bool = False,
) -> str:
    """Apply replace to the parts of text matched by pattern.

    With invert=True, replace runs on the text between matches instead, and
    matched text passes through verbatim. The segments are reassembled in
    their original order.

    Args:
        pattern: Pattern deciding which segments are replaced
        replace: Text transformation applied to the selected segments
        text: Input text
        invert: Apply replace to unmatched segments rather than matched ones

    Returns:
        Reassembled text
    """
    if pattern.search(text) is None:
        return replace(text) if invert else text

    return "".join(
        replace(segment.text) if segment.is_match != invert else segment.text
        for segment in split_segments(pattern, text)
    )
