"""Markdown entity and HTML protection patterns.

Escape rules match active markdown entities, meaning delimiters that are
paired closely enough that a serializer would read them back as syntax.
The patterns are heuristics tuned to remark's leniency, not a grammar.

Protection patterns match spans that must never be escaped: HTML opening
tags (their attribute values may legitimately contain `*` or `_`) and
preformatted HTML blocks whose whole body is literal.
"""

import re
from dataclasses import dataclass
from enum import Enum

from mdescape.regex_helper import combine_patterns, join_pattern_segments


class CaptureArity(str, Enum):
    """How many delimiter groups an escape rule captures."""

    LEADING = "leading"  # (delim)content
    SURROUNDING = "surrounding"  # (delim)content(delim)


@dataclass(frozen=True)
class EscapeRule:
    """A named escape pattern and the shape of its delimiter groups."""

    name: str
    pattern: re.Pattern[str]
    arity: CaptureArity


ESCAPE_RULES: tuple[EscapeRule, ...] = (
    # One or more asterisks on both sides of non-empty content.
    EscapeRule(
        "asterisk_emphasis",
        re.compile(r"(\*+)[^*]+(\1)"),
        CaptureArity.SURROUNDING,
    ),
    # Single underscores followed by a word boundary. Remark ignores whether
    # a boundary precedes the opening underscore.
    EscapeRule(
        "underscore_emphasis",
        re.compile(r"(_)[^_]+(_)\b"),
        CaptureArity.SURROUNDING,
    ),
    # Two or more underscores, no word boundary needed on either side.
    EscapeRule(
        "underscore_strong",
        re.compile(r"(_{2,})[^_]+(\1)"),
        CaptureArity.SURROUNDING,
    ),
    EscapeRule(
        "tilde_strikethrough",
        re.compile(r"(~+)[^~]+(\1)"),
        CaptureArity.SURROUNDING,
    ),
    # Backtick runs may enclose nothing, so "```" escapes its first pair.
    EscapeRule(
        "backtick_code",
        re.compile(r"(`+)[^`]*(\1)"),
        CaptureArity.SURROUNDING,
    ),
    # Links, images and references. Only the opening bracket is escaped,
    # footnote references ("[^1]") are skipped.
    EscapeRule(
        "bracket_link",
        re.compile(r"(\[)(?!\^)[^\]]*\]"),
        CaptureArity.LEADING,
    ),
)

PREFORMATTED_TAGS = ("pre", "style", "script")

# Zero or more quoted attributes, then the closing bracket.
HTML_OPENING_TAG_END = r"""(?:\s*[\w-]+=(?:"[^"]*"|'[^']*'))*\s*>"""

HTML_TAG = (
    rf"<(?!(?:{'|'.join(PREFORMATTED_TAGS)})\b)\w+",
    HTML_OPENING_TAG_END,
)

PREFORMATTED_HTML_BLOCK = (
    rf"<(?P<preformatted_tag>{'|'.join(PREFORMATTED_TAGS)})",
    HTML_OPENING_TAG_END,
    r"(?s:.*?)",
    r"</(?P=preformatted_tag)>",
)


def build_protection_pattern() -> re.Pattern[str]:
    """Pattern matching any span that must be left unescaped."""
    return combine_patterns(
        [
            join_pattern_segments(HTML_TAG),
            join_pattern_segments(PREFORMATTED_HTML_BLOCK),
        ]
    )


PROTECTION_PATTERN = build_protection_pattern()
