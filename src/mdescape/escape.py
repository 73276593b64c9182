"""Markdown entity escaping for plain text.

Text typed into a visual editor reaches the document tree verbatim, so a
literal "*a*" would turn into emphasis once the tree is serialized. These
functions backslash-escape the delimiters of active entities while leaving
raw HTML tags and preformatted HTML blocks untouched.
"""

import re
from functools import reduce

from mdescape.patterns import ESCAPE_RULES, PROTECTION_PATTERN, CaptureArity, EscapeRule
from mdescape.regex_helper import replace_when

ESCAPE_MARKER = "\\"

# Headings, list items, quotes, setext underlines, tables, indented code
# and fences, when they open the text.
LEADING_MARKER_PATTERN = re.compile(r"^\s*([-#*>=|]| {4,}|`{3,})")


def escape_delimiter(delimiter: str) -> str:
    """Prefix every character of a delimiter with a backslash."""
    return "".join(f"{ESCAPE_MARKER}{char}" for char in delimiter)


def escape_delimiters(rule: EscapeRule, text: str) -> str:
    """Escape the delimiters of every match of rule, keeping their content.

    Args:
        rule: Escape rule whose capture groups hold the delimiters
        text: Input text

    Returns:
        Text with each match rewritten as escaped delimiter(s) around the
        original content
    """

    def _replace(match: re.Match[str]) -> str:
        whole = match.group(0)
        leading = match.group(1)
        trailing = match.group(2) if rule.arity is CaptureArity.SURROUNDING else None
        if trailing is None:
            return escape_delimiter(leading) + whole[len(leading) :]
        content = whole[len(leading) : len(whole) - len(trailing)]
        return escape_delimiter(leading) + content + escape_delimiter(trailing)

    return rule.pattern.sub(_replace, text)


def escape_all_delimiters(text: str) -> str:
    """Run every escape rule over text, in declared order."""
    return reduce(lambda acc, rule: escape_delimiters(rule, acc), ESCAPE_RULES, text)


def escape_common_chars(text: str) -> str:
    """Escape active '*', '_', '~', '`' and '[' entities outside protected HTML."""
    return replace_when(PROTECTION_PATTERN, escape_all_delimiters, text, invert=True)


def escape_leading_chars(text: str) -> str:
    """Escape a block-level marker at the start of text.

    Handles '-', '#', '*', '>', '=', '|', runs of 4+ spaces and runs of 3+
    backticks, preceded by zero or more whitespace characters. The leading
    whitespace is dropped along with the match, e.g. "\\n #" becomes "\\#".
    """
    return LEADING_MARKER_PATTERN.sub(
        lambda match: ESCAPE_MARKER + match.group(1), text, count=1
    )


def escape_all_chars(text: str) -> str:
    """Escape common entities, then a leading block marker.

    Used for text that opens its parent node, where a leading '#' or '-'
    would otherwise start a heading or list item.
    """
    return escape_leading_chars(escape_common_chars(text))
