"""Comment and package/import stripping for Java source."""

import re

from .scanner import COMMENT_KINDS, lex_regions

PACKAGE_IMPORT_PATTERN = re.compile(
    r'^[ \t]*(?:package|import)[ \t]+[^;\n]+;[ \t]*(?:\n|$)',
    re.MULTILINE | re.IGNORECASE,
)

_NEWLINE_PATTERN = re.compile(r'\r\n?')


def normalize_newlines(source: str) -> str:
    return _NEWLINE_PATTERN.sub("\n", source)


def strip_comments(source: str) -> str:
    """Remove block and line comments.

    Comment markers inside string and char literals are left alone, and a
    ``//`` directly preceded by ``:`` is not treated as a comment start.
    """
    if not source:
        return ""
    return "".join(
        source[start:end]
        for kind, start, end in lex_regions(source, colon_guard=True)
        if kind not in COMMENT_KINDS
    )


def strip_package_and_imports(source: str) -> str:
    """Remove lines holding only a package or import declaration."""
    if not source:
        return ""
    return PACKAGE_IMPORT_PATTERN.sub("", normalize_newlines(source))


def sanitize(source):
    """Strip comments and package/import lines, normalize newlines, trim.

    Non-string input is returned unchanged; this function never raises.
    """
    if not isinstance(source, str):
        return source
    if not source:
        return ""
    text = normalize_newlines(source)
    return strip_package_and_imports(strip_comments(text)).strip()
