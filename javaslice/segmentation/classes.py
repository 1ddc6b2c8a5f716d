"""Top-level class, interface and enum detection."""

import re

from .models import ClassSpan
from .scanner import DepthTracker, find_matching_brace, mask_source

IDENTIFIER = r'[A-Za-z_$][\w$]*'

CLASS_MODIFIERS = r'(?:(?:abstract|final|static|strictfp|sealed|non-sealed)\s+)*'


def type_declaration_pattern(require_public: bool) -> re.Pattern:
    """Pattern for a type declaration up to and including its opening brace.

    Both variants share everything after the optional ``public`` prefix.
    """
    prefix = r'\bpublic\s+' + CLASS_MODIFIERS if require_public else ''
    return re.compile(
        prefix
        + r'(?<![\w$.])(?P<keyword>class|interface|enum)\s+'
        + r'(?P<name>' + IDENTIFIER + r')[^{]*\{'
    )


PUBLIC_TYPE_PATTERN = type_declaration_pattern(require_public=True)
ANY_TYPE_PATTERN = type_declaration_pattern(require_public=False)


def scan_type_declarations(masked: str, pattern: re.Pattern) -> list[ClassSpan]:
    """Find brace-depth-zero declarations matching ``pattern`` in masked text.

    Scanning resumes strictly after each matched closing brace, so spans come
    back in source order and never overlap.
    """
    spans = []
    tracker = DepthTracker(masked)
    pos = 0

    while True:
        match = pattern.search(masked, pos)
        if not match:
            break

        if tracker.depth_at(match.start()):
            pos = match.start() + 1
            continue

        open_index = match.end() - 1
        close_index = find_matching_brace(masked, open_index)
        if close_index == -1:
            pos = match.end()
            continue

        spans.append(ClassSpan(
            class_name=match.group("name"),
            body_start=open_index + 1,
            body_end=close_index,
            keyword=match.group("keyword"),
        ))
        pos = close_index + 1
        tracker.skip_balanced(pos)

    return spans


def extract_classes(source: str, prefer_public: bool) -> list[ClassSpan]:
    """Top-level type body spans, restricted to ``public`` ones when asked."""
    if not isinstance(source, str) or not source.strip():
        return []
    pattern = PUBLIC_TYPE_PATTERN if prefer_public else ANY_TYPE_PATTERN
    return scan_type_declarations(mask_source(source), pattern)


def select_classes(source: str) -> list[ClassSpan]:
    """Public types if the file declares any, otherwise every type found."""
    return extract_classes(source, prefer_public=True) or extract_classes(
        source, prefer_public=False
    )
