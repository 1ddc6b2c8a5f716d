"""Method declaration detection inside a class body."""

import re

from .classes import IDENTIFIER
from .models import ClassSpan, MethodSpan
from .scanner import (
    DepthTracker,
    find_matching_brace,
    find_top_level_semicolon,
    mask_source,
)

METHOD_MODIFIERS = (
    "public", "protected", "private", "static", "final", "native",
    "synchronized", "abstract", "transient", "volatile", "strictfp",
)

# A declaration starts the class body or follows a ``;``, ``{`` or ``}``.
# Annotations before it are matched but not part of the block.
METHOD_PATTERN = re.compile(
    r'(?:\A|(?<=[;{}]))\s*'
    r'(?:@[\w$.]+(?:\s*\([^()]*\))?\s+)*'
    r'(?P<decl>(?=[A-Za-z_$<])(?!new\b)'
    r'(?:(?:' + '|'.join(METHOD_MODIFIERS) + r')\s+)*'
    r'[\w$<>\[\],.?\s]*?'
    r'(?P<name>' + IDENTIFIER + r')\s*'
    r'\([^;{}]*\)\s*'
    r'(?:throws\s+[^;{}]+)?'
    r'\{)'
)

_WHITESPACE = re.compile(r'\s+')
_SPACE_BEFORE_PAREN = re.compile(r'\s*\(')


def clean_signature(signature: str) -> str:
    """Collapse whitespace runs and drop any space before ``(``."""
    if not isinstance(signature, str):
        return ""
    collapsed = _WHITESPACE.sub(" ", signature)
    return _SPACE_BEFORE_PAREN.sub("(", collapsed).strip()


def extract_methods(source: str, class_span: ClassSpan) -> list[MethodSpan]:
    """Methods declared directly in ``class_span``'s body, in source order.

    Only declarations at brace depth zero of the body are considered, so
    nested type bodies and initializer blocks are never split into methods.
    In an enum the constant list, and any constant bodies, come before the
    first top-level ``;`` and are skipped.
    Offsets in the returned spans are absolute within ``source``.
    """
    methods = []
    if not isinstance(source, str) or not isinstance(class_span, ClassSpan):
        return methods
    base, end = class_span.body_start, class_span.body_end
    if not 0 <= base <= end <= len(source):
        return methods

    masked = mask_source(source[base:end])
    tracker = DepthTracker(masked)
    pos = 0
    if class_span.keyword == "enum":
        members = find_top_level_semicolon(masked)
        if members == -1:
            return methods
        pos = members + 1

    while True:
        match = METHOD_PATTERN.search(masked, pos)
        if not match:
            break

        if tracker.depth_at(match.start()):
            pos = match.start() + 1
            continue

        open_index = match.end("decl") - 1
        close_index = find_matching_brace(masked, open_index)
        if close_index == -1:
            pos = match.end()
            continue
        pos = close_index + 1
        tracker.skip_balanced(pos)

        start_index = base + match.start("decl")
        end_index = base + close_index
        block = source[start_index:end_index + 1]
        if not block.strip():
            continue

        methods.append(MethodSpan(
            signature=clean_signature(source[start_index:base + open_index]),
            method_name=match.group("name"),
            block=block,
            start_index=start_index,
            end_index=end_index,
        ))

    return methods
