"""Assemble method-level segments from a Java source file."""

import logging
import re
from dataclasses import replace

from .classes import select_classes
from .methods import extract_methods
from .models import (
    ANONYMOUS,
    UNKNOWN_CLASS,
    ClassMethods,
    ProcessedFile,
    Segment,
)
from .sanitizer import sanitize
from .scanner import build_line_index, line_number_for_offset

logger = logging.getLogger(__name__)

JAVA_FILE_PATTERN = re.compile(r'\.java$', re.IGNORECASE)


def is_java_path(path) -> bool:
    """Whether ``path`` names a ``.java`` file."""
    if not isinstance(path, str):
        return False
    return bool(JAVA_FILE_PATTERN.search(path))


def make_label(class_name: str, method_name: str, signature: str) -> str:
    return f"{class_name or UNKNOWN_CLASS}::{method_name or signature or ANONYMOUS}"


def extract_method_segments(source, path: str | None = None) -> list[Segment]:
    """Method segments in class-major, method-minor source order.

    ``index`` and ``total`` are left at zero; see :func:`build_segments`.
    """
    if not isinstance(source, str) or not source.strip():
        return []

    classes = select_classes(source)
    if not classes:
        logger.debug("No class declarations found in %s", path or "Java file")
        return []

    line_index = build_line_index(source)
    segments = []
    for class_span in classes:
        for method in extract_methods(source, class_span):
            text = sanitize(method.block) or method.block
            segments.append(Segment(
                text=text,
                raw_text=method.block,
                class_name=class_span.class_name,
                method_name=method.method_name,
                method_signature=method.signature,
                label=make_label(class_span.class_name, method.method_name, method.signature),
                start_line=line_number_for_offset(line_index, method.start_index),
                end_line=line_number_for_offset(line_index, method.end_index),
            ))
            logger.debug(
                "%s -> %s lines %d-%d",
                path or "Java file", segments[-1].label,
                segments[-1].start_line, segments[-1].end_line,
            )
    return segments


def build_segments(source, path: str | None = None) -> list[Segment]:
    """Split a Java file into numbered method segments.

    ``path`` only labels log output. Malformed, empty or non-string input
    yields an empty list; this function never raises.
    """
    segments = extract_method_segments(source, path)
    total = len(segments)
    return [
        replace(segment, index=position, total=total)
        for position, segment in enumerate(segments, start=1)
    ]


def process_java_file(source, path: str = "") -> ProcessedFile:
    """Clean a whole file first, then split the cleaned text into method blocks.

    Offsets of the returned method spans refer to ``cleaned_source``.
    """
    cleaned = sanitize(source) if isinstance(source, str) else ""
    result = ProcessedFile(cleaned_source=cleaned)

    label = path or "Java file"
    for class_span in select_classes(cleaned):
        methods = extract_methods(cleaned, class_span)
        result.class_methods.append(ClassMethods(
            class_name=class_span.class_name,
            methods=methods,
        ))
        for method in methods:
            logger.debug("%s -> %s:\n%s", label, class_span.class_name, method.block)

    return result
