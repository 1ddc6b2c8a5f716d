"""Java source segmentation into method-level units."""

from .builder import build_segments, extract_method_segments, is_java_path, process_java_file
from .classes import extract_classes, select_classes
from .methods import extract_methods
from .models import ClassMethods, ClassSpan, MethodSpan, ProcessedFile, Segment
from .sanitizer import sanitize, strip_comments, strip_package_and_imports
from .scanner import build_line_index, find_matching_brace, line_number_for_offset

__all__ = [
    "build_segments",
    "extract_method_segments",
    "is_java_path",
    "process_java_file",
    "extract_classes",
    "select_classes",
    "extract_methods",
    "ClassMethods",
    "ClassSpan",
    "MethodSpan",
    "ProcessedFile",
    "Segment",
    "sanitize",
    "strip_comments",
    "strip_package_and_imports",
    "build_line_index",
    "find_matching_brace",
    "line_number_for_offset",
]
