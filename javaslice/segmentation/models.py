"""Data models for Java source segmentation."""

from dataclasses import dataclass, field

SEGMENT_KIND = "java_method"
UNKNOWN_CLASS = "UnknownClass"
ANONYMOUS = "(anonymous)"


@dataclass(frozen=True)
class ClassSpan:
    """Body span of a type declaration.

    Offsets are half-open and point into the string that was scanned. The
    body excludes the enclosing braces.
    """
    class_name: str
    body_start: int
    body_end: int
    keyword: str = "class"


@dataclass(frozen=True)
class MethodSpan:
    """A method declaration together with its balanced body."""
    signature: str
    method_name: str
    block: str
    start_index: int
    end_index: int


@dataclass(frozen=True)
class Segment:
    """One method-level unit of output text."""
    text: str
    raw_text: str
    class_name: str
    method_name: str
    method_signature: str
    label: str
    start_line: int
    end_line: int
    kind: str = SEGMENT_KIND
    index: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        """Wire form used by the HTTP API and JSON output."""
        return {
            "text": self.text,
            "rawText": self.raw_text,
            "className": self.class_name,
            "methodName": self.method_name,
            "methodSignature": self.method_signature,
            "label": self.label,
            "kind": self.kind,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "index": self.index,
            "total": self.total,
        }


@dataclass
class ClassMethods:
    """Methods found in one class of a cleaned file."""
    class_name: str
    methods: list[MethodSpan] = field(default_factory=list)


@dataclass
class ProcessedFile:
    """Result of cleaning a whole file and splitting it into method blocks."""
    cleaned_source: str
    class_methods: list[ClassMethods] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "cleanedSource": self.cleaned_source,
            "classMethods": [
                {
                    "className": entry.class_name,
                    "methods": [
                        {"signature": m.signature, "block": m.block}
                        for m in entry.methods
                    ],
                }
                for entry in self.class_methods
            ],
        }
