"""Low-level scanning primitives: lexical regions, brace matching, line index.

Structure detection never looks at the raw text directly. It runs on a
*masked* copy in which the contents of comments, string literals, char
literals and text blocks are blanked out with spaces. Newlines are kept, so
every offset and line number in the masked copy is valid for the original.
"""

import re
from bisect import bisect_right

CODE = "code"
LINE_COMMENT = "line_comment"
BLOCK_COMMENT = "block_comment"
STRING = "string"
CHAR = "char"
TEXT_BLOCK = "text_block"

COMMENT_KINDS = frozenset({LINE_COMMENT, BLOCK_COMMENT})

_BRACE_RE = re.compile(r"[{}]")
_STRUCTURE_RE = re.compile(r"[{};]")
_LINE_BREAK_RE = re.compile(r"[\r\n]")
_NOT_LINE_BREAK_RE = re.compile(r"[^\r\n]")


def _quoted_end(source: str, pos: int, quote: str) -> int:
    """Return the offset just past the literal closing ``quote``.

    An unterminated literal ends at the next line break (exclusive).
    """
    n = len(source)
    while pos < n:
        char = source[pos]
        if char == "\\":
            pos += 2
            continue
        if char == quote:
            return pos + 1
        if char in "\r\n":
            return pos
        pos += 1
    return n


def _text_block_end(source: str, pos: int) -> int:
    n = len(source)
    while pos < n:
        if source[pos] == "\\":
            pos += 2
            continue
        if source.startswith('"""', pos):
            return pos + 3
        pos += 1
    return n


def lex_regions(source: str, colon_guard: bool = False) -> list[tuple[str, int, int]]:
    """Split source into contiguous ``(kind, start, end)`` regions.

    Regions cover the whole input in order. Comment and literal regions
    include their delimiters; a line comment stops before the line break.
    With ``colon_guard`` a ``//`` directly after ``:`` stays code, which keeps
    URL-like text such as ``http://host`` intact outside string literals.
    """
    regions: list[tuple[str, int, int]] = []
    n = len(source)
    state = CODE
    start = 0
    i = 0

    while i < n:
        if state == CODE:
            char = source[i]
            following = source[i + 1] if i + 1 < n else ""
            if char == "/" and following == "*":
                entered, width = BLOCK_COMMENT, 2
            elif char == "/" and following == "/":
                if colon_guard and i > 0 and source[i - 1] == ":":
                    i += 2
                    continue
                entered, width = LINE_COMMENT, 2
            elif source.startswith('"""', i):
                entered, width = TEXT_BLOCK, 3
            elif char == '"':
                entered, width = STRING, 1
            elif char == "'":
                entered, width = CHAR, 1
            else:
                i += 1
                continue

            if i > start:
                regions.append((CODE, start, i))
            state, start = entered, i
            i += width
            continue

        if state == BLOCK_COMMENT:
            close = source.find("*/", i)
            end = n if close == -1 else close + 2
        elif state == LINE_COMMENT:
            match = _LINE_BREAK_RE.search(source, i)
            end = match.start() if match else n
        elif state == TEXT_BLOCK:
            end = _text_block_end(source, i)
        else:
            end = _quoted_end(source, i, '"' if state == STRING else "'")

        regions.append((state, start, end))
        state, start, i = CODE, end, end

    if start < n:
        regions.append((state, start, n))
    return regions


def mask_source(source: str) -> str:
    """Blank out comment and literal contents, preserving length and newlines."""
    parts = []
    for kind, start, end in lex_regions(source):
        chunk = source[start:end]
        parts.append(chunk if kind == CODE else _NOT_LINE_BREAK_RE.sub(" ", chunk))
    return "".join(parts)


def find_matching_brace(text: str, open_index: int) -> int:
    """Return the offset of the ``}`` balancing the ``{`` at ``open_index``.

    Depth counter: each ``{`` pushes, each ``}`` pops, and the match is the
    brace that brings the depth back to zero. Returns -1 when ``open_index``
    does not hold a ``{`` or the brace is never closed.
    """
    if not isinstance(text, str) or not isinstance(open_index, int):
        return -1
    if not 0 <= open_index < len(text) or text[open_index] != "{":
        return -1

    depth = 0
    for match in _BRACE_RE.finditer(text, open_index):
        if match.group() == "{":
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return match.start()
    return -1


def find_top_level_semicolon(text: str, start: int = 0) -> int:
    """Offset of the first ``;`` outside any brace pair, or -1."""
    depth = 0
    for match in _STRUCTURE_RE.finditer(text, start):
        char = match.group()
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif not depth:
            return match.start()
    return -1


class DepthTracker:
    """Brace depth of one text at monotonically increasing offsets."""

    def __init__(self, text: str):
        self.text = text
        self.offset = 0
        self.depth = 0

    def depth_at(self, offset: int) -> int:
        if offset > self.offset:
            opened = self.text.count("{", self.offset, offset)
            closed = self.text.count("}", self.offset, offset)
            # a stray closing brace never drives the depth negative
            self.depth = max(self.depth + opened - closed, 0)
            self.offset = offset
        return self.depth

    def skip_balanced(self, end: int) -> None:
        """Jump over a balanced region ending just before ``end``."""
        self.offset = max(self.offset, end)


def build_line_index(source: str) -> list[int]:
    """Offsets at which each line starts; line 1 always starts at 0."""
    starts = [0]
    if not isinstance(source, str):
        return starts
    offset = source.find("\n")
    while offset != -1:
        starts.append(offset + 1)
        offset = source.find("\n", offset + 1)
    return starts


def line_number_for_offset(index: list[int], offset: int) -> int:
    """1-based line number containing ``offset``; 1 for any invalid input."""
    if not index or not isinstance(index, (list, tuple)):
        return 1
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        return 1
    return max(1, bisect_right(index, offset))
