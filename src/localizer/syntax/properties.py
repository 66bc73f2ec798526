"""Properties-file parser.

Reads the line-oriented key/value format accepted by
java.util.Properties.load(): the format resource bundles are written in.

Format summary:
    - Natural lines end with LF, CR, or CRLF
    - Blank lines are ignored
    - A line whose first non-blank character is '#' or '!' is a comment
    - A line ending in an odd number of backslashes continues on the next
      line; leading blanks of the continuation line are dropped
    - The key runs up to the first unescaped '=', ':' or blank; blanks and
      at most one '=' or ':' separate it from the value
    - Escapes: \\t \\n \\r \\f, \\uXXXX, and backslash + any other character
      yields that character
    - A repeated key keeps its first position and takes the last value

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from pathlib import Path

from localizer.constants import DEFAULT_ENCODING
from localizer.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    PropertiesSyntaxError,
    ResourceReadError,
)
from localizer.types import MessageTable

from .cursor import BLANKS, Cursor

__all__ = ["load_properties", "parse_properties"]

logger = logging.getLogger(__name__)

_SEPARATORS = frozenset("=:")
_CONTROL_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SURROGATE_FIRST = "\ud800"
_SURROGATE_LAST = "\udfff"


def _location(line: int, path: Path | None) -> str:
    return f"{path}:{line}" if path is not None else f"line {line}"


def _logical_lines(source: str) -> list[tuple[int, str]]:
    """Split source into logical lines, dropping blanks and comments.

    Line numbers are counted during the single pass over the source.

    Returns:
        (1-indexed start line, logical line text) pairs. Continuation
        backslashes are removed and continuation lines are joined.
    """
    lines: list[tuple[int, str]] = []
    cursor = Cursor(source, 0)
    line = 1

    while not cursor.is_eof:
        cursor = cursor.skip_blanks()
        if cursor.is_eof:
            break
        if cursor.at_line_end:
            cursor = cursor.skip_line_end()
            line += 1
            continue
        if cursor.current in ("#", "!"):
            # Comments never continue, whatever they end with.
            cursor = cursor.skip_to_line_end()
            if not cursor.is_eof:
                cursor = cursor.skip_line_end()
                line += 1
            continue

        start_line = line
        parts: list[str] = []
        while True:
            end = cursor.skip_to_line_end()
            segment = cursor.slice_to(end.pos)
            trailing = len(segment) - len(segment.rstrip("\\"))
            if trailing % 2 == 0 or end.is_eof:
                parts.append(segment if trailing % 2 == 0 else segment[:-1])
                cursor = end
                if not end.is_eof:
                    cursor = end.skip_line_end()
                    line += 1
                break
            parts.append(segment[:-1])
            cursor = end.skip_line_end().skip_blanks()
            line += 1
        lines.append((start_line, "".join(parts)))

    return lines


def _split_entry(line: str) -> tuple[str, str]:
    """Split one logical line into raw (still escaped) key and value."""
    key_end = len(line)
    value_start = len(line)
    has_separator = False
    escaped = False

    for index, char in enumerate(line):
        if char == "\\":
            escaped = not escaped
            continue
        if not escaped and (char in _SEPARATORS or char in BLANKS):
            key_end = index
            value_start = index + 1
            has_separator = char in _SEPARATORS
            break
        escaped = False

    index = value_start
    while index < len(line):
        char = line[index]
        if char in BLANKS:
            index += 1
        elif not has_separator and char in _SEPARATORS:
            has_separator = True
            index += 1
        else:
            break

    return line[:key_end], line[index:]


def _unescape(text: str, line: int, path: Path | None) -> str:
    """Resolve backslash escapes in a key or value.

    Raises:
        PropertiesSyntaxError: On a malformed \\uXXXX escape or an
            unpaired surrogate escape
    """
    if "\\" not in text:
        return text

    out: list[str] = []
    cursor = Cursor(text, 0)
    while not cursor.is_eof:
        char = cursor.current
        cursor = cursor.advance()
        if char != "\\" or cursor.is_eof:
            out.append(char)
            continue

        escape = cursor.current
        cursor = cursor.advance()
        if escape == "u":
            digits = cursor.slice_ahead(4)
            if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.RESOURCE_MALFORMED_ESCAPE,
                    message=f"Malformed \\uxxxx encoding: \\u{digits}",
                    location=_location(line, path),
                    hint="A \\u escape needs exactly four hexadecimal digits",
                )
                raise PropertiesSyntaxError(diagnostic, path=path, line=line)
            out.append(chr(int(digits, 16)))
            cursor = cursor.advance(4)
        else:
            out.append(_CONTROL_ESCAPES.get(escape, escape))

    result = "".join(out)
    if not any(_SURROGATE_FIRST <= char <= _SURROGATE_LAST for char in result):
        return result

    # \uXXXX escapes are UTF-16 code units: a supplementary character
    # arrives as a high/low surrogate pair and must be joined.
    try:
        return result.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_MALFORMED_ESCAPE,
            message=f"Unpaired surrogate in \\uxxxx encoding: {e.reason}",
            location=_location(line, path),
            hint="A \\uD800-\\uDBFF escape must be followed by a \\uDC00-\\uDFFF escape",
        )
        raise PropertiesSyntaxError(diagnostic, path=path, line=line) from e


def parse_properties(source: str, *, path: Path | None = None) -> MessageTable:
    """Parse properties source text into an ordered key/template table.

    Args:
        source: Properties file content
        path: Originating file, used in error messages only

    Returns:
        Insertion-ordered mapping of key to template

    Raises:
        PropertiesSyntaxError: On a malformed or unpaired-surrogate \\uXXXX escape

    Example:
        >>> parse_properties("greeting.hello = Hello, {0}!\\nfarewell.bye: Bye!")
        {'greeting.hello': 'Hello, {0}!', 'farewell.bye': 'Bye!'}
    """
    table: MessageTable = {}
    for line, logical in _logical_lines(source):
        raw_key, raw_value = _split_entry(logical)
        key = _unescape(raw_key, line, path)
        if key in table:
            logger.debug("Duplicate key '%s' at line %d overrides earlier value", key, line)
        table[key] = _unescape(raw_value, line, path)
    return table


def load_properties(path: Path, *, encoding: str = DEFAULT_ENCODING) -> MessageTable:
    """Read and parse a properties file.

    Args:
        path: File to read
        encoding: Text encoding of the file

    Returns:
        Insertion-ordered mapping of key to template

    Raises:
        ResourceReadError: If the file cannot be read or decoded
        PropertiesSyntaxError: On a malformed \\uXXXX escape
    """
    try:
        # newline="" keeps CR-only terminators visible to the parser.
        with path.open(encoding=encoding, newline="") as stream:
            source = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_UNREADABLE,
            message=f"Cannot read resource file {path}: {e}",
            location=str(path),
        )
        raise ResourceReadError(diagnostic, path=path) from e
    return parse_properties(source, path=path)
