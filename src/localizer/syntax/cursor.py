"""Immutable cursor infrastructure for the hand-written parsers.

Both the properties parser and the message-template parser walk their
input with this cursor.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)

Line Ending Support:
    LF, CRLF and CR-only are all line terminators. The properties format
    accepts all three, so skip_line_end() consumes each of them as one
    terminator.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["BLANKS", "Cursor"]

# Whitespace inside a properties line: space, tab, form feed.
BLANKS = frozenset(" \t\f")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor."""
        return self.source[self.pos : self.pos + n]

    def skip_blanks(self) -> "Cursor":
        """Skip spaces, tabs and form feeds (never line terminators).

        Example:
            >>> Cursor(" \\t\\fkey", 0).skip_blanks().current
            'k'
        """
        c = self
        while not c.is_eof and c.current in BLANKS:
            c = c.advance()
        return c

    def skip_line_end(self) -> "Cursor":
        """Skip LF, CR, or CRLF line ending.

        Returns:
            New cursor advanced past the line ending, or unchanged if not at line end.
        """
        if self.is_eof:
            return self
        if self.current == "\r":
            cursor = self.advance()
            if not cursor.is_eof and cursor.current == "\n":
                return cursor.advance()
            return cursor
        if self.current == "\n":
            return self.advance()
        return self

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line terminator without consuming it."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    @property
    def at_line_end(self) -> bool:
        """True at EOF or on a line terminator."""
        return self.is_eof or self.current in ("\n", "\r")
