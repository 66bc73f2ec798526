"""MessageFormat-compatible template parsing and rendering.

Implements the positional placeholder syntax of java.text.MessageFormat,
the substitution engine resource-bundle templates are written for:

    Hello, {0}!                        plain argument
    {0,number} {0,number,integer}      number, integer, percent, currency,
    {0,number,#,##0.00}                or a custom CLDR number pattern
    {1,date,short} {1,time,HH:mm}      date/time with style or pattern
    {0,choice,0#no files|1#one file|1<{0} files}
    It''s '{quoted}'                   '' is a quote, '...' is literal text

Rendering rules that the argument-count inferencer relies on:
    - A placeholder whose index is not covered by the arguments renders
      as '{index}', whatever its format type
    - A None argument renders as 'null'
    - Choice results containing '{' are rendered again as templates with
      the same arguments

Malformed templates raise TemplateSyntaxError; nothing here loops on
bad input.

Python 3.13+. Uses Babel for i18n.
"""

import functools
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import TypeAlias

from babel import numbers as babel_numbers

from localizer.constants import DEFAULT_LOCALE, MAX_ARGUMENT_INDEX
from localizer.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    FormattingError,
    TemplateSyntaxError,
)
from localizer.syntax.cursor import Cursor

from .locale_context import DATE_STYLES, LocaleContext

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Parsed structure
    "FormatType",
    "ChoiceFormat",
    "Placeholder",
    "TextPart",
    "MessageTemplate",
    # Entry points
    "parse_template",
    "format_message",
]

_ARGUMENT_INDEX_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_NUMBER_STYLES = frozenset({"", "integer", "percent", "currency"})

_TEXT, _INDEX, _TYPE, _STYLE = range(4)


class FormatType(StrEnum):
    """Format type of a placeholder (the second comma-separated segment)."""

    NONE = ""
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    CHOICE = "choice"


@dataclass(frozen=True, slots=True)
class TextPart:
    """Literal text between placeholders (quotes already resolved)."""

    text: str


@dataclass(frozen=True, slots=True)
class ChoiceFormat:
    """Parsed choice style: ascending limits, each selecting a format.

    A number selects the format of the greatest limit not above it; a
    number below every limit selects the first format.

    Example:
        >>> choice = ChoiceFormat.parse("0#none|1#one|1<many", template="", position=0)
        >>> choice.select(0), choice.select(1), choice.select(5)
        ('none', 'one', 'many')
    """

    limits: tuple[float, ...]
    formats: tuple[str, ...]

    @staticmethod
    def parse(pattern: str, *, template: str, position: int) -> "ChoiceFormat":
        """Parse a choice pattern such as '0#none|1#one|1<many'.

        Raises:
            TemplateSyntaxError: If a limit is missing or not a number, or
                the limits are not strictly ascending
        """
        limits: list[float] = []
        formats: list[str] = []
        segments = ["", ""]
        part = 0
        start_value = 0.0
        previous = -math.inf
        has_previous = False
        in_quote = False

        cursor = Cursor(pattern, 0)
        while not cursor.is_eof:
            char = cursor.current
            if char == "'":
                if cursor.peek(1) == "'":
                    segments[part] += char
                    cursor = cursor.advance()
                else:
                    in_quote = not in_quote
            elif in_quote:
                segments[part] += char
            elif char in ("<", "#", "≤"):
                start_value = _parse_limit(segments[0], template=template, position=position)
                if char == "<" and not math.isinf(start_value):
                    start_value = math.nextafter(start_value, math.inf)
                if has_previous and start_value <= previous:
                    raise _syntax_error(
                        DiagnosticCode.TEMPLATE_BAD_CHOICE,
                        "Incorrect order of intervals, must be in ascending order",
                        template,
                        position,
                    )
                segments[0] = ""
                part = 1
            elif char == "|":
                limits.append(start_value)
                formats.append(segments[1])
                previous = start_value
                has_previous = True
                segments[1] = ""
                part = 0
            else:
                segments[part] += char
            cursor = cursor.advance()

        if part == 1:
            limits.append(start_value)
            formats.append(segments[1])

        if not limits:
            raise _syntax_error(
                DiagnosticCode.TEMPLATE_BAD_CHOICE,
                "Choice pattern has no intervals",
                template,
                position,
            )
        return ChoiceFormat(limits=tuple(limits), formats=tuple(formats))

    def select(self, number: float) -> str:
        """Return the format selected by number."""
        index = 0
        while index < len(self.limits) and number >= self.limits[index]:
            index += 1
        return self.formats[max(index - 1, 0)]


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One '{index[,type[,style]]}' element.

    Attributes:
        index: Zero-based argument index
        format_type: Format type keyword
        style: Style keyword or custom pattern ('' when absent)
        position: Offset of the opening brace in the template
        choice: Parsed choice style (CHOICE placeholders only)
    """

    index: int
    format_type: FormatType = FormatType.NONE
    style: str = ""
    position: int = 0
    choice: ChoiceFormat | None = None


TemplatePart: TypeAlias = TextPart | Placeholder


@dataclass(frozen=True, slots=True)
class MessageTemplate:
    """Parsed template: literal text and placeholders in source order."""

    source: str
    parts: tuple[TemplatePart, ...]

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """Placeholders in source order."""
        return tuple(part for part in self.parts if isinstance(part, Placeholder))

    def max_argument_count(self) -> int:
        """Highest referenced argument index + 1, including choice sub-templates.

        Example:
            >>> parse_template("{0} and {2}").max_argument_count()
            3
        """
        count = 0
        for placeholder in self.placeholders:
            count = max(count, placeholder.index + 1)
            if placeholder.choice is not None:
                for sub in placeholder.choice.formats:
                    if "{" in sub:
                        count = max(count, parse_template(sub).max_argument_count())
        return count

    def format(self, args: Sequence[object], context: LocaleContext) -> str:
        """Render the template against positional arguments.

        Raises:
            FormattingError: If an argument does not fit its placeholder's
                format type (e.g. a string for {0,number})
            TemplateSyntaxError: If a choice result is itself malformed
        """
        out: list[str] = []
        for part in self.parts:
            if isinstance(part, TextPart):
                out.append(part.text)
            elif part.index >= len(args):
                out.append(f"{{{part.index}}}")
            else:
                out.append(_format_argument(part, args[part.index], args, context))
        return "".join(out)


def _syntax_error(code: DiagnosticCode, message: str, template: str, position: int) -> TemplateSyntaxError:
    diagnostic = Diagnostic(
        code=code,
        message=message,
        location=f"offset {position} in {template!r}",
    )
    return TemplateSyntaxError(diagnostic, template=template, position=position)


def _parse_limit(text: str, *, template: str, position: int) -> float:
    stripped = text.strip()
    if not stripped:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_BAD_CHOICE,
            "Each interval must contain a number before a format",
            template,
            position,
        )
    if stripped == "∞":
        return math.inf
    if stripped == "-∞":
        return -math.inf
    try:
        return float(stripped)
    except ValueError:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_BAD_CHOICE,
            f"Choice limit is not a number: {stripped!r}",
            template,
            position,
        ) from None


def _make_placeholder(segments: list[str], template: str, position: int) -> Placeholder:
    """Build a Placeholder from the index/type/style segments."""
    raw_index = segments[_INDEX]
    if not _ARGUMENT_INDEX_RE.fullmatch(raw_index):
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_BAD_ARGUMENT_INDEX,
            f"Can't parse argument number: {raw_index!r}",
            template,
            position,
        )
    index = int(raw_index)
    if index < 0:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_BAD_ARGUMENT_INDEX,
            f"Negative argument number: {index}",
            template,
            position,
        )
    if index >= MAX_ARGUMENT_INDEX:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_BAD_ARGUMENT_INDEX,
            f"Argument index too large: {index}",
            template,
            position,
        )

    keyword = segments[_TYPE].strip().lower()
    try:
        format_type = FormatType(keyword)
    except ValueError:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_UNKNOWN_FORMAT_TYPE,
            f"Unknown format type: {segments[_TYPE]!r}",
            template,
            position,
        ) from None

    style = segments[_STYLE]
    match format_type:
        case FormatType.NUMBER:
            if style.strip().lower() not in _NUMBER_STYLES:
                try:
                    babel_numbers.parse_pattern(style)
                except ValueError as e:
                    raise _syntax_error(
                        DiagnosticCode.TEMPLATE_UNKNOWN_FORMAT_TYPE,
                        f"Invalid number pattern {style!r}: {e}",
                        template,
                        position,
                    ) from e
        case FormatType.CHOICE:
            choice = ChoiceFormat.parse(style, template=template, position=position)
            return Placeholder(index, format_type, style, position, choice)
        case FormatType.NONE if style:
            # '{0,,x}' has a style but no type; MessageFormat ignores it.
            style = ""

    return Placeholder(index, format_type, style, position)


@functools.lru_cache(maxsize=1024)
def parse_template(template: str) -> MessageTemplate:
    """Parse template text into literal parts and placeholders.

    Args:
        template: MessageFormat template

    Returns:
        Parsed MessageTemplate (cached per template text)

    Raises:
        TemplateSyntaxError: On unmatched braces, a non-numeric or negative
            argument index, an unknown format type, or a bad choice style

    Example:
        >>> [type(p).__name__ for p in parse_template("Hi {0}!").parts]
        ['TextPart', 'Placeholder', 'TextPart']
    """
    parts: list[TemplatePart] = []
    segments = ["", "", "", ""]
    part = _TEXT
    in_quote = False
    brace_depth = 0
    element_start = 0

    cursor = Cursor(template, 0)
    while not cursor.is_eof:
        char = cursor.current
        if part == _TEXT:
            if char == "'":
                if cursor.peek(1) == "'":
                    segments[_TEXT] += char
                    cursor = cursor.advance()
                else:
                    in_quote = not in_quote
            elif char == "{" and not in_quote:
                if segments[_TEXT]:
                    parts.append(TextPart(segments[_TEXT]))
                segments = ["", "", "", ""]
                part = _INDEX
                element_start = cursor.pos
            else:
                segments[_TEXT] += char
        elif in_quote:
            # Quotes inside a style stay in the style for its own parser.
            segments[part] += char
            if char == "'":
                in_quote = False
        else:
            match char:
                case "," if part < _STYLE:
                    part += 1
                case "{":
                    brace_depth += 1
                    segments[part] += char
                case "}" if brace_depth == 0:
                    parts.append(_make_placeholder(segments, template, element_start))
                    segments = ["", "", "", ""]
                    part = _TEXT
                case "}":
                    brace_depth -= 1
                    segments[part] += char
                case " " if part == _TYPE and not segments[_TYPE]:
                    pass
                case "'":
                    in_quote = True
                    segments[part] += char
                case _:
                    segments[part] += char
        cursor = cursor.advance()

    if part != _TEXT:
        raise _syntax_error(
            DiagnosticCode.TEMPLATE_UNMATCHED_BRACES,
            "Unmatched braces in the pattern",
            template,
            element_start,
        )
    if segments[_TEXT]:
        parts.append(TextPart(segments[_TEXT]))
    return MessageTemplate(source=template, parts=tuple(parts))


def _format_plain(value: object, context: LocaleContext) -> str:
    """Render an argument that has no format type."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case int() | float() | Decimal():
            return context.format_number(value)
        case date():
            return context.format_datetime(value)
        case _:
            return str(value)


def _date_style(placeholder: Placeholder) -> str:
    """Map a date/time style keyword to Babel; anything else is a pattern."""
    keyword = placeholder.style.strip().lower()
    if not keyword:
        return "medium"
    if keyword in DATE_STYLES:
        return keyword
    return placeholder.style


def _format_argument(
    placeholder: Placeholder,
    value: object,
    args: Sequence[object],
    context: LocaleContext,
) -> str:
    if value is None:
        return "null"

    style = placeholder.style.strip().lower()
    match placeholder.format_type:
        case FormatType.NONE:
            return _format_plain(value, context)
        case FormatType.NUMBER:
            match style:
                case "":
                    return context.format_number(value)
                case "integer":
                    return context.format_integer(value)
                case "percent":
                    return context.format_percent(value)
                case "currency":
                    return context.format_currency(value)
                case _:
                    return context.format_number(value, pattern=placeholder.style)
        case FormatType.DATE:
            return context.format_date(value, _date_style(placeholder))
        case FormatType.TIME:
            return context.format_time(value, _date_style(placeholder))
        case FormatType.CHOICE:
            if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
                msg = f"Cannot format given object as a number: {value!r}"
                raise FormattingError(msg, fallback_value=str(value))
            assert placeholder.choice is not None
            selected = placeholder.choice.select(float(value))
            if "{" in selected:
                return parse_template(selected).format(args, context)
            return selected


def format_message(
    template: str,
    args: Sequence[object] = (),
    *,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Render a template against positional arguments.

    Args:
        template: MessageFormat template
        args: Positional arguments ({0} is args[0])
        locale: Locale for number/date formatting

    Returns:
        Rendered string; placeholders without an argument stay as '{n}'

    Raises:
        TemplateSyntaxError: If the template is malformed
        FormattingError: If an argument does not fit its format type

    Examples:
        >>> format_message("Hello, {0}!", ["World"])
        'Hello, World!'
        >>> format_message("{0} and {1}", ["a"])
        'a and {1}'
        >>> format_message("It''s {0}", [3])
        "It's 3"
    """
    return parse_template(template).format(args, LocaleContext.create(locale))
