"""Locale context for template rendering.

Provides the locale-aware number, date and time formatting that typed
template elements ({0,number}, {0,date,short}, ...) need. Uses Babel for
CLDR-compliant formatting without touching Python's global locale state.

Argument coercion follows java.text.MessageFormat:
    - Date/time elements accept datetime and date objects, and numbers
      taken as milliseconds since the epoch (UTC)
    - Number elements accept int, float and Decimal; bool is rejected

Python 3.13+. Uses Babel for i18n.
"""

import functools
import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Literal, TypeAlias

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from localizer.constants import DEFAULT_LOCALE
from localizer.diagnostics import FormattingError

__all__ = ["DATE_STYLES", "LocaleContext", "normalize_locale"]

logger = logging.getLogger(__name__)

Number: TypeAlias = int | float | Decimal
DateStyle: TypeAlias = Literal["short", "medium", "long", "full"]

DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

# ISO 4217 code for "no currency"; used when the locale has no territory.
_NO_CURRENCY = "XXX"

_FORMAT_ERRORS = (ValueError, TypeError, InvalidOperation, AttributeError, KeyError, OverflowError)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
    """
    return locale_code.replace("-", "_")


def _is_number(value: object) -> bool:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() to construct instances; it caches one
    instance per normalized locale code.

    Examples:
        >>> ctx = LocaleContext.create("en-US")
        >>> ctx.format_number(1234.5)
        '1,234.5'
        >>> ctx = LocaleContext.create("de-DE")
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> # Invalid locales fall back to en_US with a warning logged
        >>> LocaleContext.create("xx-INVALID").is_fallback
        True
    """

    locale_code: str
    babel_locale: Locale
    is_fallback: bool = False

    @staticmethod
    @functools.lru_cache(maxsize=32)
    def create(locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        Args:
            locale_code: BCP-47 or POSIX locale identifier

        Returns:
            LocaleContext instance. For unknown/invalid locales, uses en_US
            rules while preserving the original locale_code.
        """
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE)
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
            )
        else:
            return LocaleContext(locale_code=locale_code, babel_locale=babel_locale)
        return LocaleContext(
            locale_code=locale_code,
            babel_locale=Locale.parse(DEFAULT_LOCALE),
            is_fallback=True,
        )

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _require_number(self, value: object) -> Number:
        if not _is_number(value):
            msg = f"Cannot format given object as a number: {value!r}"
            raise FormattingError(msg, fallback_value=str(value))
        return value  # type: ignore[return-value]

    def format_number(self, value: object, pattern: str | None = None) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format
            pattern: Custom number pattern (Babel/CLDR syntax, e.g. '#,##0.00')

        Raises:
            FormattingError: If value is not a number or the pattern is invalid
        """
        number = self._require_number(value)
        try:
            return str(babel_numbers.format_decimal(number, format=pattern, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"Number formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_integer(self, value: object) -> str:
        """Format number rounded half-even to an integer.

        Example:
            >>> LocaleContext.create("en-US").format_integer(2.5)
            '2'
        """
        number = self._require_number(value)
        try:
            rounded = Decimal(str(number)).quantize(Decimal(1), rounding=ROUND_HALF_EVEN)
            return str(babel_numbers.format_decimal(rounded, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"Integer formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_percent(self, value: object) -> str:
        """Format number as a percentage (0.25 -> '25%')."""
        number = self._require_number(value)
        try:
            return str(babel_numbers.format_percent(number, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"Percent formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    @property
    def currency(self) -> str:
        """ISO 4217 code of the locale territory's current currency."""
        territory = self.babel_locale.territory
        if not territory:
            return _NO_CURRENCY
        currencies = babel_numbers.get_territory_currencies(territory)
        return currencies[0] if currencies else _NO_CURRENCY

    def format_currency(self, value: object) -> str:
        """Format number as an amount of the locale's currency.

        Example:
            >>> LocaleContext.create("en-US").format_currency(3)
            '$3.00'
        """
        number = self._require_number(value)
        try:
            return str(
                babel_numbers.format_currency(
                    number,
                    self.currency,
                    locale=self.babel_locale,
                    currency_digits=True,
                )
            )
        except _FORMAT_ERRORS as e:
            msg = f"Currency formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------

    @staticmethod
    def _to_datetime(value: object) -> datetime:
        """Coerce a date-like argument; numbers are epoch milliseconds."""
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if _is_number(value):
            try:
                return datetime.fromtimestamp(float(value) / 1000, tz=UTC)  # type: ignore[arg-type]
            except (OverflowError, OSError, ValueError) as e:
                msg = f"Timestamp out of range: {value!r}"
                raise FormattingError(msg, fallback_value=str(value)) from e
        msg = f"Cannot format given object as a date: {value!r}"
        raise FormattingError(msg, fallback_value=str(value))

    def format_date(self, value: object, style: str = "medium") -> str:
        """Format the date part of a value.

        Args:
            value: datetime, date, or epoch milliseconds
            style: short, medium, long, full, or a CLDR date pattern
        """
        moment = self._to_datetime(value)
        try:
            return str(babel_dates.format_date(moment, format=style, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"Date formatting failed for '{moment}': {e}"
            raise FormattingError(msg, fallback_value=moment.isoformat()) from e

    def format_time(self, value: object, style: str = "medium") -> str:
        """Format the time part of a value.

        Args:
            value: datetime, date, or epoch milliseconds
            style: short, medium, long, full, or a CLDR time pattern
        """
        moment = self._to_datetime(value)
        try:
            return str(babel_dates.format_time(moment, format=style, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"Time formatting failed for '{moment}': {e}"
            raise FormattingError(msg, fallback_value=moment.isoformat()) from e

    def format_datetime(self, value: object, style: DateStyle = "short") -> str:
        """Format date and time together (the untyped rendering of dates)."""
        moment = self._to_datetime(value)
        try:
            return str(babel_dates.format_datetime(moment, format=style, locale=self.babel_locale))
        except _FORMAT_ERRORS as e:
            msg = f"DateTime formatting failed for '{moment}': {e}"
            raise FormattingError(msg, fallback_value=moment.isoformat()) from e
