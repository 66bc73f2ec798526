"""Template substitution engine: MessageFormat parsing and rendering.

Exports:
    format_message: Render a template against positional arguments
    parse_template: Parse a template into text parts and placeholders
    LocaleContext: Babel-backed locale formatting of typed arguments

Python 3.13+. Uses Babel for i18n.
"""

from .locale_context import LocaleContext
from .message_format import MessageTemplate, Placeholder, format_message, parse_template

__all__ = ["LocaleContext", "MessageTemplate", "Placeholder", "format_message", "parse_template"]
