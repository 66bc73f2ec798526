"""Argument-count inference for message templates.

Determines how many positional arguments an accessor must take for a
template. Two strategies:

    PROBE (default): render the template with one, two, three ... probe
        arguments and stop at the first round whose rendering does not
        change. Works against the substitution engine itself, so it
        inherits every quirk of the runtime rendering.
    PARSE: parse the placeholder grammar and take the highest referenced
        index + 1.

The strategies differ on templates with gaps. '{1}' alone probes to 0
(the first probe leaves '{1}' untouched) but parses to 2.

Python 3.13+. Uses Babel for i18n.
"""

import logging
from enum import StrEnum

from localizer.constants import DEFAULT_LOCALE, PROBE_VALUE
from localizer.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    FormattingError,
    TemplateSyntaxError,
)
from localizer.formatting.locale_context import LocaleContext
from localizer.formatting.message_format import parse_template
from localizer.types import Template

__all__ = ["ArgCountStrategy", "count_args", "count_args_parsed", "infer_arity"]

logger = logging.getLogger(__name__)


class ArgCountStrategy(StrEnum):
    """How the generator infers accessor arity."""

    PROBE = "probe"
    PARSE = "parse"


def count_args(template: Template, *, locale: str = DEFAULT_LOCALE) -> int:
    """Count positional arguments a template needs by probing the renderer.

    The reference rendering is the template rendered with no arguments.
    Each round appends one probe argument and renders again; the first
    rendering equal to the previous one ends the search.

    Args:
        template: MessageFormat template
        locale: Locale used for rendering typed placeholders

    Returns:
        Number of leading argument slots the template consumes

    Raises:
        TemplateSyntaxError: If the template is malformed, or a typed
            placeholder rejects the probe value

    Examples:
        >>> count_args("{0} and {1} and {2}")
        3
        >>> count_args("no placeholders here")
        0
    """
    parsed = parse_template(template)
    context = LocaleContext.create(locale)
    probes: list[object] = []

    try:
        previous = parsed.format(probes, context)
        while True:
            probes.append(PROBE_VALUE)
            rendered = parsed.format(probes, context)
            if rendered == previous:
                return len(probes) - 1
            previous = rendered
    except FormattingError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.TEMPLATE_ARGUMENT_REJECTED,
            message=f"Template rejects probe argument {len(probes)}: {e}",
            location=repr(template),
        )
        raise TemplateSyntaxError(diagnostic, template=template) from e


def count_args_parsed(template: Template) -> int:
    """Count positional arguments as the highest referenced index + 1.

    Raises:
        TemplateSyntaxError: If the template is malformed

    Example:
        >>> count_args_parsed("{1}")
        2
    """
    return parse_template(template).max_argument_count()


def infer_arity(
    template: Template,
    strategy: ArgCountStrategy = ArgCountStrategy.PROBE,
    *,
    locale: str = DEFAULT_LOCALE,
) -> int:
    """Infer accessor arity for a template using the chosen strategy."""
    match strategy:
        case ArgCountStrategy.PROBE:
            arity = count_args(template, locale=locale)
        case ArgCountStrategy.PARSE:
            arity = count_args_parsed(template)
    logger.debug("Template %r takes %d argument(s)", template, arity)
    return arity
