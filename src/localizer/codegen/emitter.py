"""Emission backend: render units as Python modules and write them.

Each unit becomes one module at unit_source_path(output_dir, unit.name):

    \"\"\"Accessors for the app.Messages resource bundle.

    Generated by localizer. Do not edit.
    \"\"\"

    from localizer_runtime import Localizable, ResourceBundleHolder

    __all__ = [
        "greeting_hello",
        "_greeting_hello",
    ]

    _holder = ResourceBundleHolder(__name__)


    def greeting_hello(arg1):
        \"\"\"Hello, {0}!\"\"\"
        return _holder.format("greeting.hello", arg1)


    def _greeting_hello(arg1):
        \"\"\"Hello, {0}!\"\"\"
        return Localizable(_holder, "greeting.hello", arg1)

Docstrings carry the raw template. With escape_markup, '&' and '<' are
escaped as HTML entities in both accessors' docstrings alike.

Python 3.13+. Zero external dependencies.
"""

import keyword
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from localizer.diagnostics import Diagnostic, DiagnosticCode, EmissionError
from localizer.naming import unit_source_path

from .model import AccessorPair, OutputUnit

__all__ = ["render_unit", "write_units"]

logger = logging.getLogger(__name__)

_INDENT = "    "
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def _escape_control(match: re.Match[str]) -> str:
    return f"\\x{ord(match.group()):02x}"


def _string_literal(text: str) -> str:
    """Double-quoted Python string literal for text."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
    return '"' + _CONTROL_CHARS_RE.sub(_escape_control, escaped) + '"'


def _docstring(text: str, *, escape_markup: bool) -> str:
    """Triple-quoted docstring literal carrying a template verbatim."""
    if escape_markup:
        text = text.replace("&", "&amp;").replace("<", "&lt;")
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return '"""' + _CONTROL_CHARS_RE.sub(_escape_control, escaped) + '"""'


def _check_identifiers(unit: OutputUnit) -> None:
    """Warn about accessor names Python will not accept or will shadow."""
    seen: dict[str, str] = {}
    for pair in unit.accessors:
        for identifier in (pair.identifier, pair.deferred_identifier):
            if not identifier.isidentifier() or keyword.iskeyword(identifier):
                logger.warning(
                    "Key '%s' in %s yields '%s', which is not a valid Python identifier",
                    pair.key,
                    unit.name,
                    identifier,
                )
            previous = seen.get(identifier)
            if previous is not None and previous != pair.key:
                logger.warning(
                    "Keys '%s' and '%s' in %s both map to '%s'; the later one wins",
                    previous,
                    pair.key,
                    unit.name,
                    identifier,
                )
            seen[identifier] = pair.key


def _render_accessor(
    name: str,
    pair: AccessorPair,
    body: str,
    *,
    escape_markup: bool,
) -> list[str]:
    return [
        "",
        "",
        f"def {name}({', '.join(pair.parameters)}):",
        _INDENT + _docstring(pair.template, escape_markup=escape_markup),
        _INDENT + "return " + body,
    ]


def render_unit(unit: OutputUnit, *, escape_markup: bool = True) -> str:
    """Render a unit as Python module source.

    Args:
        unit: Fully built unit
        escape_markup: Escape '&' and '<' in docstrings

    Returns:
        Module source text ending with a newline
    """
    _check_identifiers(unit)
    holder = unit.holder

    lines = [
        f'"""Accessors for the {unit.name} resource bundle.',
        "",
        "Generated by localizer. Do not edit.",
        '"""',
        "",
        f"from {holder.runtime_module} import {holder.localizable_class}, {holder.holder_class}",
        "",
    ]
    identifiers = unit.identifiers
    if identifiers:
        lines.append("__all__ = [")
        lines.extend(f"{_INDENT}{_string_literal(name)}," for name in identifiers)
        lines.append("]")
    else:
        lines.append("__all__: list[str] = []")
    lines.extend(["", f"{holder.name} = {holder.holder_class}(__name__)"])

    for pair in unit.accessors:
        arguments = "".join(f", {param}" for param in pair.parameters)
        key = _string_literal(pair.key)
        lines.extend(
            _render_accessor(
                pair.identifier,
                pair,
                f"{holder.name}.format({key}{arguments})",
                escape_markup=escape_markup,
            )
        )
        lines.extend(
            _render_accessor(
                pair.deferred_identifier,
                pair,
                f"{holder.localizable_class}({holder.name}, {key}{arguments})",
                escape_markup=escape_markup,
            )
        )

    return "\n".join(lines) + "\n"


def write_units(
    units: Iterable[OutputUnit],
    output_dir: Path,
    *,
    escape_markup: bool = True,
) -> list[Path]:
    """Write every unit below output_dir, creating directories as needed.

    Args:
        units: Fully built units
        output_dir: Root of the generated source tree
        escape_markup: Escape '&' and '<' in docstrings

    Returns:
        Paths written, in unit order

    Raises:
        EmissionError: If a directory cannot be created, a file written,
            or a unit is not encodable as UTF-8
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.EMISSION_FAILED,
            message=f"Cannot create output directory {output_dir}: {e}",
            location=str(output_dir),
        )
        raise EmissionError(diagnostic, path=output_dir) from e

    written: list[Path] = []
    for unit in units:
        path = unit_source_path(output_dir, unit.name)
        source = render_unit(unit, escape_markup=escape_markup)
        try:
            data = source.encode("utf-8")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, UnicodeEncodeError) as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.EMISSION_FAILED,
                message=f"Cannot write unit {unit.name} to {path}: {e}",
                location=str(path),
            )
            raise EmissionError(diagnostic, path=path) from e
        logger.debug("Wrote %s (%d accessor pairs)", path, len(unit.accessors))
        written.append(path)
    return written
