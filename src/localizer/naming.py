"""Identifier and unit naming.

Pure string transforms from resource keys to accessor names and from
resource-file paths to unit names.

Known simplification: to_identifier() only replaces the key separator.
Keys with characters outside Python's identifier grammar ('-', spaces,
leading digits) yield names the emitter warns about but still writes.
Two keys that differ only in '.' versus '_' collapse to one identifier.

Python 3.13+. Zero external dependencies.
"""

import os
from pathlib import Path, PurePath

from localizer.constants import (
    DEFERRED_PREFIX,
    IDENTIFIER_SEPARATOR,
    KEY_SEPARATOR,
    NAMESPACE_SEPARATOR,
    RESOURCE_SUFFIX,
    SOURCE_SUFFIX,
)
from localizer.types import ResourceKey, UnitName

__all__ = [
    "to_deferred_identifier",
    "to_identifier",
    "to_unit_name",
    "unit_source_path",
]


def to_identifier(key: ResourceKey) -> str:
    """Derive the eager accessor name for a resource key.

    Example:
        >>> to_identifier("greeting.hello")
        'greeting_hello'
    """
    return key.replace(KEY_SEPARATOR, IDENTIFIER_SEPARATOR)


def to_deferred_identifier(key: ResourceKey) -> str:
    """Derive the deferred accessor name: the eager name prefixed with '_'.

    Example:
        >>> to_deferred_identifier("greeting.hello")
        '_greeting_hello'
    """
    return DEFERRED_PREFIX + to_identifier(key)


def to_unit_name(relative_path: str | PurePath, suffix: str = RESOURCE_SUFFIX) -> UnitName:
    """Derive the dotted unit name from a resource file's relative path.

    Strips the resource suffix, then turns path separators into '.'.

    Args:
        relative_path: Path relative to the resource base directory
        suffix: Resource-file suffix to strip

    Returns:
        Dotted unit name

    Raises:
        ValueError: If the path does not end with the suffix

    Example:
        >>> to_unit_name("org/example/Messages.properties")
        'org.example.Messages'
    """
    text = os.fspath(relative_path)
    if not text.endswith(suffix):
        msg = f"Resource path does not end with '{suffix}': {text!r}"
        raise ValueError(msg)
    stem = text[: len(text) - len(suffix)]
    for separator in {os.sep, os.altsep, "/"} - {None}:
        stem = stem.replace(separator, NAMESPACE_SEPARATOR)
    return stem


def unit_source_path(output_dir: Path, unit_name: UnitName) -> Path:
    """Compute where a unit's module is written.

    Example:
        >>> unit_source_path(Path("out"), "org.example.Messages").as_posix()
        'out/org/example/Messages.py'
    """
    *packages, module = unit_name.split(NAMESPACE_SEPARATOR)
    return output_dir.joinpath(*packages, module + SOURCE_SUFFIX)
