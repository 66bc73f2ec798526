"""Shared constants for localizer.

Centralizes the naming conventions and limits used by the parsers, the
inferencer, and the code emitter. Placing them here avoids circular
imports and gives one place to look up a convention.

Constants are grouped by domain:
- Resource files: suffix and locale-variant marker
- Naming: separators used to derive identifiers and unit names
- Generated code: runtime import names and output suffix
- Limits: bounds for template argument indices

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource files
    "RESOURCE_SUFFIX",
    "LOCALE_MARKER",
    "DEFAULT_ENCODING",
    # Naming
    "KEY_SEPARATOR",
    "IDENTIFIER_SEPARATOR",
    "NAMESPACE_SEPARATOR",
    "DEFERRED_PREFIX",
    "ARGUMENT_PREFIX",
    # Generated code
    "SOURCE_SUFFIX",
    "HOLDER_NAME",
    "DEFAULT_RUNTIME_MODULE",
    "HOLDER_CLASS",
    "LOCALIZABLE_CLASS",
    # Limits
    "MAX_ARGUMENT_INDEX",
    "PROBE_VALUE",
    "DEFAULT_LOCALE",
]

# ============================================================================
# RESOURCE FILES
# ============================================================================

# Only files ending in this suffix produce a unit.
RESOURCE_SUFFIX: str = ".properties"

# A file name containing this character is a locale variant
# (Messages_fr.properties) and never gets its own unit.
LOCALE_MARKER: str = "_"

DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# NAMING
# ============================================================================

KEY_SEPARATOR: str = "."
IDENTIFIER_SEPARATOR: str = "_"
NAMESPACE_SEPARATOR: str = "."
DEFERRED_PREFIX: str = "_"

# Generated parameters are arg1..argN.
ARGUMENT_PREFIX: str = "arg"

# ============================================================================
# GENERATED CODE
# ============================================================================

SOURCE_SUFFIX: str = ".py"

# Module-level name of the holder in every generated unit.
HOLDER_NAME: str = "_holder"

# The runtime companion is not part of this package; generated modules
# import these names from it.
DEFAULT_RUNTIME_MODULE: str = "localizer_runtime"
HOLDER_CLASS: str = "ResourceBundleHolder"
LOCALIZABLE_CLASS: str = "Localizable"

# ============================================================================
# LIMITS
# ============================================================================

# Highest argument index a template may reference. Matches
# java.text.MessageFormat, and bounds the probing loop.
MAX_ARGUMENT_INDEX: int = 10000

# Value appended on each probing round. An integer renders under every
# format type (plain, number, choice, and date/time as epoch millis).
PROBE_VALUE: int = 1

DEFAULT_LOCALE: str = "en_US"
