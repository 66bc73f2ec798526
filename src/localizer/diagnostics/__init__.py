"""Diagnostic system for localizer errors.

Provides structured error diagnostics with codes, locations and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    EmissionError,
    FormattingError,
    HolderNameCollisionError,
    LocalizerError,
    PropertiesSyntaxError,
    ResourceGenerationError,
    ResourceReadError,
    TemplateSyntaxError,
    UnitNameCollisionError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "EmissionError",
    "FormattingError",
    "HolderNameCollisionError",
    "LocalizerError",
    "PropertiesSyntaxError",
    "ResourceGenerationError",
    "ResourceReadError",
    "TemplateSyntaxError",
    "UnitNameCollisionError",
]
