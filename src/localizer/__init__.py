"""Localizer - typed accessor modules for .properties resource bundles.

Reads Java-style .properties message files and generates one Python
module per base bundle, with an eager accessor (returns the formatted
string) and a deferred accessor (returns a Localizable) per key. The
accessor arity is inferred from the MessageFormat template.

Public API:
    Generator - Generation run over a set of resource files
    GeneratorConfig - Immutable run configuration
    GenerationReport - Outcome of a run
    FileSet - Include/exclude selection of resource files
    count_args - Probe a template for its argument count
    parse_properties / load_properties - Properties-format reader
    format_message - MessageFormat renderer

Exceptions:
    LocalizerError - Base exception class
    ResourceGenerationError - Per-file generation failure
    UnitNameCollisionError - Two resource files map to one module

Submodules:
    localizer.syntax - Properties-format parsing
    localizer.formatting - MessageFormat parsing and Babel-backed rendering
    localizer.analysis - Argument-count inference
    localizer.codegen - Code model and module emission
    localizer.diagnostics - Error types and diagnostic codes
"""

from .analysis import ArgCountStrategy, count_args
from .config import GeneratorConfig
from .diagnostics import (
    LocalizerError,
    ResourceGenerationError,
    TemplateSyntaxError,
    UnitNameCollisionError,
)
from .formatting import format_message
from .generator import GenerationReport, Generator
from .scanner import FileSet
from .syntax import load_properties, parse_properties

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localizer")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgCountStrategy",
    "FileSet",
    "GenerationReport",
    "Generator",
    "GeneratorConfig",
    "LocalizerError",
    "ResourceGenerationError",
    "TemplateSyntaxError",
    "UnitNameCollisionError",
    "__version__",
    "count_args",
    "format_message",
    "load_properties",
    "parse_properties",
]
