"""Generator configuration.

Provides a single frozen dataclass holding every knob of a generation
run, so Generator takes one typed object instead of a long parameter
list.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from localizer.analysis.arguments import ArgCountStrategy
from localizer.constants import (
    DEFAULT_ENCODING,
    DEFAULT_LOCALE,
    DEFAULT_RUNTIME_MODULE,
    LOCALE_MARKER,
    RESOURCE_SUFFIX,
)

__all__ = ["GeneratorConfig"]

_MODULE_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for one Generator.

    Only output_dir is required; the remaining fields default to the
    conventions of Java resource bundles.

    Attributes:
        output_dir: Root directory of the generated modules
        base_dir: Directory the candidate relative paths are resolved against
        suffix: Resource-file suffix; other files are ignored
        locale_marker: Character marking locale variants (Messages_fr.properties)
        file_mask: When set, only resource files with exactly this name
        encoding: Text encoding of resource files
        runtime_module: Module the generated code imports the holder from
        arg_count_strategy: How accessor arity is inferred
        locale: Locale used when rendering templates during inference
        escape_markup: Escape '&' and '<' in generated docstrings
        fail_fast: Abort the run on the first failing resource file.
            When False, failures are recorded in the GenerationReport and
            the remaining files are still processed.

    Example:
        >>> config = GeneratorConfig(output_dir=Path("build/generated"))
        >>> config.suffix
        '.properties'
        >>> GeneratorConfig(output_dir=Path("out"), arg_count_strategy="parse").arg_count_strategy
        <ArgCountStrategy.PARSE: 'parse'>
    """

    output_dir: Path
    base_dir: Path = field(default_factory=Path)
    suffix: str = RESOURCE_SUFFIX
    locale_marker: str = LOCALE_MARKER
    file_mask: str | None = None
    encoding: str = DEFAULT_ENCODING
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    arg_count_strategy: ArgCountStrategy = ArgCountStrategy.PROBE
    locale: str = DEFAULT_LOCALE
    escape_markup: bool = True
    fail_fast: bool = True

    def __post_init__(self) -> None:
        """Normalize paths and the strategy, and validate the rest.

        Raises:
            ValueError: If suffix, locale_marker, runtime_module or
                arg_count_strategy is invalid
        """
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "base_dir", Path(self.base_dir))
        # Accept plain strings ("probe"/"parse") from CLI and config files.
        object.__setattr__(self, "arg_count_strategy", ArgCountStrategy(self.arg_count_strategy))

        if not self.suffix.startswith(".") or len(self.suffix) < 2:
            msg = f"suffix must start with '.' and name an extension, got: '{self.suffix}'"
            raise ValueError(msg)
        if len(self.locale_marker) != 1:
            msg = f"locale_marker must be a single character, got: '{self.locale_marker}'"
            raise ValueError(msg)
        if not _MODULE_NAME_RE.fullmatch(self.runtime_module):
            msg = f"runtime_module must be a dotted module name, got: '{self.runtime_module}'"
            raise ValueError(msg)
