"""Localizer exception hierarchy with structured diagnostics.

All exceptions can carry a Diagnostic object for rich error information.
Every error names the artifact that triggered it (a resource file, a
resource key, a unit name, or an output path).

Python 3.13+. Zero external dependencies.
"""

from pathlib import Path

from .codes import Diagnostic, DiagnosticCode


class LocalizerError(Exception):
    """Base exception for all localizer errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizerError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceReadError(LocalizerError):
    """Resource file could not be read (missing file, permission, I/O).

    Attributes:
        path: The resource file that failed
    """

    def __init__(self, message: str | Diagnostic, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class PropertiesSyntaxError(LocalizerError):
    """Resource file content violates the properties format.

    The properties format is forgiving: almost any line parses. The one
    hard failure is a malformed \\uXXXX escape.

    Attributes:
        path: Resource file being parsed (None when parsing a string)
        line: 1-indexed line number of the offending logical line
    """

    def __init__(
        self, message: str | Diagnostic, *, path: Path | None = None, line: int = 0
    ) -> None:
        super().__init__(message)
        self.path = path
        self.line = line


class TemplateSyntaxError(LocalizerError):
    """Message template is malformed for the substitution engine.

    Attributes:
        template: The offending template text
        position: Character offset where parsing failed
        key: Resource key owning the template, once known
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        template: str,
        position: int = 0,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.template = template
        self.position = position
        self.key = key


class UnitNameCollisionError(LocalizerError):
    """Two resource files map to the same unit name in one run.

    Attributes:
        unit_name: The contested unit name
        first: Resource file that claimed the name first
        second: Resource file that collided with it
    """

    def __init__(self, unit_name: str, *, first: Path, second: Path) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNIT_NAME_COLLISION,
            message=f"Unit name '{unit_name}' is produced by both {first} and {second}",
            location=str(second),
            hint="Rename one of the resource files or its directory",
        )
        super().__init__(diagnostic)
        self.unit_name = unit_name
        self.first = first
        self.second = second


class HolderNameCollisionError(LocalizerError):
    """A resource key yields an accessor that shadows a name the unit binds.

    The holder variable and both imported runtime classes are module-level
    names of every generated unit.

    Attributes:
        key: Resource key whose accessor clashes
        identifier: The clashing identifier
    """

    def __init__(self, key: str, identifier: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.HOLDER_NAME_COLLISION,
            message=(
                f"Accessor '{identifier}' for key '{key}' "
                "shadows a module-level name of the unit"
            ),
            location=key,
            hint="Rename the resource key",
        )
        super().__init__(diagnostic)
        self.key = key
        self.identifier = identifier


class EmissionError(LocalizerError):
    """Generated unit could not be written.

    Attributes:
        path: Output path (file or directory) that failed
    """

    def __init__(self, message: str | Diagnostic, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ResourceGenerationError(LocalizerError):
    """Generating a unit from one resource file failed.

    Wraps the underlying error (chained as __cause__) and names the file.

    Attributes:
        path: The resource file whose generation failed
    """

    def __init__(self, message: str | Diagnostic, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class FormattingError(LocalizerError):
    """Locale-aware formatting of an argument failed.

    Raised by LocaleContext when a value cannot be rendered with the
    requested number/date/time style. The message renderer turns it into
    a TemplateSyntaxError naming the template.

    Attributes:
        fallback_value: Plain rendering of the value that failed
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        super().__init__(message)
        self.fallback_value = fallback_value
