"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
localizer exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resource errors (reading and parsing resource files)
        2000-2999: Template errors (message template syntax)
        3000-3999: Naming errors (unit and accessor name clashes)
        4000-4999: Emission errors (writing generated units)
    """

    # Resource errors (1000-1999)
    RESOURCE_UNREADABLE = 1001
    RESOURCE_MALFORMED_ESCAPE = 1002
    RESOURCE_GENERATION_FAILED = 1003

    # Template errors (2000-2999)
    TEMPLATE_UNMATCHED_BRACES = 2001
    TEMPLATE_BAD_ARGUMENT_INDEX = 2002
    TEMPLATE_UNKNOWN_FORMAT_TYPE = 2003
    TEMPLATE_BAD_CHOICE = 2004
    TEMPLATE_ARGUMENT_REJECTED = 2005

    # Naming errors (3000-3999)
    UNIT_NAME_COLLISION = 3001
    HOLDER_NAME_COLLISION = 3002

    # Emission errors (4000-4999)
    EMISSION_FAILED = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        location: Where the error was found ("path:line", a resource key, ...)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    location: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[TEMPLATE_UNMATCHED_BRACES]: Unmatched braces in the pattern
              --> greeting.hello
              = help: Close every '{' or quote it as '{'

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.location:
            lines.append(f"  --> {self.location}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
