"""Type aliases for the generation domain.

Provides semantic type aliases used throughout localizer and by user
code when annotating Generator call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "MessageTable",
    "ResourceKey",
    "Template",
    "UnitName",
]

from typing import TypeAlias

ResourceKey: TypeAlias = str
"""Key of one resource entry (e.g., 'greeting.hello')."""

Template: TypeAlias = str
"""MessageFormat template text (e.g., 'Hello, {0}!')."""

MessageTable: TypeAlias = dict[ResourceKey, Template]
"""Insertion-ordered key/template mapping loaded from one resource file."""

UnitName: TypeAlias = str
"""Dotted name of a generated unit (e.g., 'org.example.Messages')."""
