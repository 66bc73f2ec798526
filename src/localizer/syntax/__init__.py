"""Resource-file syntax: cursor and properties parser.

Python 3.13+. Zero external dependencies.
"""

from .cursor import Cursor
from .properties import load_properties, parse_properties

__all__ = ["Cursor", "load_properties", "parse_properties"]
