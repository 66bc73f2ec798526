"""Code generation: in-memory unit model and Python emission backend.

Python 3.13+. Zero external dependencies.
"""

from .emitter import render_unit, write_units
from .model import AccessorPair, CodeModel, HolderDeclaration, OutputUnit

__all__ = [
    "AccessorPair",
    "CodeModel",
    "HolderDeclaration",
    "OutputUnit",
    "render_unit",
    "write_units",
]
