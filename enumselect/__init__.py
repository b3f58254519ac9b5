"""
enumselect: indexable unit enumerations.

Declare an ordered set of cases once and get a verified mapping between each
case and its zero-based position, traversal in declaration order, and an
optional text rendering per case::

    from enum import auto
    from enumselect import IndexEnum, enum_select

    @enum_select
    class Note(IndexEnum):
        A = auto()
        B = auto()
        C = auto()

    Note.B.checked_next()   # Note.C
    Note.C.wrapping_next()  # Note.A
"""

__version__ = "0.1.0"

from enumselect.core.derive import display, enum_display, enum_select
from enumselect.core.exceptions import (
    DeclarationSourceError,
    EnumSelectError,
    IndexInvariantError,
    SchemaError,
    ValidationError,
)
from enumselect.core.index_enum import IndexEnum
from enumselect.core.model import ErrorKind

__all__ = [
    # Runtime surface
    "IndexEnum",
    "enum_select",
    "enum_display",
    "display",

    # Errors
    "EnumSelectError",
    "ValidationError",
    "SchemaError",
    "DeclarationSourceError",
    "IndexInvariantError",
    "ErrorKind",
]
