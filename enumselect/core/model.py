"""
Declaration and case models for enumselect.

A front end turns a class body or a schema entry into a ``Declaration``. The
validators turn a ``Declaration`` into a ``ValidatedCaseModel`` or a
``DisplayCaseModel``, which the generators consume. None of these models
survive past code generation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class ErrorKind(Enum):
    """Kinds of validation failure, one per rejected declaration shape."""
    MISSING_INDEX_REPRESENTATION = "missing_index_representation"
    NOT_AN_ENUMERATION = "not_an_enumeration"
    EMPTY_ENUMERATION = "empty_enumeration"
    CASE_HAS_FIELDS = "case_has_fields"
    EXPLICIT_DISCRIMINANT = "explicit_discriminant"
    MISSING_DISPLAY_TEMPLATE = "missing_display_template"
    RESERVED_CASE_NAME = "reserved_case_name"
    DUPLICATE_CASE = "duplicate_case"
    UNRECOGNIZED_CASE = "unrecognized_case"
    SYNTAX_ERROR = "syntax_error"  # static checker only


class Site(Enum):
    """The part of a declaration a diagnostic points at."""
    DECLARATION = "declaration"
    CASE = "case"
    TAG = "tag"


@dataclass(frozen=True)
class Location:
    """A position in a source or schema file (1-based line and column)."""
    file: str = "<unknown>"
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Diagnostic:
    """A located validation failure."""
    kind: ErrorKind
    message: str
    location: Location
    site: Site

    def __str__(self) -> str:
        return f"{self.location} - {self.kind.value}: {self.message}"


@dataclass(frozen=True)
class CaseDeclaration:
    """One case of a declaration, as written."""
    name: str
    location: Location = field(default_factory=Location)
    discriminant: Optional[str] = None
    """Source text of an explicit tag, None when the tag is implicit."""

    discriminant_location: Optional[Location] = None
    fields: Tuple[str, ...] = ()
    """Payload field descriptions; empty for unit cases."""

    display: Optional[str] = None
    """Attached text template, if any."""

    @property
    def tag_location(self) -> Location:
        return self.discriminant_location or self.location


@dataclass(frozen=True)
class Declaration:
    """A named type with an ordered list of case declarations."""
    name: str
    location: Location = field(default_factory=Location)
    representation: Optional[str] = None
    is_enumeration: bool = True
    cases: Tuple[CaseDeclaration, ...] = ()
    derives: FrozenSet[str] = frozenset()
    unrecognized: Tuple[CaseDeclaration, ...] = ()
    """Names bound by statements that may create members but cannot be read as cases."""

    members: Optional[Tuple[str, ...]] = None
    """Member names of the live class, None for static and schema declarations."""


@dataclass(frozen=True)
class ValidatedCaseModel:
    """Non-empty ordered case names of a declaration that passed validation."""
    type_name: str
    cases: Tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.cases)


@dataclass(frozen=True)
class DisplayCaseModel:
    """Ordered (case name, text template) pairs, one per case."""
    type_name: str
    entries: Tuple[Tuple[str, str], ...]
