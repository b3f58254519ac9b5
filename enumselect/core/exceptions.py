"""
Custom exceptions for enumselect.

Errors are specific and fail loudly: a declaration that cannot support
positional indexing never yields a half-installed class.
"""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from enumselect.core.model import Diagnostic


class EnumSelectError(Exception):
    """Base class for all enumselect custom exceptions."""
    pass


class ValidationError(EnumSelectError, TypeError):
    """Raised when a declaration fails shape or display validation."""

    def __init__(self, type_name: str, diagnostics: Sequence["Diagnostic"]):
        self.type_name = type_name
        self.diagnostics = list(diagnostics)
        lines = [f"{len(self.diagnostics)} error(s) in `{type_name}`:"]
        lines.extend(f"  {diagnostic}" for diagnostic in self.diagnostics)
        super().__init__("\n".join(lines))

    @property
    def kinds(self):
        """Error kinds in report order."""
        return [diagnostic.kind for diagnostic in self.diagnostics]


class SchemaError(EnumSelectError, ValueError):
    """Raised when a schema file is malformed."""
    pass


class DeclarationSourceError(EnumSelectError, OSError):
    """Raised when the source of a live class cannot be read."""
    pass


class IndexInvariantError(EnumSelectError, RuntimeError):
    """Raised when the dense index mapping turns out to be broken at runtime."""
    pass
