"""
Validation package for enumselect.

This package provides the declaration front ends and the shape and display
validators that gate code generation.
"""

from enumselect.validation.ast_frontend import declaration_from_class, declarations_from_source
from enumselect.validation.shape_validator import (
    check_declaration,
    collect_display_violations,
    collect_violations,
    validate,
    validate_display,
)
from enumselect.validation.validate import validate_file

__all__ = [
    'check_declaration',
    'collect_display_violations',
    'collect_violations',
    'declaration_from_class',
    'declarations_from_source',
    'validate',
    'validate_display',
    'validate_file',
]
