"""
Shape validation for enumselect declarations.

The shape validator is the only gate protecting the dense index mapping: a
declaration that passes ``validate`` has at least one case, a case for every
member, only unit cases and only implicit tags on an index representation,
so every position in ``0..COUNT`` corresponds to exactly one case and
``from_index_unchecked`` needs no range check of its own.

The display validator is independent: it only requires an enumeration whose
every case carries a text template.
"""

import logging
from typing import List

from enumselect.constants import (
    DERIVE_DISPLAY,
    DERIVE_ENUM_SELECT,
    INDEX_REPRESENTATION,
    RESERVED_CASE_NAMES,
)
from enumselect.core.exceptions import ValidationError
from enumselect.core.model import (
    Declaration,
    Diagnostic,
    DisplayCaseModel,
    ErrorKind,
    Site,
    ValidatedCaseModel,
)

logger = logging.getLogger(__name__)

# Error messages
ERROR_MISSING_INDEX_REPRESENTATION = (
    "`{0}` must derive from IndexEnum to use enum_select (found {1} representation)"
)
ERROR_NOT_AN_ENUMERATION = "`{0}` is not an enumeration; {1} is only supported on Enum classes"
ERROR_EMPTY_ENUMERATION = "`{0}` must declare at least one case"
ERROR_CASE_HAS_FIELDS = "case `{0}` must be a unit case, found payload ({1})"
ERROR_EXPLICIT_DISCRIMINANT = "case `{0}` must use auto() instead of the explicit value {1}"
ERROR_RESERVED_CASE_NAME = "case `{0}` would shadow the generated `{0}` attribute"
ERROR_DUPLICATE_CASE = "case `{0}` is declared more than once"
ERROR_MISSING_DISPLAY_TEMPLATE = "case `{0}` requires a display(\"...\") template"
ERROR_UNRECOGNIZED_BINDING = "`{0}` is bound by a statement that may create a member; declare it as `{0} = auto()`"
ERROR_UNDECLARED_MEMBER = "member `{0}` of `{1}` has no `{0} = auto()` case in the class body"
ERROR_NOT_A_MEMBER = "case `{0}` did not become a member of the enumeration"


def _membership_violations(declaration: Declaration) -> List[Diagnostic]:
    """Report members the case list does not account for, and the reverse."""
    violations = [
        Diagnostic(
            kind=ErrorKind.UNRECOGNIZED_CASE,
            message=ERROR_UNRECOGNIZED_BINDING.format(case.name),
            location=case.location,
            site=Site.CASE,
        )
        for case in declaration.unrecognized
    ]
    if declaration.members is None:
        return violations

    declared = {case.name for case in declaration.cases + declaration.unrecognized}
    violations.extend(
        Diagnostic(
            kind=ErrorKind.UNRECOGNIZED_CASE,
            message=ERROR_UNDECLARED_MEMBER.format(name, declaration.name),
            location=declaration.location,
            site=Site.DECLARATION,
        )
        for name in declaration.members
        if name not in declared
    )
    violations.extend(
        Diagnostic(
            kind=ErrorKind.UNRECOGNIZED_CASE,
            message=ERROR_NOT_A_MEMBER.format(case.name),
            location=case.location,
            site=Site.CASE,
        )
        for case in declaration.cases
        if case.name not in declaration.members
    )
    return violations


def collect_violations(declaration: Declaration) -> List[Diagnostic]:
    """
    Check a declaration for use with enum_select.

    The representation, shape and emptiness checks stop at the first
    failure. Members the case list does not account for are reported next,
    then the per-case checks run over every case so all offending cases are
    reported in one pass.

    Args:
        declaration: Declaration to check

    Returns:
        List of diagnostics, empty if the declaration is valid
    """
    if declaration.representation != INDEX_REPRESENTATION:
        found = declaration.representation or "no integer"
        return [Diagnostic(
            kind=ErrorKind.MISSING_INDEX_REPRESENTATION,
            message=ERROR_MISSING_INDEX_REPRESENTATION.format(declaration.name, found),
            location=declaration.location,
            site=Site.DECLARATION,
        )]

    if not declaration.is_enumeration:
        return [Diagnostic(
            kind=ErrorKind.NOT_AN_ENUMERATION,
            message=ERROR_NOT_AN_ENUMERATION.format(declaration.name, "enum_select"),
            location=declaration.location,
            site=Site.DECLARATION,
        )]

    violations = _membership_violations(declaration)
    if not declaration.cases and not violations:
        return [Diagnostic(
            kind=ErrorKind.EMPTY_ENUMERATION,
            message=ERROR_EMPTY_ENUMERATION.format(declaration.name),
            location=declaration.location,
            site=Site.DECLARATION,
        )]

    seen = set()
    for case in declaration.cases:
        if case.fields:
            violations.append(Diagnostic(
                kind=ErrorKind.CASE_HAS_FIELDS,
                message=ERROR_CASE_HAS_FIELDS.format(case.name, ", ".join(case.fields)),
                location=case.location,
                site=Site.CASE,
            ))

        if case.discriminant is not None:
            violations.append(Diagnostic(
                kind=ErrorKind.EXPLICIT_DISCRIMINANT,
                message=ERROR_EXPLICIT_DISCRIMINANT.format(case.name, case.discriminant),
                location=case.tag_location,
                site=Site.TAG,
            ))

        if case.name in RESERVED_CASE_NAMES:
            violations.append(Diagnostic(
                kind=ErrorKind.RESERVED_CASE_NAME,
                message=ERROR_RESERVED_CASE_NAME.format(case.name),
                location=case.location,
                site=Site.CASE,
            ))

        if case.name in seen:
            violations.append(Diagnostic(
                kind=ErrorKind.DUPLICATE_CASE,
                message=ERROR_DUPLICATE_CASE.format(case.name),
                location=case.location,
                site=Site.CASE,
            ))
        seen.add(case.name)

    return violations


def validate(declaration: Declaration) -> ValidatedCaseModel:
    """
    Validate a declaration for use with enum_select.

    Args:
        declaration: Declaration to validate

    Returns:
        ValidatedCaseModel with the case names in declaration order

    Raises:
        ValidationError: If any check fails, carrying every diagnostic
    """
    violations = collect_violations(declaration)
    if violations:
        logger.debug(f"{declaration.name}: {len(violations)} shape violation(s)")
        raise ValidationError(declaration.name, violations)

    model = ValidatedCaseModel(
        type_name=declaration.name,
        cases=tuple(case.name for case in declaration.cases),
    )
    logger.debug(f"{declaration.name}: validated {model.count} case(s)")
    return model


def collect_display_violations(declaration: Declaration) -> List[Diagnostic]:
    """
    Check a declaration for use with enum_display.

    Args:
        declaration: Declaration to check

    Returns:
        List of diagnostics: unaccounted members, then one per case without
        a template
    """
    if not declaration.is_enumeration:
        return [Diagnostic(
            kind=ErrorKind.NOT_AN_ENUMERATION,
            message=ERROR_NOT_AN_ENUMERATION.format(declaration.name, "enum_display"),
            location=declaration.location,
            site=Site.DECLARATION,
        )]

    violations = _membership_violations(declaration)
    violations.extend(
        Diagnostic(
            kind=ErrorKind.MISSING_DISPLAY_TEMPLATE,
            message=ERROR_MISSING_DISPLAY_TEMPLATE.format(case.name),
            location=case.location,
            site=Site.CASE,
        )
        for case in declaration.cases
        if case.display is None
    )
    return violations


def validate_display(declaration: Declaration) -> DisplayCaseModel:
    """
    Validate a declaration for use with enum_display.

    Args:
        declaration: Declaration to validate

    Returns:
        DisplayCaseModel pairing every case with its template, in order

    Raises:
        ValidationError: If the declaration is not an enumeration or a case
            has no template
    """
    violations = collect_display_violations(declaration)
    if violations:
        logger.debug(f"{declaration.name}: {len(violations)} display violation(s)")
        raise ValidationError(declaration.name, violations)

    return DisplayCaseModel(
        type_name=declaration.name,
        entries=tuple((case.name, case.display) for case in declaration.cases),
    )


def check_declaration(declaration: Declaration) -> List[Diagnostic]:
    """
    Run the validators a declaration derives.

    Args:
        declaration: Declaration to check

    Returns:
        Diagnostics of the shape validator (for enum_select) followed by those
        of the display validator (for enum_display), each reported once
    """
    violations: List[Diagnostic] = []
    if DERIVE_ENUM_SELECT in declaration.derives:
        violations.extend(collect_violations(declaration))
    if DERIVE_DISPLAY in declaration.derives:
        violations += [
            violation for violation in collect_display_violations(declaration)
            if violation not in violations
        ]
    return violations
