"""
Tests for the shape and display validators, on hand-built declarations.
"""

import dataclasses

import pytest

from enumselect.constants import DERIVE_DISPLAY, DERIVE_ENUM_SELECT, INT_REPRESENTATION
from enumselect.core.exceptions import ValidationError
from enumselect.core.model import CaseDeclaration, ErrorKind, Location, Site
from enumselect.validation.shape_validator import (
    check_declaration,
    collect_display_violations,
    collect_violations,
    validate,
    validate_display,
)


def with_templates(declaration, *templates):
    cases = tuple(
        dataclasses.replace(case, display=template)
        for case, template in zip(declaration.cases, templates)
    )
    return dataclasses.replace(declaration, cases=cases)


class TestValidate:

    def test_valid_declaration(self, make_declaration):
        model = validate(make_declaration("A", "B", "C", "D"))
        assert model.type_name == "E"
        assert model.cases == ("A", "B", "C", "D")
        assert model.count == 4

    def test_missing_representation(self, make_declaration):
        violations = collect_violations(make_declaration("A", representation=None))
        assert [v.kind for v in violations] == [ErrorKind.MISSING_INDEX_REPRESENTATION]
        assert violations[0].site is Site.DECLARATION
        assert violations[0].location == Location("decl.py", 1, 1)

    def test_representation_check_short_circuits(self, make_declaration):
        declaration = make_declaration(representation=INT_REPRESENTATION, is_enumeration=False)
        violations = collect_violations(declaration)
        assert [v.kind for v in violations] == [ErrorKind.MISSING_INDEX_REPRESENTATION]
        assert "int representation" in violations[0].message

    def test_not_an_enumeration(self, make_declaration):
        violations = collect_violations(make_declaration("A", is_enumeration=False))
        assert [v.kind for v in violations] == [ErrorKind.NOT_AN_ENUMERATION]

    def test_empty_enumeration(self, make_declaration):
        violations = collect_violations(make_declaration())
        assert [v.kind for v in violations] == [ErrorKind.EMPTY_ENUMERATION]

    def test_case_checks_accumulate(self, make_declaration):
        tag = Location("decl.py", 3, 9)
        declaration = make_declaration(cases=(
            CaseDeclaration("Unit", Location("decl.py", 2, 5)),
            CaseDeclaration("Tagged", Location("decl.py", 3, 5), discriminant="7", discriminant_location=tag),
            CaseDeclaration("Square", Location("decl.py", 4, 5), fields=("side_len",)),
            CaseDeclaration("Both", Location("decl.py", 5, 5), discriminant="1", fields=("x",)),
        ))
        violations = collect_violations(declaration)

        assert [v.kind for v in violations] == [
            ErrorKind.EXPLICIT_DISCRIMINANT,
            ErrorKind.CASE_HAS_FIELDS,
            ErrorKind.CASE_HAS_FIELDS,
            ErrorKind.EXPLICIT_DISCRIMINANT,
        ]
        assert violations[0].site is Site.TAG
        assert violations[0].location == tag
        assert violations[1].site is Site.CASE
        assert violations[1].location == Location("decl.py", 4, 5)
        # Without a tag location the case location is used
        assert violations[3].location == Location("decl.py", 5, 5)

    def test_reserved_case_names(self, make_declaration):
        violations = collect_violations(make_declaration("ALL", "Ok", "first"))
        assert [v.kind for v in violations] == [
            ErrorKind.RESERVED_CASE_NAME,
            ErrorKind.RESERVED_CASE_NAME,
        ]

    def test_duplicate_case(self, make_declaration):
        violations = collect_violations(make_declaration("A", "B", "A"))
        assert [v.kind for v in violations] == [ErrorKind.DUPLICATE_CASE]
        assert violations[0].location.line == 4

    def test_validate_raises_with_every_diagnostic(self, make_declaration):
        declaration = make_declaration(cases=(
            CaseDeclaration("A", discriminant="1"),
            CaseDeclaration("B", fields=("0",)),
        ))
        with pytest.raises(ValidationError) as excinfo:
            validate(declaration)

        assert excinfo.value.kinds == [ErrorKind.EXPLICIT_DISCRIMINANT, ErrorKind.CASE_HAS_FIELDS]
        assert str(excinfo.value).startswith("2 error(s) in `E`:")

    def test_diagnostic_string(self, make_declaration):
        [violation] = collect_violations(make_declaration())
        assert str(violation) == "decl.py:1:1 - empty_enumeration: `E` must declare at least one case"


class TestMembership:

    def test_unrecognized_bindings(self, make_declaration):
        declaration = make_declaration("A", unrecognized=(
            CaseDeclaration("B", Location("decl.py", 3, 5)),
        ))
        [violation] = collect_violations(declaration)
        assert violation.kind is ErrorKind.UNRECOGNIZED_CASE
        assert violation.site is Site.CASE
        assert violation.location == Location("decl.py", 3, 5)

    def test_member_without_case(self, make_declaration):
        declaration = make_declaration("A", members=("A", "_b"))
        [violation] = collect_violations(declaration)
        assert violation.kind is ErrorKind.UNRECOGNIZED_CASE
        assert violation.site is Site.DECLARATION
        assert "`_b`" in violation.message

    def test_case_without_member(self, make_declaration):
        declaration = make_declaration("A", "B", members=("A",))
        [violation] = collect_violations(declaration)
        assert violation.kind is ErrorKind.UNRECOGNIZED_CASE
        assert violation.location.line == 3

    def test_matching_members_pass(self, make_declaration):
        assert validate(make_declaration("A", "B", members=("A", "B"))).count == 2

    def test_members_only_in_nested_blocks_are_not_empty(self, make_declaration):
        declaration = make_declaration(
            unrecognized=(CaseDeclaration("B", Location("decl.py", 3, 9)),),
            members=("B",),
        )
        assert [v.kind for v in collect_violations(declaration)] == [ErrorKind.UNRECOGNIZED_CASE]

    def test_display_checks_members_too(self, make_declaration):
        declaration = with_templates(make_declaration("A", members=("A", "B")), "a")
        assert [v.kind for v in collect_display_violations(declaration)] == [ErrorKind.UNRECOGNIZED_CASE]


class TestValidateDisplay:

    def test_entries_follow_case_order(self, make_declaration):
        templates = ["1 minute", "5 minutes", "50 words", "100 words", "Endless"]
        declaration = with_templates(
            make_declaration("Duration1m", "Duration5m", "Number50", "Number100", "Infinite"),
            *templates,
        )
        model = validate_display(declaration)
        assert [template for _, template in model.entries] == templates
        assert [case for case, _ in model.entries] == [c.name for c in declaration.cases]

    def test_missing_templates_are_all_reported(self, make_declaration):
        declaration = with_templates(make_declaration("A", "B", "C"), "a", None, None)
        violations = collect_display_violations(declaration)
        assert [v.kind for v in violations] == [ErrorKind.MISSING_DISPLAY_TEMPLATE] * 2
        assert [v.location.line for v in violations] == [3, 4]

    def test_display_needs_an_enumeration(self, make_declaration):
        with pytest.raises(ValidationError) as excinfo:
            validate_display(make_declaration(is_enumeration=False))
        assert excinfo.value.kinds == [ErrorKind.NOT_AN_ENUMERATION]

    def test_display_ignores_representation(self, make_declaration):
        declaration = with_templates(make_declaration("A", representation=None), "a")
        assert validate_display(declaration).entries == (("A", "a"),)


class TestCheckDeclaration:

    def test_runs_requested_validators(self, make_declaration):
        both = frozenset({DERIVE_ENUM_SELECT, DERIVE_DISPLAY})
        declaration = make_declaration("A", "B", derives=both, representation=None)
        kinds = [v.kind for v in check_declaration(declaration)]
        assert kinds == [
            ErrorKind.MISSING_INDEX_REPRESENTATION,
            ErrorKind.MISSING_DISPLAY_TEMPLATE,
            ErrorKind.MISSING_DISPLAY_TEMPLATE,
        ]

    def test_no_derives_means_no_checks(self, make_declaration):
        assert check_declaration(make_declaration(derives=frozenset())) == []

    def test_shared_violations_are_reported_once(self, make_declaration):
        both = frozenset({DERIVE_ENUM_SELECT, DERIVE_DISPLAY})
        declaration = with_templates(
            make_declaration("A", derives=both, unrecognized=(
                CaseDeclaration("B", Location("decl.py", 4, 9)),
            )),
            "a",
        )
        assert [v.kind for v in check_declaration(declaration)] == [ErrorKind.UNRECOGNIZED_CASE]
