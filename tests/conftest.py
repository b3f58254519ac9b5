"""Shared fixtures for enumselect tests."""

import textwrap

import pytest

from enumselect.constants import DERIVE_ENUM_SELECT, INDEX_REPRESENTATION
from enumselect.core.model import CaseDeclaration, Declaration, Location


@pytest.fixture
def make_declaration():
    """Build a Declaration whose cases sit on consecutive lines of decl.py."""
    def _make(*case_names, **overrides):
        cases = tuple(
            CaseDeclaration(name=name, location=Location("decl.py", i + 2, 5))
            for i, name in enumerate(case_names)
        )
        fields = dict(
            name="E",
            location=Location("decl.py", 1, 1),
            representation=INDEX_REPRESENTATION,
            is_enumeration=True,
            cases=cases,
            derives=frozenset({DERIVE_ENUM_SELECT}),
        )
        fields.update(overrides)
        return Declaration(**fields)
    return _make


@pytest.fixture
def write_file(tmp_path):
    """Write dedented text to a file under tmp_path and return its path."""
    def _write(relative_path, content):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write
