"""
Tests for the enumselect command line.
"""

import pytest

from enumselect.cli import main

CLEAN = """\
from enum import auto
from enumselect import IndexEnum, enum_select


@enum_select
class Note(IndexEnum):
    A = auto()
    B = auto()
"""

BAD = """\
from enum import Enum, auto
from enumselect import IndexEnum, enum_select


@enum_select
class Thing(IndexEnum):
    NONE = auto()
    SOME = (1,)


@enum_select
class Plain(Enum):
    A = auto()
"""

SCHEMA = """\
enums:
  - name: DurationType
    repr: index
    derive: [enum_select, enum_display]
    cases:
      - name: Duration1m
        display: "1 minute"
      - name: Infinite
        display: Endless
"""


class TestCheck:

    def test_clean_file(self, write_file, capsys):
        path = write_file("clean.py", CLEAN)
        assert main(["check", str(path), "--fail-on-error"]) == 0
        assert "No enumselect violations found." in capsys.readouterr().out

    def test_violations_are_reported(self, write_file, capsys):
        path = write_file("bad.py", BAD)
        assert main(["check", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Found 2 enumselect violations:" in out
        assert f"\n{path}:\n" in out
        assert "  Line 8: case_has_fields - " in out
        assert "  Line 12: missing_index_representation - " in out

    def test_fail_on_error(self, write_file):
        path = write_file("bad.py", BAD)
        assert main(["check", str(path), "--fail-on-error"]) == 1

    def test_directory_and_exclude(self, write_file, tmp_path, capsys):
        write_file("pkg/clean.py", CLEAN)
        write_file("pkg/vendor/bad.py", BAD)

        assert main(["check", str(tmp_path / "pkg"), "--fail-on-error"]) == 1
        capsys.readouterr()

        assert main(["check", str(tmp_path / "pkg"), "--exclude", "vendor", "--fail-on-error"]) == 0
        assert "No enumselect violations found." in capsys.readouterr().out

    def test_output_file(self, write_file, tmp_path, capsys):
        path = write_file("bad.py", BAD)
        report = tmp_path / "report.txt"

        main(["check", str(path), "--output", str(report)])

        assert capsys.readouterr().out == ""
        assert "Found 2 enumselect violations:" in report.read_text(encoding="utf-8")

    def test_syntax_error(self, write_file, capsys):
        path = write_file("broken.py", "class Broken(:\n")
        assert main(["check", str(path), "--fail-on-error"]) == 1
        assert "syntax_error" in capsys.readouterr().out

    def test_not_python(self, write_file, capsys):
        path = write_file("notes.txt", "hello\n")
        assert main(["check", str(path)]) == 0
        assert "is not a Python file or directory" in capsys.readouterr().err

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestGenerate:

    def test_generate_to_file(self, write_file, tmp_path):
        schema = write_file("enums.yaml", SCHEMA)
        output = tmp_path / "enums.py"

        assert main(["generate", str(schema), "-o", str(output)]) == 0

        source = output.read_text(encoding="utf-8")
        assert "Generated by enumselect from enums.yaml" in source

        namespace = {"__name__": "enums"}
        exec(compile(source, str(output), "exec"), namespace)
        DurationType = namespace["DurationType"]
        assert DurationType.COUNT == 2
        assert str(DurationType.Infinite) == "Endless"
        assert DurationType.Duration1m.wrapping_prev() is DurationType.Infinite

    def test_generate_to_stdout(self, write_file, capsys):
        schema = write_file("enums.yaml", SCHEMA)
        assert main(["generate", str(schema), "--no-header"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("from enum import auto\n")
        assert "class DurationType(IndexEnum):" in out

    def test_invalid_declarations(self, write_file, capsys):
        schema = write_file("bad.yaml", """\
            enums:
              - name: Thing
                repr: index
                cases:
                  - name: Some
                    fields: ["0"]
              - name: Empty
                repr: index
            """)
        assert main(["generate", str(schema)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "case_has_fields" in captured.err
        assert "empty_enumeration" in captured.err

    def test_schema_error(self, write_file, capsys):
        schema = write_file("bad.yaml", "enums: {}\n")
        assert main(["generate", str(schema)]) == 1
        assert "Error: " in capsys.readouterr().err

    def test_missing_schema(self, tmp_path, capsys):
        assert main(["generate", str(tmp_path / "absent.yaml")]) == 1
        assert "Error: " in capsys.readouterr().err

    def test_names_must_be_identifiers(self, write_file, tmp_path, capsys):
        schema = write_file("bad.yaml", """\
            enums:
              - name: Bad Name
                repr: index
                cases: ["A B", class]
            """)
        output = tmp_path / "enums.py"

        assert main(["generate", str(schema), "-o", str(output)]) == 1
        assert "not a valid Python identifier" in capsys.readouterr().err
        assert not output.exists()
