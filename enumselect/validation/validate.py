"""
Static checking of enumselect declarations in Python sources.

Finds classes decorated with ``enum_select`` or ``enum_display`` without
importing anything, and runs the validators they derive. This is what the
``enumselect check`` command uses to surface declaration errors before the
code runs.
"""

import logging
from pathlib import Path
from typing import List, Optional, Set

from enumselect.core.model import Diagnostic, ErrorKind, Location, Site
from enumselect.validation.ast_frontend import declarations_from_source
from enumselect.validation.shape_validator import check_declaration

logger = logging.getLogger(__name__)


def validate_source(source: str, file_path: str = "<string>") -> List[Diagnostic]:
    """
    Check every decorated declaration in a piece of Python source.

    Args:
        source: Module source code
        file_path: File name used in locations

    Returns:
        List of diagnostics, in source order
    """
    try:
        declarations = declarations_from_source(source, file_path)
    except SyntaxError as e:
        return [Diagnostic(
            kind=ErrorKind.SYNTAX_ERROR,
            message=f"Syntax error: {e.msg}",
            location=Location(file=file_path, line=e.lineno or 0, column=e.offset or 0),
            site=Site.DECLARATION,
        )]

    violations = []
    for declaration in declarations:
        violations.extend(check_declaration(declaration))
    return violations


def validate_file(file_path: str) -> List[Diagnostic]:
    """
    Check a Python file.

    Args:
        file_path: Path to the Python file

    Returns:
        List of diagnostics
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return validate_source(source, file_path)


def find_python_files(directory: Path, exclude_dirs: Optional[Set[str]] = None) -> List[Path]:
    """
    List the Python files under a directory, one directory level at a time.

    Args:
        directory: Directory to search
        exclude_dirs: Directory names not to descend into

    Returns:
        Python file paths, shallower levels first and sorted within a level
    """
    excluded = set(exclude_dirs or ())
    found: List[Path] = []
    level = [directory]

    while level:
        next_level = []
        for current in level:
            try:
                entries = sorted(current.iterdir())
            except OSError as e:
                logger.warning(f"Skipping unreadable directory {current}: {e}")
                continue
            next_level.extend(entry for entry in entries if entry.is_dir() and entry.name not in excluded)
            found.extend(entry for entry in entries if entry.is_file() and entry.suffix == ".py")
        level = next_level

    return found


def validate_directory(directory: Path, exclude_dirs: Optional[Set[str]] = None) -> List[Diagnostic]:
    """
    Check all Python files in a directory.

    Args:
        directory: Directory to check.
        exclude_dirs: Set of directory names to exclude.

    Returns:
        List of diagnostics.
    """
    violations = []
    for file_path in find_python_files(directory, exclude_dirs):
        violations.extend(validate_file(str(file_path)))
    return violations
