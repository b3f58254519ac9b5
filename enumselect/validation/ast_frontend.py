"""
AST-based declaration parsing for enumselect.

This module turns Python class definitions into ``Declaration`` values. Two
entry points share the same case extraction:

- ``declarations_from_source`` parses a module's source and returns every
  class decorated with ``enum_select`` or ``enum_display``. Representation
  and shape are inferred from base class names.
- ``declaration_from_class`` reads the source of a live class and takes
  representation and shape from the class object itself.

Case recognition follows the rules ``enum`` applies to a class body: simple
assignments are members, while ``_sunder_``, ``__dunder__`` and ``__private``
names, names listed in ``_ignore_``, functions and descriptor wrappers are
not. Other bindings that may create members (unpacking targets, assignments
in nested blocks) are collected separately as unrecognized.
"""

import ast
import enum
import inspect
import logging
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from enumselect.constants import (
    AUTO_MARKER,
    DERIVES,
    DISPLAY_MARKER,
    ENUM_BASES,
    FLAG_BASES,
    INDEX_BASES,
    INDEX_REPRESENTATION,
    INT_BASES,
    INT_REPRESENTATION,
    MEMBER_WRAPPER,
    NON_MEMBER_WRAPPERS,
    STR_BASES,
    STR_REPRESENTATION,
)
from enumselect.core.exceptions import DeclarationSourceError
from enumselect.core.index_enum import IndexEnum
from enumselect.core.model import CaseDeclaration, Declaration, Location

logger = logging.getLogger(__name__)


def _callable_name(node: ast.AST) -> Optional[str]:
    """Return the trailing name of a Name/Attribute/Call node."""
    if isinstance(node, ast.Call):
        return _callable_name(node.func)
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _location(node: ast.AST, file_path: str) -> Location:
    return Location(
        file=file_path,
        line=getattr(node, 'lineno', 0),
        column=getattr(node, 'col_offset', -1) + 1,
    )


def _is_dunder(name: str) -> bool:
    return (len(name) > 4 and name[:2] == name[-2:] == '__'
            and name[2] != '_' and name[-3] != '_')


def _is_sunder(name: str) -> bool:
    return (len(name) > 2 and name[0] == name[-1] == '_'
            and name[1] != '_' and name[-2] != '_')


def is_member_name(name: str) -> bool:
    """
    Whether ``enum`` turns a name bound in a class body into a member.

    ``_sunder_`` and ``__dunder__`` names are reserved, and ``__private``
    names are mangled and left out. Any other name, including a single
    leading underscore, is a member.
    """
    if _is_dunder(name) or _is_sunder(name):
        return False
    return not (name.startswith('__') and not name.endswith('__'))


def _ignored_names(body: List[ast.stmt]) -> Set[str]:
    """Collect the names an enum body lists in ``_ignore_``."""
    ignored = set()
    for stmt in body:
        if not isinstance(stmt, ast.Assign):
            continue
        if not any(isinstance(t, ast.Name) and t.id == '_ignore_' for t in stmt.targets):
            continue
        value = stmt.value
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            ignored.update(value.value.replace(',', ' ').split())
        elif isinstance(value, (ast.List, ast.Tuple)):
            ignored.update(
                elt.value for elt in value.elts
                if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
            )
    return ignored


def _classify_case(name: str, target: ast.AST, value: ast.expr,
                   file_path: str) -> Optional[CaseDeclaration]:
    """
    Build a CaseDeclaration from one member assignment.

    Returns None when the assignment does not create a member.
    """
    location = _location(target, file_path)

    if isinstance(value, ast.Lambda):
        return None

    if isinstance(value, ast.Call):
        func_name = _callable_name(value.func)

        if func_name in NON_MEMBER_WRAPPERS:
            return None

        if func_name == MEMBER_WRAPPER and len(value.args) == 1 and not value.keywords:
            return _classify_case(name, target, value.args[0], file_path)

        if func_name == AUTO_MARKER:
            if not value.args and not value.keywords:
                return CaseDeclaration(name=name, location=location)
            return CaseDeclaration(
                name=name,
                location=location,
                discriminant=ast.unparse(value),
                discriminant_location=_location(value, file_path),
            )

        if func_name == DISPLAY_MARKER:
            template = None
            if (len(value.args) == 1 and not value.keywords
                    and isinstance(value.args[0], ast.Constant)
                    and isinstance(value.args[0].value, str)):
                template = value.args[0].value
            return CaseDeclaration(name=name, location=location, display=template)

        # Any other constructor call with arguments is a structural payload
        if value.keywords or value.args:
            fields = tuple(str(i) for i in range(len(value.args)))
            fields += tuple(kw.arg or '**' for kw in value.keywords)
            return CaseDeclaration(name=name, location=location, fields=fields)

    if isinstance(value, ast.Tuple):
        fields = tuple(str(i) for i in range(len(value.elts)))
        return CaseDeclaration(name=name, location=location, fields=fields or ('()',))

    if isinstance(value, ast.Dict):
        fields = tuple(
            ast.unparse(key) if key is not None else '**'
            for key in value.keys
        )
        return CaseDeclaration(name=name, location=location, fields=fields or ('{}',))

    return CaseDeclaration(
        name=name,
        location=location,
        discriminant=ast.unparse(value),
        discriminant_location=_location(value, file_path),
    )


def extract_cases(node: ast.ClassDef, file_path: str) -> Tuple[CaseDeclaration, ...]:
    """
    Extract the member declarations of an enum class body, in order.

    Args:
        node: Class definition node
        file_path: File the node was parsed from

    Returns:
        Tuple of CaseDeclaration in declaration order
    """
    ignored = _ignored_names(node.body)
    cases = []

    for stmt in node.body:
        if isinstance(stmt, ast.Assign):
            targets = [t for t in stmt.targets if isinstance(t, ast.Name)]
            value = stmt.value
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None and isinstance(stmt.target, ast.Name):
            targets = [stmt.target]
            value = stmt.value
        else:
            continue

        for target in targets:
            name = target.id
            if not is_member_name(name) or name in ignored:
                continue
            case = _classify_case(name, target, value, file_path)
            if case is not None:
                cases.append(case)

    return tuple(cases)


# Class body statements whose nested bindings land in the class namespace
_COMPOUND_STATEMENTS = (ast.If, ast.For, ast.AsyncFor, ast.While, ast.With, ast.AsyncWith, ast.Try)


def _target_names(target: ast.AST) -> List[ast.Name]:
    if isinstance(target, ast.Name):
        return [target]
    if isinstance(target, (ast.Tuple, ast.List)):
        return [name for elt in target.elts for name in _target_names(elt)]
    if isinstance(target, ast.Starred):
        return _target_names(target.value)
    return []


def _nested_bindings(stmt: ast.stmt) -> List[ast.Name]:
    """Names bound anywhere inside a compound statement, outside nested scopes."""
    names = []
    pending = [stmt]
    while pending:
        node = pending.pop()
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef, ast.Lambda)):
            continue
        if isinstance(node, ast.Assign):
            for target in node.targets:
                names.extend(_target_names(target))
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            names.extend(_target_names(node.target))
        elif isinstance(node, (ast.For, ast.AsyncFor)):
            names.extend(_target_names(node.target))
        elif isinstance(node, ast.withitem) and node.optional_vars is not None:
            names.extend(_target_names(node.optional_vars))
        pending.extend(ast.iter_child_nodes(node))
    return names


def unrecognized_bindings(node: ast.ClassDef, file_path: str) -> Tuple[CaseDeclaration, ...]:
    """
    Find names an enum body binds in ways ``extract_cases`` does not read.

    These are unpacking targets (``B, C = 5, 9``) and assignments nested in
    ``if``/``for``/``while``/``with``/``try`` blocks. Each of them may create
    a member whose value is unknown. Names removed by a top-level ``del``
    are left out.

    Args:
        node: Class definition node
        file_path: File the node was parsed from

    Returns:
        One CaseDeclaration per bound name, in source order
    """
    ignored = _ignored_names(node.body)
    for stmt in node.body:
        if isinstance(stmt, ast.Delete):
            ignored.update(name.id for target in stmt.targets for name in _target_names(target))

    bound: List[ast.Name] = []
    for stmt in node.body:
        if isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                if not isinstance(target, ast.Name):
                    bound.extend(_target_names(target))
        elif isinstance(stmt, _COMPOUND_STATEMENTS):
            bound.extend(_nested_bindings(stmt))

    bound.sort(key=lambda name: (name.lineno, name.col_offset))
    found = {}
    for name in bound:
        if is_member_name(name.id) and name.id not in ignored and name.id not in found:
            found[name.id] = CaseDeclaration(name=name.id, location=_location(name, file_path))
    return tuple(found.values())


def derives_of(node: ast.ClassDef) -> FrozenSet[str]:
    """Return the enumselect derives requested by a class's decorators."""
    return frozenset(
        name for name in (_callable_name(d) for d in node.decorator_list)
        if name in DERIVES
    )


def representation_of(ancestors: Set[str]) -> Optional[str]:
    """Map a set of base class names to a representation tag."""
    if ancestors & INDEX_BASES:
        return INDEX_REPRESENTATION
    if ancestors & INT_BASES:
        return INT_REPRESENTATION
    if ancestors & STR_BASES:
        return STR_REPRESENTATION
    return None


def is_enumeration_of(ancestors: Set[str]) -> bool:
    """Whether a set of base class names describes a closed enumeration."""
    return bool(ancestors & ENUM_BASES) and not (ancestors & FLAG_BASES)


class DeclarationCollector(ast.NodeVisitor):
    """Collects decorated enum declarations from a module AST."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.declarations: List[Declaration] = []
        # Direct base names of every class seen so far, for transitive lookups
        self.local_bases: Dict[str, List[str]] = {}

    def ancestors(self, base_names: List[str]) -> Set[str]:
        """Resolve base names through classes defined earlier in the module."""
        resolved: Set[str] = set()
        pending = list(base_names)
        while pending:
            name = pending.pop()
            if name in resolved:
                continue
            resolved.add(name)
            pending.extend(self.local_bases.get(name, []))
        return resolved

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        """Record the class's bases and collect it if it is decorated."""
        base_names = [n for n in (_callable_name(b) for b in node.bases) if n]
        derives = derives_of(node)

        if derives:
            ancestors = self.ancestors(base_names)
            self.declarations.append(Declaration(
                name=node.name,
                location=_location(node, self.file_path),
                representation=representation_of(ancestors),
                is_enumeration=is_enumeration_of(ancestors),
                cases=extract_cases(node, self.file_path),
                derives=derives,
                unrecognized=unrecognized_bindings(node, self.file_path),
            ))

        # Registered after building so a class cannot resolve through itself
        self.local_bases[node.name] = base_names
        self.generic_visit(node)


def declarations_from_source(source: str, file_path: str = "<string>") -> List[Declaration]:
    """
    Parse Python source and return its decorated enum declarations.

    Args:
        source: Module source code
        file_path: File name used in locations

    Returns:
        Declarations in source order

    Raises:
        SyntaxError: If the source does not parse
    """
    tree = ast.parse(source, filename=file_path)
    collector = DeclarationCollector(file_path)
    collector.visit(tree)
    logger.debug(f"{file_path}: found {len(collector.declarations)} declaration(s)")
    return collector.declarations


def _find_class_node(tree: ast.AST, name: str, first_line: int) -> Optional[ast.ClassDef]:
    for node in ast.walk(tree):
        if not isinstance(node, ast.ClassDef) or node.name != name:
            continue
        decorated_line = node.decorator_list[0].lineno if node.decorator_list else node.lineno
        if first_line in (decorated_line, node.lineno):
            return node
    return None


def live_representation(cls: type) -> Optional[str]:
    """Representation tag of a live class."""
    if issubclass(cls, IndexEnum):
        return INDEX_REPRESENTATION
    if issubclass(cls, int):
        return INT_REPRESENTATION
    if issubclass(cls, str):
        return STR_REPRESENTATION
    return None


def live_is_enumeration(cls: type) -> bool:
    """Whether a live class is a closed enumeration."""
    return issubclass(cls, enum.Enum) and not issubclass(cls, enum.Flag)


def declaration_from_class(cls: type) -> Declaration:
    """
    Build the declaration of a live class from its source.

    Cases come from the class body as written, so explicit values and
    payloads are visible even though ``enum`` has already evaluated them.
    Representation, shape and the member names come from the class object,
    so members the source does not show as cases can be reported.

    Args:
        cls: The class being decorated

    Returns:
        Declaration of the class

    Raises:
        TypeError: If ``cls`` is not a class
        DeclarationSourceError: If the class source cannot be read or parsed
    """
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {type(cls).__name__}")

    try:
        file_lines, start = inspect.findsource(cls)
        file_path = inspect.getsourcefile(cls) or inspect.getfile(cls)
    except (OSError, TypeError) as error:
        raise DeclarationSourceError(
            f"cannot read the declaration of `{cls.__qualname__}`: {error}"
        ) from error

    try:
        tree = ast.parse("".join(file_lines), filename=file_path)
    except SyntaxError as error:
        raise DeclarationSourceError(
            f"cannot parse the source of `{cls.__qualname__}`: {error}"
        ) from error

    node = _find_class_node(tree, cls.__name__, start + 1)
    if node is None:
        raise DeclarationSourceError(
            f"cannot locate `{cls.__qualname__}` in {file_path} at line {start + 1}"
        )

    members = tuple(cls.__members__) if issubclass(cls, enum.Enum) else None
    unrecognized = unrecognized_bindings(node, file_path)
    if members is not None:
        unrecognized = tuple(case for case in unrecognized if case.name in members)

    declaration = Declaration(
        name=cls.__name__,
        location=_location(node, file_path),
        representation=live_representation(cls),
        is_enumeration=live_is_enumeration(cls),
        cases=extract_cases(node, file_path),
        derives=derives_of(node),
        unrecognized=unrecognized,
        members=members,
    )
    logger.debug(f"Parsed declaration of {cls.__qualname__} from {file_path}:{node.lineno}")
    return declaration
