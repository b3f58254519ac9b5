"""
YAML schema front end.

A schema file declares enumerations for the pre-build generator::

    options:
      header: true
    enums:
      - name: DurationType
        repr: index
        derive: [enum_select, enum_display]
        cases:
          - name: Duration1m
            display: "1 minute"
          - Infinite

The document is composed rather than loaded so every node keeps its line
and column, which end up in the declaration and case locations. A case
``value:`` is an explicit tag and a ``fields:`` list is a payload; both are
left for the shape validator to reject. Enum and case names are written into
generated code, so they must be Python identifiers and case names must be
names ``enum`` turns into members.
"""

import keyword
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml

from enumselect.constants import DERIVE_ENUM_SELECT, DERIVES
from enumselect.core.config import GenerationConfig
from enumselect.core.exceptions import SchemaError
from enumselect.core.model import CaseDeclaration, Declaration, Location
from enumselect.validation.ast_frontend import is_member_name

logger = logging.getLogger(__name__)

ENUM_KIND = "enum"
DECLARATION_KEYS = {"name", "repr", "kind", "derive", "cases"}
CASE_KEYS = {"name", "value", "fields", "display"}


@dataclass(frozen=True)
class Schema:
    """Declarations and generation options read from one schema file."""
    source: str
    declarations: Tuple[Declaration, ...]
    config: GenerationConfig


def _node_location(node: yaml.Node, source: str) -> Location:
    return Location(file=source, line=node.start_mark.line + 1, column=node.start_mark.column + 1)


def _fail(node: yaml.Node, source: str, message: str) -> SchemaError:
    return SchemaError(f"{_node_location(node, source)} - {message}")


def _mapping(node: yaml.Node, source: str, what: str) -> Dict[str, yaml.Node]:
    if not isinstance(node, yaml.MappingNode):
        raise _fail(node, source, f"{what} must be a mapping")
    result = {}
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise _fail(key_node, source, f"{what} keys must be plain names")
        if key_node.value in result:
            raise _fail(key_node, source, f"duplicate key '{key_node.value}' in {what}")
        result[key_node.value] = value_node
    return result


def _sequence(node: yaml.Node, source: str, what: str) -> List[yaml.Node]:
    if not isinstance(node, yaml.SequenceNode):
        raise _fail(node, source, f"{what} must be a list")
    return list(node.value)


def _scalar(node: yaml.Node, source: str, what: str) -> str:
    if not isinstance(node, yaml.ScalarNode):
        raise _fail(node, source, f"{what} must be a scalar")
    return node.value



def _identifier(node: yaml.Node, source: str, what: str) -> str:
    name = _scalar(node, source, what)
    if not name.isidentifier() or keyword.iskeyword(name):
        raise _fail(node, source, f"{what} '{name}' is not a valid Python identifier")
    return name

def _check_keys(mapping: Dict[str, yaml.Node], allowed: set, source: str, what: str) -> None:
    for key, value_node in mapping.items():
        if key not in allowed:
            raise _fail(value_node, source, f"unknown key '{key}' in {what} (expected one of {sorted(allowed)})")



def _case_name(node: yaml.Node, source: str) -> str:
    name = _identifier(node, source, "case name")
    if not is_member_name(name):
        raise _fail(node, source, f"case name '{name}' is reserved by enum and would not become a member")
    return name

def _case_from_node(node: yaml.Node, source: str) -> CaseDeclaration:
    if isinstance(node, yaml.ScalarNode):
        return CaseDeclaration(name=_case_name(node, source), location=_node_location(node, source))

    entry = _mapping(node, source, "case")
    _check_keys(entry, CASE_KEYS, source, "case")
    if "name" not in entry:
        raise _fail(node, source, "case requires a 'name'")

    discriminant = None
    discriminant_location = None
    if "value" in entry:
        value_node = entry["value"]
        discriminant = _scalar(value_node, source, "case value")
        discriminant_location = _node_location(value_node, source)

    fields: Tuple[str, ...] = ()
    if "fields" in entry:
        fields = tuple(
            _scalar(field_node, source, "field name")
            for field_node in _sequence(entry["fields"], source, "case fields")
        )

    template = None
    if "display" in entry:
        template = _scalar(entry["display"], source, "display template")

    return CaseDeclaration(
        name=_case_name(entry["name"], source),
        location=_node_location(node, source),
        discriminant=discriminant,
        discriminant_location=discriminant_location,
        fields=fields,
        display=template,
    )


def _declaration_from_node(node: yaml.Node, source: str) -> Declaration:
    entry = _mapping(node, source, "enum entry")
    _check_keys(entry, DECLARATION_KEYS, source, "enum entry")
    if "name" not in entry:
        raise _fail(node, source, "enum entry requires a 'name'")

    derives = frozenset({DERIVE_ENUM_SELECT})
    if "derive" in entry:
        derive_nodes = _sequence(entry["derive"], source, "derive")
        derives = frozenset(_scalar(d, source, "derive entry") for d in derive_nodes)
        for derive_node in derive_nodes:
            if derive_node.value not in DERIVES:
                raise _fail(derive_node, source, f"unknown derive '{derive_node.value}' (expected one of {sorted(DERIVES)})")

    representation: Optional[str] = None
    if "repr" in entry:
        representation = _scalar(entry["repr"], source, "repr")

    kind = _scalar(entry["kind"], source, "kind") if "kind" in entry else ENUM_KIND

    cases: Tuple[CaseDeclaration, ...] = ()
    if "cases" in entry:
        cases = tuple(
            _case_from_node(case_node, source)
            for case_node in _sequence(entry["cases"], source, "cases")
        )

    return Declaration(
        name=_identifier(entry["name"], source, "enum name"),
        location=_node_location(node, source),
        representation=representation,
        is_enumeration=(kind == ENUM_KIND),
        cases=cases,
        derives=derives,
    )


def load_schema_text(text: str, source: str = "<schema>") -> Schema:
    """
    Parse schema text into declarations and generation options.

    Args:
        text: YAML document
        source: Name used in locations and messages

    Returns:
        Schema with declarations in document order

    Raises:
        SchemaError: If the document is not valid YAML or not a valid schema
    """
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as error:
        raise SchemaError(f"{source}: invalid YAML: {error}") from error

    if root is None:
        raise SchemaError(f"{source}: empty schema")

    document = _mapping(root, source, "schema")
    _check_keys(document, {"options", "enums"}, source, "schema")

    config = GenerationConfig()
    if "options" in document:
        options = yaml.safe_load(yaml.serialize(document["options"]))
        if not isinstance(options, dict):
            raise _fail(document["options"], source, "options must be a mapping")
        config = GenerationConfig.from_mapping(options, source=source)

    if "enums" not in document:
        raise _fail(root, source, "schema requires an 'enums' list")

    declarations = tuple(
        _declaration_from_node(node, source)
        for node in _sequence(document["enums"], source, "enums")
    )
    logger.debug(f"{source}: loaded {len(declarations)} declaration(s)")
    return Schema(source=source, declarations=declarations, config=config)


def load_schema(path: Union[str, Path]) -> Schema:
    """
    Load a schema file.

    Args:
        path: Path to a YAML schema

    Returns:
        Schema read from the file

    Raises:
        SchemaError: If the file is not a valid schema
        OSError: If the file cannot be read
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    return load_schema_text(text, source=str(path))
