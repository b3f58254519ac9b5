"""
Consolidated constants for enumselect.

This module defines the names the validators, front ends and generators agree
on: representation tags, decorator names and the reserved attribute names of
the generated surface.
"""

from typing import FrozenSet

# Representation tags carried by a Declaration
INDEX_REPRESENTATION = "index"
INT_REPRESENTATION = "int"
STR_REPRESENTATION = "str"

# Base class names recognised by the source front end
INDEX_BASES: FrozenSet[str] = frozenset({"IndexEnum"})
INT_BASES: FrozenSet[str] = frozenset({"int", "IntEnum", "IntFlag"})
STR_BASES: FrozenSet[str] = frozenset({"str", "StrEnum"})
ENUM_BASES: FrozenSet[str] = frozenset({"Enum", "IntEnum", "StrEnum", "IndexEnum"})
FLAG_BASES: FrozenSet[str] = frozenset({"Flag", "IntFlag"})

# Derive names (decorators and schema `derive:` entries)
DERIVE_ENUM_SELECT = "enum_select"
DERIVE_DISPLAY = "enum_display"
DERIVES: FrozenSet[str] = frozenset({DERIVE_ENUM_SELECT, DERIVE_DISPLAY})

# Case value markers recognised by the source front end
AUTO_MARKER = "auto"
DISPLAY_MARKER = "display"
MEMBER_WRAPPER = "member"
NON_MEMBER_WRAPPERS: FrozenSet[str] = frozenset({
    "nonmember", "property", "staticmethod", "classmethod",
})

# Attributes installed by the index generator plus the algebra methods.
# A case with one of these names would shadow the generated surface.
RESERVED_CASE_NAMES: FrozenSet[str] = frozenset({
    "COUNT",
    "ALL",
    "from_index_unchecked",
    "try_from_index",
    "to_index",
    "first",
    "last",
    "wrapping_next",
    "wrapping_prev",
    "checked_next",
    "checked_prev",
    "saturating_next",
    "saturating_prev",
})

# Names used by generated code
INDEX_INSTALLER_PREFIX = "_enum_select_"
DISPLAY_INSTALLER_PREFIX = "_enum_display_"
GENERATED_FILENAME_PREFIX = "<enumselect "

DEFAULT_RUNTIME_MODULE = "enumselect"
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_EXCLUDE_DIRS = ['__pycache__', '.git', 'venv', 'env', '.venv', '.env']
