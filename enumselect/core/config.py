"""
Configuration dataclasses for enumselect.

Configuration is immutable and provided as Python objects. Schema files may
override the defaults through their ``options:`` block.
"""

import dataclasses
import keyword
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from enumselect.constants import DEFAULT_RUNTIME_MODULE
from enumselect.core.exceptions import SchemaError

logger = logging.getLogger(__name__)


def _is_module_path(name: str) -> bool:
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in name.split("."))


@dataclass(frozen=True)
class GenerationConfig:
    """Configuration for rendering generated modules."""
    header: bool = True
    """Emit the 'generated, do not edit' module docstring."""

    runtime_module: str = DEFAULT_RUNTIME_MODULE
    """Module generated code imports IndexEnum from."""

    emit_all: bool = True
    """Emit an __all__ listing the generated classes."""

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]],
                     source: str = "<options>") -> "GenerationConfig":
        """
        Build a config from a plain mapping, rejecting unknown keys.

        Args:
            options: Mapping of option names to values (may be None)
            source: Where the mapping came from, for error messages

        Returns:
            GenerationConfig with the given overrides applied

        Raises:
            SchemaError: If a key is unknown or a value has the wrong type
        """
        if not options:
            return cls()

        known = {f.name: f for f in dataclasses.fields(cls)}
        overrides = {}
        for key, value in options.items():
            if key not in known:
                raise SchemaError(f"{source}: unknown option '{key}' (expected one of {sorted(known)})")
            expected = type(getattr(cls(), key))
            if not isinstance(value, expected):
                raise SchemaError(
                    f"{source}: option '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
            if key == "runtime_module" and not _is_module_path(value):
                raise SchemaError(f"{source}: option 'runtime_module' must be a dotted module name, got {value!r}")
            overrides[key] = value

        logger.debug(f"Generation options from {source}: {overrides}")
        return cls(**overrides)
