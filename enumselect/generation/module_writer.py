"""
Render a Python module from schema declarations.

This is the pre-build generation step: every declaration is validated
against the generators it derives, and only if all of them pass is the
module rendered. The result imports nothing but ``enum`` and the runtime
``IndexEnum`` and does not re-validate when imported.
"""

import logging
from typing import List, Optional, Sequence

from enumselect.constants import DERIVE_DISPLAY, DERIVE_ENUM_SELECT
from enumselect.core.config import GenerationConfig
from enumselect.core.exceptions import ValidationError
from enumselect.core.model import Declaration, Diagnostic
from enumselect.generation.display_generator import generate_display
from enumselect.generation.generated_code import GeneratedCode
from enumselect.generation.index_generator import generate_index
from enumselect.validation.shape_validator import check_declaration, validate, validate_display

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = '"""\nGenerated by enumselect from {0}. Do not edit.\n"""\n'


def _generate(declaration: Declaration) -> List[GeneratedCode]:
    generated = []
    if DERIVE_ENUM_SELECT in declaration.derives:
        generated.append(generate_index(validate(declaration)))
    if DERIVE_DISPLAY in declaration.derives:
        generated.append(generate_display(validate_display(declaration)))
    return generated


def _render_class(declaration: Declaration) -> str:
    base = "IndexEnum" if DERIVE_ENUM_SELECT in declaration.derives else "Enum"
    lines = [f"class {declaration.name}({base}):"]
    if declaration.cases:
        lines.extend(f"    {case.name} = auto()" for case in declaration.cases)
    else:
        lines.append("    pass")
    return "\n".join(lines) + "\n"


def render_module(declarations: Sequence[Declaration], config: Optional[GenerationConfig] = None,
                  source: str = "<schema>") -> str:
    """
    Validate declarations and render them as one Python module.

    Args:
        declarations: Declarations in output order
        config: Generation options (defaults to GenerationConfig())
        source: Schema name mentioned in the header

    Returns:
        Module source text

    Raises:
        ValidationError: If any declaration fails, carrying the diagnostics of
            all declarations
    """
    config = config or GenerationConfig()

    violations: List[Diagnostic] = []
    for declaration in declarations:
        violations.extend(check_declaration(declaration))
    if violations:
        raise ValidationError(source, violations)

    parts: List[str] = []
    if config.header:
        parts.append(HEADER_TEMPLATE.format(source))

    uses_index = any(DERIVE_ENUM_SELECT in d.derives for d in declarations)
    uses_enum = not all(DERIVE_ENUM_SELECT in d.derives for d in declarations)
    imports = ["from enum import Enum, auto" if uses_enum else "from enum import auto"]
    if uses_index:
        imports.append(f"from {config.runtime_module} import IndexEnum")
    parts.append("\n".join(imports) + "\n")

    for declaration in declarations:
        generated = _generate(declaration)
        parts.append(_render_class(declaration))
        parts.extend(code.source for code in generated)
        calls = "".join(f"{code.installer_name}({declaration.name})\n" for code in generated)
        if calls:
            parts.append(calls)

    if config.emit_all:
        names = ", ".join(repr(d.name) for d in declarations)
        parts.append(f"__all__ = [{names}]\n")

    logger.info(f"Rendered {len(declarations)} enumeration(s) from {source}")
    return "\n\n".join(parts)
