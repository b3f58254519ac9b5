"""
Display mapping code generation.

Consumes a ``DisplayCaseModel`` and emits the installer that makes ``str()``
and ``format()`` render each case as its attached template, verbatim.
"""

from typing import List

from enumselect.constants import DISPLAY_INSTALLER_PREFIX
from enumselect.core.model import DisplayCaseModel
from enumselect.generation.generated_code import GeneratedCode


def display_installer_name(type_name: str) -> str:
    return f"{DISPLAY_INSTALLER_PREFIX}{type_name}"


def generate_display(model: DisplayCaseModel) -> GeneratedCode:
    """
    Generate the text rendering installer for a display model.

    The case-to-template table has exactly one entry per case, so the
    dispatch is exhaustive.

    Args:
        model: Output of ``validate_display``

    Returns:
        GeneratedCode whose installer sets __str__ and __format__
    """
    name = display_installer_name(model.type_name)
    lines: List[str] = [
        f"def {name}(cls):",
        "    _templates = {",
    ]
    lines.extend(f"        cls[{case!r}]: {template!r}," for case, template in model.entries)
    lines.extend([
        "    }",
        "",
        "    def __str__(self):",
        "        return _templates[self]",
        "",
        "    def __format__(self, format_spec):",
        "        return format(_templates[self], format_spec)",
        "",
        "    cls.__str__ = __str__",
        "    cls.__format__ = __format__",
        "    return cls",
    ])
    return GeneratedCode(
        type_name=model.type_name,
        installer_name=name,
        source="\n".join(lines) + "\n",
    )
