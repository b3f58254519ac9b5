"""
Index conversion code generation.

Consumes a ``ValidatedCaseModel`` and emits the installer that gives a class
its ``COUNT``, its ``ALL`` ordering and its ``from_index_unchecked`` lookup.
The lookup performs no range check; the shape validator is what makes that
sound.
"""

from typing import List

from enumselect.constants import INDEX_INSTALLER_PREFIX
from enumselect.core.model import ValidatedCaseModel
from enumselect.generation.generated_code import GeneratedCode


def index_installer_name(type_name: str) -> str:
    return f"{INDEX_INSTALLER_PREFIX}{type_name}"


def generate_index(model: ValidatedCaseModel) -> GeneratedCode:
    """
    Generate the index conversion installer for a validated model.

    Deterministic and total over validated input.

    Args:
        model: Output of ``validate``

    Returns:
        GeneratedCode whose installer sets COUNT, ALL and
        from_index_unchecked
    """
    name = index_installer_name(model.type_name)
    lines: List[str] = [
        f"def {name}(cls):",
        f"    cls.COUNT = {model.count}",
        "    cls.ALL = (",
    ]
    lines.extend(f"        cls[{case!r}]," for case in model.cases)
    lines.extend([
        "    )",
        "    _all = cls.ALL",
        "",
        "    def from_index_unchecked(index):",
        "        # Caller guarantees 0 <= index < COUNT",
        "        return _all[index]",
        "",
        "    cls.from_index_unchecked = staticmethod(from_index_unchecked)",
        "    return cls",
    ])
    return GeneratedCode(
        type_name=model.type_name,
        installer_name=name,
        source="\n".join(lines) + "\n",
    )
