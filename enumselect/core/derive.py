"""
Class decorators deriving the index algebra and text rendering.

Example::

    @enum_display
    @enum_select
    class DurationType(IndexEnum):
        Duration1m = display("1 minute")
        Duration5m = display("5 minutes")
        Infinite = display("Endless")

    DurationType.COUNT              # 3
    str(DurationType.Duration5m)    # '5 minutes'

Both decorators validate the declaration when the class is created and raise
``ValidationError`` listing every problem found.
"""

import logging
from enum import auto

from enumselect.core.exceptions import IndexInvariantError
from enumselect.generation.display_generator import generate_display
from enumselect.generation.index_generator import generate_index
from enumselect.validation.ast_frontend import declaration_from_class
from enumselect.validation.shape_validator import validate, validate_display

logger = logging.getLogger(__name__)


class display(auto):
    """
    Case value attaching a text template for ``@enum_display``.

    It is an ``auto()``, so the case keeps its implicit position.
    """

    def __init__(self, template: str):
        super().__init__()
        self.template = template


def _check_positions(cls, model) -> None:
    positions = [(member.name, member._value_) for member in cls]
    expected = list(zip(model.cases, range(model.count)))
    if positions != expected:
        raise IndexInvariantError(
            f"members of `{cls.__qualname__}` are not at positions 0..{model.count}: {positions}"
        )


def enum_select(cls):
    """
    Validate a unit enumeration and install its index conversion.

    The class must derive from ``IndexEnum``, declare at least one case, and
    give every case an implicit value (``auto()`` or ``display(...)``).

    Args:
        cls: Class to decorate

    Returns:
        The same class with COUNT, ALL and from_index_unchecked set

    Raises:
        ValidationError: If the declaration cannot support positional indexing
        DeclarationSourceError: If the class source cannot be read
        IndexInvariantError: If a member value is not its position
    """
    declaration = declaration_from_class(cls)
    model = validate(declaration)
    _check_positions(cls, model)
    logger.debug(f"enum_select: {cls.__qualname__} with {model.count} case(s)")
    return generate_index(model).install(cls)


def enum_display(cls):
    """
    Validate per-case templates and install ``__str__``/``__format__``.

    Every case must be declared as ``display("...")`` with a string literal.

    Args:
        cls: Enum class to decorate

    Returns:
        The same class rendering each case as its template

    Raises:
        ValidationError: If the class is not an enum or a case has no template
        DeclarationSourceError: If the class source cannot be read
    """
    declaration = declaration_from_class(cls)
    model = validate_display(declaration)
    logger.debug(f"enum_display: {cls.__qualname__} with {len(model.entries)} template(s)")
    return generate_display(model).install(cls)
