"""
Index algebra for unit enumerations.

``IndexEnum`` is the contract every class decorated with ``@enum_select``
satisfies: a dense mapping between members and the positions ``0..COUNT``,
plus traversal in the style of the ``checked``/``wrapping``/``saturating``
integer operations.

Example::

    @enum_select
    class Note(IndexEnum):
        A = auto()
        B = auto()
        C = auto()

    Note.COUNT                  # 3
    Note.C.to_index()           # 2
    Note.try_from_index(3)      # None
    Note.C.wrapping_next()      # Note.A
    Note.A.saturating_prev()    # Note.A

Do not subclass ``IndexEnum`` without ``@enum_select``: the decorator is what
proves that every member value is its position and installs ``COUNT``,
``ALL`` and ``from_index_unchecked``.
"""

import operator
from enum import IntEnum
from typing import Optional, Tuple, TypeVar

from enumselect.core.exceptions import IndexInvariantError

E = TypeVar("E", bound="IndexEnum")


class IndexEnum(IntEnum):
    """
    Integer enumeration whose implicit values are zero-based positions.

    Deriving from this class is the index representation marker the shape
    validator requires. Members are ``int`` values, so members of two
    different IndexEnum classes at the same position compare and hash equal
    (``E.A == Note.A``); compare with ``is`` when the class matters.
    """

    # Installed by @enum_select
    COUNT: int
    ALL: Tuple["IndexEnum", ...]

    @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return count

    @classmethod
    def from_index_unchecked(cls, index: int):
        """
        Convert a position to a member without a range check.

        Precondition: ``0 <= index < cls.COUNT`` and the class passed
        ``@enum_select``. Anything else is unsupported; use
        ``try_from_index`` for positions from outside.
        """
        raise _not_decorated(cls)

    @classmethod
    def try_from_index(cls, position: int):
        """
        Convert a position to a member.

        Args:
            position: Zero-based position

        Returns:
            The member at ``position``, or None if it is not in ``0..COUNT``

        Raises:
            TypeError: If ``position`` is not an integer
        """
        position = operator.index(position)
        if 0 <= position < _count(cls):
            return cls.from_index_unchecked(position)
        return None

    def to_index(self) -> int:
        """Return the zero-based position of this member."""
        return self._value_

    @classmethod
    def first(cls):
        """Return the member at position 0."""
        return _expect(cls.try_from_index(0), "enum should have at least one variant")

    @classmethod
    def last(cls):
        """Return the member at position ``COUNT - 1``."""
        return _expect(cls.try_from_index(_count(cls) - 1), "enum should have at least one variant")

    def wrapping_next(self: E) -> E:
        """Return the next member, wrapping to the first after the last."""
        count = _count(type(self))
        return _expect(type(self).try_from_index((self.to_index() + 1) % count),
                       "index should be within range 0..COUNT")

    def wrapping_prev(self: E) -> E:
        """Return the previous member, wrapping to the last before the first."""
        count = _count(type(self))
        return _expect(type(self).try_from_index((self.to_index() + count - 1) % count),
                       "index should be within range 0..COUNT")

    def checked_next(self: E) -> Optional[E]:
        """Return the next member, or None if this is the last one."""
        if self.to_index() == _count(type(self)) - 1:
            return None
        return _expect(type(self).try_from_index(self.to_index() + 1), "self should not be last")

    def checked_prev(self: E) -> Optional[E]:
        """Return the previous member, or None if this is the first one."""
        if self.to_index() == 0:
            return None
        return _expect(type(self).try_from_index(self.to_index() - 1), "self should not be first")

    def saturating_next(self: E) -> E:
        """Return the next member, staying on the last one."""
        following = self.checked_next()
        return following if following is not None else type(self).last()

    def saturating_prev(self: E) -> E:
        """Return the previous member, staying on the first one."""
        preceding = self.checked_prev()
        return preceding if preceding is not None else type(self).first()


def _not_decorated(cls) -> IndexInvariantError:
    return IndexInvariantError(f"{cls.__name__} was not decorated with @enum_select")


def _count(cls) -> int:
    count = getattr(cls, "COUNT", None)
    if not isinstance(count, int) or isinstance(count, IndexEnum):
        raise _not_decorated(cls)
    return count


def _expect(member, message: str):
    if member is None:
        raise IndexInvariantError(message)
    return member
