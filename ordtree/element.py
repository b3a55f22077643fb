"""Element ordering contract shared by every tree variant.

Trees in :mod:`ordtree` never inspect the values they store.  They only ask two
questions of a value: ``a == b`` and ``a < b``.  Any type whose equality and
strict ordering agree (for every pair exactly one of ``a == b``, ``a < b`` or
``b < a`` holds) can therefore be stored, including the built-in ``int`` and
``str``.

Two small wrapper types are provided for callers that want the payload type to
be checked on construction:

* ``Int`` – integer payloads (``bool`` is rejected).
* ``Rune`` – single-character payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

__all__ = [
    "Element",
    "E",
    "Int",
    "Rune",
]


class Element(Protocol):
    """Values that can be ordered inside a tree."""

    def __eq__(self, other: Any) -> bool:
        ...

    def __lt__(self, other: Any) -> bool:
        ...

    def __str__(self) -> str:
        ...


E = TypeVar("E", bound=Element)


@dataclass(frozen=True, order=True, slots=True)
class Int:
    """Integer element."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError("Int value must be an integer")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True, slots=True)
class Rune:
    """Single character element, ordered by code point."""

    char: str

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise TypeError("Rune value must be a single-character string")

    def __str__(self) -> str:
        return self.char
