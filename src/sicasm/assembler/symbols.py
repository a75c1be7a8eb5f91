"""
Symbol Table
============

Maps label names to the address they were defined at. Pass 1 is the only
writer, Pass 2 only reads. The first definition of a label wins: a later
definition is reported by the caller and leaves the stored address alone.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import difflib

from sicasm.errors import SourceLocation


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name (case-sensitive)
        address: Location counter value when the label was defined
        location: Where the label was defined
    """
    name: str
    address: int
    location: Optional[SourceLocation] = None


class SymbolTable:
    """Ordered symbol table; iteration follows definition order."""

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}

    def define(
        self, name: str, address: int, location: Optional[SourceLocation] = None
    ) -> Optional[Symbol]:
        """
        Define a label unless it already exists.

        Returns:
            None if the label was added, otherwise the existing Symbol
            (which is left unchanged)
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing
        self._symbols[name] = Symbol(name, address, location)
        return None

    def lookup(self, name: Optional[str]) -> Optional[int]:
        """Return the address of a symbol, or None if undefined."""
        if name is None:
            return None
        sym = self._symbols.get(name)
        return sym.address if sym is not None else None

    def get(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def similar(self, name: str, limit: int = 3) -> list[str]:
        """Names close to ``name``, for 'did you mean' hints."""
        return difflib.get_close_matches(name, list(self._symbols), n=limit)

    def as_dict(self) -> dict[str, int]:
        """Return a plain name to address dictionary."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].address

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({self.as_dict()!r})"
