"""
Symbol table for MiniLang code generation.

Maps each declared variable name to a storage slot. The table is filled
while the code generator visits Declaration nodes and lives for a single
generation run.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from tinyacc.errors import SourceLocation

logger = logging.getLogger(__name__)


@dataclass
class Symbol:
    """
    A declared variable.

    Attributes:
        name: Variable name
        slot: Storage slot placeholder, 0 on declaration
        location: Where the variable was (last) declared
    """
    name: str
    slot: int = 0
    location: Optional[SourceLocation] = None


class SymbolTable:
    """Flat name -> Symbol mapping with a single global scope."""

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}

    def declare(self, name: str, location: Optional[SourceLocation] = None) -> Symbol:
        """
        Record name with slot 0.

        A repeated declaration replaces the earlier entry and resets its
        slot to 0.
        """
        if name in self._symbols:
            logger.debug("redeclaring '%s'", name)
        symbol = Symbol(name, 0, location)
        self._symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def slots(self) -> dict[str, int]:
        """Return a plain name -> slot dict."""
        return {name: symbol.slot for name, symbol in self._symbols.items()}

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())
