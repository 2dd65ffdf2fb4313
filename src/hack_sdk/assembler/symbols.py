"""
Hack Symbol Table
=================

Maps symbol names to addresses. Three kinds of symbol live here:

- **Predefined**: fixed names every Hack program can use (SP, R0-R15,
  SCREEN, KBD, ...). They are present from the start and can never be
  reassigned.
- **Labels**: `(NAME)` declarations, registered during pass 1 at the
  address of the instruction that follows them.
- **Variables**: any other symbol used as an `@` operand, allocated
  during pass 2 starting at address 16 in order of first use.

Names are case-sensitive.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hack_sdk.errors import (
    DuplicateSymbolError,
    SourceLocation,
    UndefinedSymbolError,
)


PREDEFINED_LOCATION = SourceLocation("<predefined>", 0, 0)

# First RAM address handed out to variables
VARIABLE_BASE = 16

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
}


class SymbolKind(Enum):
    """How a symbol came to be in the table."""
    PREDEFINED = auto()
    LABEL = auto()
    VARIABLE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        address: Resolved address
        kind: Predefined, label or variable
        location: Where the symbol was defined
    """
    name: str
    address: int
    kind: SymbolKind
    location: SourceLocation


class SymbolTable:
    """
    Symbol table for one assembly run.

    The variable counter starts at 16 and only ever moves up, by one per
    newly registered variable. Labels never touch it.

    Usage:
        table = SymbolTable()
        table.register_label("LOOP", 4)
        table.register_variable("i")    # -> 16
        table.lookup("LOOP")            # -> 4
    """

    def __init__(self, allow_label_redefinition: bool = False):
        """
        Initialize a table holding only the predefined symbols.

        Args:
            allow_label_redefinition: If True, declaring a label twice
                overwrites its address instead of raising
                DuplicateSymbolError.
        """
        self._allow_label_redefinition = allow_label_redefinition
        self._symbols: dict[str, Symbol] = {
            name: Symbol(name, address, SymbolKind.PREDEFINED, PREDEFINED_LOCATION)
            for name, address in PREDEFINED_SYMBOLS.items()
        }
        self._next_address = VARIABLE_BASE

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def next_address(self) -> int:
        """The address the next new variable will receive."""
        return self._next_address

    def contains(self, name: str) -> bool:
        """Return True if name is defined."""
        return name in self._symbols

    def lookup(self, name: str) -> int:
        """
        Return the address of a defined symbol.

        Raises:
            UndefinedSymbolError: If name is not defined
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            raise UndefinedSymbolError(name)
        return symbol.address

    def get(self, name: str) -> Optional[Symbol]:
        """Return the full entry for name, or None."""
        return self._symbols.get(name)

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> address mapping."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def user_symbols(self) -> list[Symbol]:
        """Labels and variables, in the order they were defined."""
        return [sym for sym in self._symbols.values() if sym.kind is not SymbolKind.PREDEFINED]

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    # =========================================================================
    # Registration
    # =========================================================================

    def register_label(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        """
        Bind a label to the address of the instruction following it.

        Raises:
            DuplicateSymbolError: If name is predefined, or is already a
                label and redefinition is not allowed
        """
        location = location or PREDEFINED_LOCATION
        existing = self._symbols.get(name)

        if existing is not None:
            if existing.kind is SymbolKind.PREDEFINED:
                raise DuplicateSymbolError(
                    name, location=location, source_line=source_line, predefined=True
                )
            if not self._allow_label_redefinition:
                raise DuplicateSymbolError(
                    name,
                    location=location,
                    original_location=existing.location,
                    source_line=source_line,
                )

        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)

    def register_variable(self, name: str, location: Optional[SourceLocation] = None) -> int:
        """
        Return the address of name, allocating a new variable if needed.

        An existing symbol of any kind keeps its address. A new name gets
        the current next_address, after which the counter moves up by one.
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing.address

        address = self._next_address
        self._symbols[name] = Symbol(
            name, address, SymbolKind.VARIABLE, location or PREDEFINED_LOCATION
        )
        self._next_address += 1
        return address
