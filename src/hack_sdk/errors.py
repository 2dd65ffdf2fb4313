"""
Hack SDK Error Hierarchy
========================

This module defines the exception hierarchy for the Hack SDK.
All exceptions inherit from HackError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── MalformedInstructionError - line matches none of the grammars
    ├── UnknownMnemonicError - comp/dest/jump not in its table
    ├── InvalidNumericOperandError - bad or out-of-range @ operand
    ├── UndefinedSymbolError - lookup of a symbol that was never defined
    └── DuplicateSymbolError - label defined more than once

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack SDK errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line_number(self) -> Optional[int]:
        """Line number of the offending source line, if known."""
        return self.location.line if self.location else None

    def with_context(
        self,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ) -> "AssemblerError":
        """
        Attach a source location to an error raised without one.

        The encoder works on bare mnemonics and has no idea which line it
        is encoding; the code generator calls this before re-raising so the
        user still gets a file:line prefix. Errors that already carry a
        location are returned untouched.
        """
        if self.location is None:
            self.location = location
            self.source_line = source_line
            self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: unknown comp mnemonic 'D+2'
                D=D+2
                ^
            hint: valid comp mnemonics are 0, 1, -1, D, A, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class MalformedInstructionError(AssemblerError):
    """
    Source line matches none of the three instruction grammars.

    Examples:
        - A line starting with a character that cannot begin an instruction
        - A label missing its closing parenthesis: (LOOP
        - A label with an empty or illegal name: () or (1ABC)
    """
    pass


class UnknownMnemonicError(AssemblerError):
    """
    A comp, dest or jump mnemonic that is not in its encoding table.

    Attributes:
        field: Which part of the instruction was rejected ("comp", "dest", "jump")
        mnemonic: The rejected text
    """

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_mnemonics: Optional[list[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic
        self.valid_mnemonics = valid_mnemonics or []

        hint = None
        if self.valid_mnemonics:
            hint = f"valid {field} mnemonics are {', '.join(self.valid_mnemonics)}"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidNumericOperandError(AssemblerError):
    """
    Address instruction operand is not a usable number.

    Raised when the operand of an @ instruction is neither a symbol nor a
    decimal constant in the range 0-32767. The top bit of an instruction
    word selects compute vs. address, so addresses only get 15 bits.
    """

    def __init__(
        self,
        operand: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        self.reason = reason
        super().__init__(
            f"invalid address operand '{operand}': {reason}",
            location=location,
            hint="address operands must be a symbol or a decimal in 0..32767",
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Lookup of a symbol that is not in the symbol table.

    The assembler never raises this for @ operands (unknown symbols become
    variables); it guards direct SymbolTable.lookup() calls.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Symbol defined multiple times.

    Raised when a label is declared twice, or when a label tries to
    redefine one of the predefined symbols (R0, SP, SCREEN, ...).
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        predefined: bool = False,
    ):
        self.symbol = symbol
        self.original_location = original_location
        self.predefined = predefined

        hint = None
        if predefined:
            hint = f"'{symbol}' is a predefined symbol and cannot be redefined"
        elif original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )
