"""
Hack Code Generator
===================

This module turns classified statements into Hack machine words. It
implements a two-pass assembly process:

Pass 1 (Label Resolution)
-------------------------
- Scan all statements sequentially
- Count address and compute instructions (one word each)
- Bind each label to the count at the point it is declared

Pass 2 (Code Generation)
------------------------
- Resolve @ operands: decimal constants directly, symbols through the
  symbol table, unknown symbols become new variables from address 16
- Encode compute instructions through the comp/dest/jump tables
- Emit words in source order; labels emit nothing

Pass 1 always finishes before pass 2 starts, so a jump may name a label
declared further down the file.

Any error aborts the run. Words are buffered and only become visible
through get_code() once generate() has returned.

Output Formats
--------------
- `.hack` file: one 16-character word per line
- Listing file with addresses, words and source
- Symbol table file
"""

from pathlib import Path
from typing import Optional
import logging

from hack_sdk.errors import (
    AssemblerError,
    InvalidNumericOperandError,
    MalformedInstructionError,
)
from hack_sdk.assembler.parser import (
    AddressInstruction,
    ComputeInstruction,
    Statement,
    StatementKind,
    is_symbol,
)
from hack_sdk.assembler.symbols import VARIABLE_BASE, SymbolKind, SymbolTable
from hack_sdk.cpu import (
    encode_address,
    encode_compute,
    is_constant,
    parse_constant,
)


logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Generates Hack machine words from classified statements.

    The code generator owns, per run:
    - The symbol table
    - The output word buffer
    - Listing rows

    Usage:
        codegen = CodeGenerator()
        words = codegen.generate(parse_source(source))
        codegen.write_hack("Prog.hack")
    """

    def __init__(self, allow_label_redefinition: bool = False):
        """
        Initialize the code generator.

        Args:
            allow_label_redefinition: If True, a label declared twice keeps
                its last address instead of failing the assembly.
        """
        self._allow_label_redefinition = allow_label_redefinition
        self._symbols = SymbolTable(allow_label_redefinition)
        self._code: list[str] = []
        self._listing_lines: list[str] = []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, statements: list[Statement]) -> list[str]:
        """
        Assemble statements into machine words.

        Args:
            statements: Classified lines, in source order

        Returns:
            The 16-character words, one per address/compute instruction

        Raises:
            AssemblerError: On the first malformed line, unknown mnemonic,
                bad operand or duplicate label
        """
        # Fresh state for every run; nothing survives a failed run
        self._symbols = SymbolTable(self._allow_label_redefinition)
        self._code = []
        self._listing_lines = []

        self._pass1(statements)
        code, listing = self._pass2(statements)

        self._code = code
        self._listing_lines = listing
        return list(code)

    def get_code(self) -> list[str]:
        """Return the words generated by the last successful run."""
        return list(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return self._symbols.as_dict()

    # =========================================================================
    # Pass 1: Label Resolution
    # =========================================================================

    def _pass1(self, statements: list[Statement]) -> None:
        address = 0

        for stmt in statements:
            kind = stmt.kind
            if kind is StatementKind.LABEL:
                self._symbols.register_label(
                    stmt.name, address, stmt.location, stmt.source_line
                )
                logger.debug("label %s = %d", stmt.name, address)
            elif stmt.occupies_address:
                address += 1
            elif kind is StatementKind.INVALID:
                raise MalformedInstructionError(
                    f"malformed instruction: {stmt.reason}",
                    location=stmt.location,
                    source_line=stmt.source_line,
                )
            elif kind is StatementKind.BLANK:
                continue
            else:
                raise AssertionError(f"unhandled statement kind {kind}")

        labels = sum(1 for sym in self._symbols.user_symbols() if sym.kind is SymbolKind.LABEL)
        logger.debug("pass 1: %d instructions, %d labels", address, labels)

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self, statements: list[Statement]) -> tuple[list[str], list[str]]:
        code: list[str] = []
        listing: list[str] = []

        for stmt in statements:
            kind = stmt.kind
            if kind is StatementKind.ADDRESS:
                word = self._encode_address(stmt)
            elif kind is StatementKind.COMPUTE:
                word = self._encode_compute(stmt)
            elif kind in (StatementKind.LABEL, StatementKind.BLANK):
                listing.append(self._listing_row(None, None, stmt))
                continue
            elif kind is StatementKind.INVALID:
                # pass 1 already rejects these
                raise MalformedInstructionError(
                    f"malformed instruction: {stmt.reason}",
                    location=stmt.location,
                    source_line=stmt.source_line,
                )
            else:
                raise AssertionError(f"unhandled statement kind {kind}")

            listing.append(self._listing_row(len(code), word, stmt))
            code.append(word)

        logger.debug(
            "pass 2: %d words, %d variables",
            len(code),
            self._symbols.next_address - VARIABLE_BASE,
        )
        return code, listing

    def _resolve_operand(self, stmt: AddressInstruction) -> int:
        operand = stmt.operand

        if is_constant(operand):
            return parse_constant(operand)

        if is_symbol(operand):
            if not self._symbols.contains(operand):
                address = self._symbols.register_variable(operand, stmt.location)
                logger.debug("variable %s = %d", operand, address)
                return address
            return self._symbols.lookup(operand)

        if not operand:
            raise InvalidNumericOperandError(operand, "missing operand")
        return parse_constant(operand)

    def _encode_address(self, stmt: AddressInstruction) -> str:
        try:
            return encode_address(self._resolve_operand(stmt))
        except AssemblerError as e:
            raise e.with_context(stmt.location, stmt.source_line)

    def _encode_compute(self, stmt: ComputeInstruction) -> str:
        try:
            return encode_compute(stmt.dest, stmt.comp, stmt.jump)
        except AssemblerError as e:
            raise e.with_context(stmt.location, stmt.source_line)

    # =========================================================================
    # Listing and Output Files
    # =========================================================================

    @staticmethod
    def _listing_row(address: Optional[int], word: Optional[str], stmt: Statement) -> str:
        addr_str = f"{address:5d}" if address is not None else " " * 5
        word_str = word if word is not None else " " * 16
        return f"{addr_str}  {word_str}  {stmt.location.line:5d}  {stmt.source_line}"

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing addresses, generated words, and source lines,
            followed by the labels and variables of the program.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(" Addr  Word              Line  Source")
        lines.append("-" * 60)
        lines.extend(self._listing_lines)
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self._symbols.user_symbols(), key=lambda s: s.name):
            lines.append(f"{sym.name:20s} = {sym.address:5d}  ({sym.kind})")
        return "\n".join(lines) + "\n"

    def write_hack(self, filepath: str | Path) -> None:
        """Write the generated words, one per line."""
        with open(filepath, "w") as f:
            for word in self._code:
                f.write(word + "\n")

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address kind (one per line), labels and variables only
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in sorted(self._symbols.user_symbols(), key=lambda s: s.name):
                f.write(f"{sym.name} {sym.address} {sym.kind}\n")
