"""
Hack Assembly Language Parser
=============================

This module classifies Hack assembly source lines. Each raw line is
stripped of its comment and whitespace and turned into exactly one
statement:

1. **AddressInstruction**: `@value`
   ```asm
   @21
   @LOOP
   ```

2. **LabelInstruction**: `(name)`
   ```asm
   (LOOP)
   ```

3. **ComputeInstruction**: `[dest=]comp[;jump]`
   ```asm
   D=M
   D;JGT
   AM=M-1
   ```

4. **Blank**: nothing left after removing the comment

5. **Invalid**: anything else; the code generator refuses to assemble it

Comments start with `//` and run to the end of the line. All whitespace
inside an instruction is ignored, so `D = D + A` reads as `D=D+A`.

Operand values and mnemonics are not checked here. An `@` operand is
validated when it is resolved, and comp/dest/jump are validated by the
encoder, so each error is reported by the stage that understands it.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from hack_sdk.errors import SourceLocation


COMMENT_MARKER = "//"

# Besides letters, the characters a symbol may start with
SYMBOL_START = frozenset("_.$:")


def is_symbol(text: str) -> bool:
    """
    Return True if an @ operand names a symbol rather than a number.

    A symbol starts with a letter or one of `_ . $ :`; the rest of the
    name is taken as written.
    """
    return bool(text) and (text[0].isalpha() or text[0] in SYMBOL_START)


# =============================================================================
# Statement Kinds
# =============================================================================

class StatementKind(Enum):
    """The closed set of shapes a source line can classify into."""
    ADDRESS = auto()
    LABEL = auto()
    COMPUTE = auto()
    BLANK = auto()
    INVALID = auto()

    def __str__(self) -> str:
        return self.name.lower()


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass(frozen=True)
class Statement:
    """
    Base class for all classified lines.

    Attributes:
        location: Where the line came from
        source_line: The raw line text, for error messages and listings
    """
    location: SourceLocation
    source_line: str

    kind = None  # overridden by each variant

    @property
    def occupies_address(self) -> bool:
        """True for the statements that become a machine word."""
        return self.kind in (StatementKind.ADDRESS, StatementKind.COMPUTE)


@dataclass(frozen=True)
class AddressInstruction(Statement):
    """
    `@operand` - load a constant or symbol address into A.

    Attributes:
        operand: Everything after '@', unvalidated
    """
    operand: str = ""

    kind = StatementKind.ADDRESS


@dataclass(frozen=True)
class LabelInstruction(Statement):
    """
    `(name)` - marks the address of the next instruction.

    Attributes:
        name: The label name
    """
    name: str = ""

    kind = StatementKind.LABEL


@dataclass(frozen=True)
class ComputeInstruction(Statement):
    """
    `dest=comp;jump` - ALU operation with optional store and jump.

    Attributes:
        dest: Destination mnemonic, or None when there is no '='
        comp: Computation mnemonic
        jump: Jump mnemonic, or None when there is no ';'
    """
    dest: Optional[str] = None
    comp: str = ""
    jump: Optional[str] = None

    kind = StatementKind.COMPUTE


@dataclass(frozen=True)
class Blank(Statement):
    """Empty or comment-only line."""

    kind = StatementKind.BLANK


@dataclass(frozen=True)
class Invalid(Statement):
    """
    A line that matches none of the instruction grammars.

    Attributes:
        reason: Why the line was rejected
    """
    reason: str = "unrecognized instruction"

    kind = StatementKind.INVALID


# =============================================================================
# Line Classification
# =============================================================================

def strip_line(line: str) -> str:
    """
    Remove the trailing `//` comment and all whitespace from a line.

    >>> strip_line("  D = M   // load")
    'D=M'
    """
    comment = line.find(COMMENT_MARKER)
    if comment != -1:
        line = line[:comment]
    return "".join(line.split())


def _classify_label(text: str, location: SourceLocation, raw: str) -> Statement:
    close = text.find(")")
    if close == -1:
        return Invalid(location, raw, reason="label is missing its closing ')'")
    if close != len(text) - 1:
        return Invalid(location, raw, reason=f"unexpected text after label: '{text[close + 1:]}'")

    name = text[1:close]
    if not name:
        return Invalid(location, raw, reason="label name is empty")
    return LabelInstruction(location, raw, name=name)


def _classify_compute(text: str, location: SourceLocation, raw: str) -> ComputeInstruction:
    dest = None
    jump = None
    begin = 0
    end = len(text)

    equals = text.find("=")
    if equals != -1:
        dest = text[:equals]
        begin = equals + 1

    semicolon = text.find(";", begin)
    if semicolon != -1:
        jump = text[semicolon + 1:]
        end = semicolon

    return ComputeInstruction(location, raw, dest=dest, comp=text[begin:end], jump=jump)


def classify_line(line: str, line_number: int = 1, filename: str = "<input>") -> Statement:
    """
    Classify one raw source line.

    Args:
        line: The raw line, possibly with comment and newline
        line_number: 1-based line number for error reporting
        filename: Source name for error reporting

    Returns:
        One of AddressInstruction, LabelInstruction, ComputeInstruction,
        Blank or Invalid
    """
    raw = line.rstrip("\r\n")
    text = strip_line(raw)

    # Point the caret at the first non-blank character
    column = len(raw) - len(raw.lstrip()) + 1
    location = SourceLocation(filename, line_number, column)

    if not text:
        return Blank(location, raw)

    first = text[0]
    if first == "@":
        return AddressInstruction(location, raw, operand=text[1:])
    if first == "(":
        return _classify_label(text, location, raw)
    if first.isalnum():
        return _classify_compute(text, location, raw)

    return Invalid(location, raw, reason=f"line cannot start with '{first}'")


def parse_lines(lines: Iterable[str], filename: str = "<input>") -> list[Statement]:
    """
    Classify a sequence of raw lines.

    Blank lines are kept in the result so that every statement keeps its
    real line number; the code generator skips them.
    """
    return [
        classify_line(line, line_number, filename)
        for line_number, line in enumerate(lines, start=1)
    ]


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """Classify every line of a source string."""
    return parse_lines(source.splitlines(), filename)
