"""
Hack SDK - Assembler Toolchain for the Hack Computer
====================================================

This package translates Hack assembly language into the binary machine
code executed by the Hack CPU, the 16-bit computer built in the
Nand2Tetris course.

Main Components
---------------
- **assembler**: Two-pass Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code files (.hack)

- **cpu**: Instruction set definitions
    Comp/dest/jump encoding tables and word encoders

Quick Start
-----------
Assemble a program:
    >>> from hack_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm

Version History
---------------
1.0.0 - Initial release with the two-pass assembler and hackasm CLI
"""

__version__ = "1.0.0"
__author__ = "Hack SDK Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_sdk.assembler import (
    Assembler,
    AssemblerOptions,
    assemble,
    assemble_file,
)
from hack_sdk.errors import (
    HackError,
    SourceLocation,
    AssemblerError,
    MalformedInstructionError,
    UnknownMnemonicError,
    InvalidNumericOperandError,
    UndefinedSymbolError,
    DuplicateSymbolError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Assembler
    "Assembler",
    "AssemblerOptions",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "SourceLocation",
    "AssemblerError",
    "MalformedInstructionError",
    "UnknownMnemonicError",
    "InvalidNumericOperandError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
]
