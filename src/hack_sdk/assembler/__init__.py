"""
Hack Assembler
==============

This module provides a two-pass assembler for the Hack computer. It
converts Hack assembly source (.asm) into Hack machine code (.hack):
one line of sixteen '0'/'1' characters per instruction.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **parser**: Classifies source lines into statements
- **SymbolTable**: Predefined symbols, labels and variables
- **CodeGenerator**: Runs the two passes and produces machine words

Assembly Process
----------------
1. **Parsing**: strip comments and whitespace, classify each line as an
   address, label or compute instruction (or blank/invalid)

2. **Code Generation** (two-pass):
   - Pass 1: bind labels to instruction addresses
   - Pass 2: allocate variables from address 16, encode every instruction

Example Usage
-------------
>>> from hack_sdk.assembler import assemble
>>> assemble('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
"""

from hack_sdk.assembler.assembler import (
    Assembler,
    AssemblerOptions,
    assemble,
    assemble_file,
)
from hack_sdk.assembler.parser import (
    Statement,
    StatementKind,
    AddressInstruction,
    LabelInstruction,
    ComputeInstruction,
    Blank,
    Invalid,
    classify_line,
    strip_line,
    parse_lines,
    parse_source,
    is_symbol,
)
from hack_sdk.assembler.symbols import (
    Symbol,
    SymbolKind,
    SymbolTable,
    PREDEFINED_SYMBOLS,
    VARIABLE_BASE,
)
from hack_sdk.assembler.codegen import CodeGenerator

__all__ = [
    # Main class and functions
    "Assembler",
    "AssemblerOptions",
    "assemble",
    "assemble_file",
    # Parser
    "Statement",
    "StatementKind",
    "AddressInstruction",
    "LabelInstruction",
    "ComputeInstruction",
    "Blank",
    "Invalid",
    "classify_line",
    "strip_line",
    "parse_lines",
    "parse_source",
    "is_symbol",
    # Symbol table
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    "PREDEFINED_SYMBOLS",
    "VARIABLE_BASE",
    # Code generator
    "CodeGenerator",
]
