"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary interface
for assembling Hack source code. It coordinates the line classifier and the
code generator and owns the output files.

Example Usage
-------------
>>> from hack_sdk.assembler import Assembler
>>>
>>> asm = Assembler()
>>> words = asm.assemble_string('''
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... ''')
>>> asm.get_code()[0]
'0000000000000010'
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ hackasm Add.asm -o Add.hack -l Add.lst -s Add.sym

Options:
    -o, --output FILE              Output .hack file
    -l, --listing FILE             Generate listing file
    -s, --symbols FILE             Generate symbol file
    --allow-label-redefinition     Let a repeated label overwrite the first
    -v, --verbose                  Verbose output
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional
import logging
import os

from hack_sdk.assembler.parser import Statement, parse_lines, parse_source
from hack_sdk.assembler.codegen import CodeGenerator


logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


# =============================================================================
# Options
# =============================================================================

@dataclass
class AssemblerOptions:
    """
    Assembler configuration options.

    Attributes:
        allow_label_redefinition: If True, a label declared twice takes the
                                  address of its last declaration. The default
                                  rejects it with DuplicateSymbolError.
        verbose: Log progress messages at INFO level
    """
    allow_label_redefinition: bool = False
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "AssemblerOptions":
        """
        Create AssemblerOptions from environment variables.

        Environment variables (all optional):
            HACK_ASM_ALLOW_LABEL_REDEFINITION: 1/true/yes/on to allow
            HACK_ASM_VERBOSE: 1/true/yes/on for verbose output
        """
        options = cls()

        if value := os.environ.get("HACK_ASM_ALLOW_LABEL_REDEFINITION"):
            options.allow_label_redefinition = value.strip().lower() in _TRUTHY

        if value := os.environ.get("HACK_ASM_VERBOSE"):
            options.verbose = value.strip().lower() in _TRUTHY

        return options


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main Hack assembler class.

    Each call to one of the assemble_* methods is an independent run with
    its own symbol table. Results of the last successful run are available
    through get_code(), get_symbols() and get_listing() and the write_*
    methods. A failed run raises and leaves nothing to write.
    """

    def __init__(self, options: Optional[AssemblerOptions] = None):
        self._options = options or AssemblerOptions()
        self._codegen = CodeGenerator(
            allow_label_redefinition=self._options.allow_label_redefinition
        )
        self._assembled = False

    @property
    def options(self) -> AssemblerOptions:
        return self._options

    def _log(self, message: str, *args) -> None:
        if self._options.verbose:
            logger.info(message, *args)
        else:
            logger.debug(message, *args)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def _generate(self, statements: list[Statement], filename: str) -> list[str]:
        self._assembled = False
        self._log("Parsed %d lines from %s", len(statements), filename)

        code = self._codegen.generate(statements)
        self._assembled = True

        self._log("Generated %d words", len(code))
        return code

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> list[str]:
        """
        Assemble a sequence of raw source lines.

        Args:
            lines: Raw lines, with or without trailing newlines
            filename: Virtual filename for error messages

        Returns:
            The machine words, one 16-character string per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        return self._generate(parse_lines(lines, filename), filename)

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Raises:
            AssemblerError: If assembly fails
        """
        return self._generate(parse_source(source, filename), filename)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._log("Assembling %s...", filepath)

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Results
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the machine words of the last successful run."""
        return self._codegen.get_code()

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table of the last run as name -> address."""
        return self._codegen.get_symbols()

    def get_listing(self) -> str:
        """Return the assembly listing of the last successful run."""
        return self._codegen.get_listing()

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _require_assembled(self) -> None:
        if not self._assembled:
            raise RuntimeError("nothing to write: no successful assembly run")

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine words to a .hack file, one word per line.

        Raises:
            RuntimeError: If there is no successful run to write
        """
        self._require_assembled()
        self._codegen.write_hack(filepath)
        logger.info("Wrote %d words to %s", len(self.get_code()), filepath)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        self._require_assembled()
        self._codegen.write_listing(filepath)
        logger.info("Wrote listing to %s", filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table file (labels and variables)."""
        self._require_assembled()
        self._codegen.write_symbols(filepath)
        logger.info("Wrote symbols to %s", filepath)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             allow_label_redefinition: bool = False) -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        Generated machine words

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(AssemblerOptions(allow_label_redefinition=allow_label_redefinition))
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, allow_label_redefinition: bool = False) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(AssemblerOptions(allow_label_redefinition=allow_label_redefinition))
    return asm.assemble_file(filepath)
