"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Max.hack next to Max.asm):
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o build/Max.hack

Generate all output files:
    $ hackasm Max.asm -l Max.lst -s Max.sym

Verbose mode:
    $ hackasm -v Max.asm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hack_sdk import __version__
from hack_sdk.assembler import Assembler, AssemblerOptions
from hack_sdk.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--allow-label-redefinition",
    is_flag=True,
    help="Let a label declared twice take its last address instead of "
         "failing (env: HACK_ASM_ALLOW_LABEL_REDEFINITION)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (env: HACK_ASM_VERBOSE)",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    allow_label_redefinition: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output has one line of sixteen 0/1 characters per instruction.
    Nothing is written if the source contains an error.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm Max.asm -l Max.lst   # Also write a listing
    """
    # Flags switch options on; the environment supplies the defaults
    options = AssemblerOptions.from_env()
    if allow_label_redefinition:
        options.allow_label_redefinition = True
    if verbose:
        options.verbose = True

    setup_logging(options.verbose)

    output_file = output if output is not None else input_file.with_suffix(".hack")

    asm = Assembler(options)
    written: list[Path] = []

    try:
        for path in (output_file, listing, symbols):
            if path is not None and path.resolve() == input_file.resolve():
                raise click.BadParameter(f"output file '{path}' would overwrite the input file")

        asm.assemble_file(input_file)

        for path, write in (
            (output_file, asm.write_hack),
            (listing, asm.write_listing),
            (symbols, asm.write_symbols),
        ):
            if path is not None:
                write(path)
                written.append(path)

        if options.verbose:
            code = asm.get_code()
            sym_count = len(asm.get_symbols())
            click.echo(f"Assembly complete: {len(code)} words")
            click.echo(f"Defined {sym_count} symbols")

    except Exception as e:
        # A failed run leaves no output behind, not even the files already written
        for path in written:
            path.unlink(missing_ok=True)
        handle_cli_exception(e, verbose=options.verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
