"""
sicasm - SIC Assembler Command-Line Interface
=============================================

Command-line interface for the two-pass SIC assembler.

Usage Examples
--------------
Basic assembly (writes copy.obj):
    $ sicasm copy.asm -t optab.txt

Generate every artifact:
    $ sicasm copy.asm -t optab.txt -o copy.obj -i copy.int -s copy.sym -l copy.lst

Loader-compatible text records (at most 30 bytes, split at RESW/RESB):
    $ sicasm copy.asm -t optab.txt --loader

Verbose mode:
    $ sicasm -v copy.asm -t optab.txt
"""

from pathlib import Path
from typing import Optional
import logging

import click

from sicasm import __version__
from sicasm.assembler import Assembler
from sicasm.cli.errors import handle_cli_exception
from sicasm.config import SIC_TEXT_RECORD_LIMIT, AssemblerConfig


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-t", "--optab",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Opcode table file (one 'MNEMONIC OPCODE' pair per line)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output object program (default: input.obj)",
)
@click.option(
    "-i", "--intermediate",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the intermediate listing",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the symbol table listing",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the annotated output listing",
)
@click.option(
    "--max-record",
    type=click.IntRange(min=1, max=0xFF),
    default=None,
    help="Split text records at this many bytes (default: one unbounded record). "
         "See also --loader.",
)
@click.option(
    "--break-on-reserve",
    is_flag=True,
    help="Start a new text record after RESW/RESB",
)
@click.option(
    "--loader",
    is_flag=True,
    help=f"Standard SIC loader layout: {SIC_TEXT_RECORD_LIMIT}-byte text records "
         "split at RESW/RESB (--max-record overrides the size)",
)
@click.option(
    "--truncate-name",
    is_flag=True,
    help="Truncate program names longer than 6 characters instead of failing",
)
@click.option(
    "--pad-end",
    is_flag=True,
    help="Zero-pad the end record address to 6 hex digits",
)
@click.option(
    "-W", "--warnings-as-errors",
    is_flag=True,
    help="Fail if any warning is reported",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sicasm")
def main(
    input_file: Path,
    optab: Path,
    output: Optional[Path],
    intermediate: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    max_record: Optional[int],
    break_on_reserve: bool,
    loader: bool,
    truncate_name: bool,
    pad_end: bool,
    warnings_as_errors: bool,
    verbose: bool,
) -> None:
    """
    Assemble a SIC source program.

    INPUT_FILE is the source program: one statement per line with
    LABEL, OPCODE and OPERAND fields separated by whitespace. Use '-'
    for an absent field.

    \b
    Examples:
        sicasm copy.asm -t optab.txt              # Outputs copy.obj
        sicasm copy.asm -t optab.txt -o out.obj   # Specify output file
        sicasm copy.asm -t optab.txt -l copy.lst  # Also write a listing
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Environment defaults, overridden by explicit options
    config = AssemblerConfig.from_env()
    if loader:
        config.max_text_record_bytes = SIC_TEXT_RECORD_LIMIT
        config.break_on_reserve = True
    if max_record is not None:
        config.max_text_record_bytes = max_record
    if break_on_reserve:
        config.break_on_reserve = True
    if truncate_name:
        config.truncate_program_name = True
    if pad_end:
        config.pad_end_record = True
    if warnings_as_errors:
        config.warnings_as_errors = True

    output_file = output if output is not None else input_file.with_suffix(".obj")

    asm = Assembler(config=config, verbose=verbose)

    try:
        if verbose:
            click.echo(f"Assembling {input_file} with opcode table {optab}...")

        result = asm.assemble_file(input_file, optab)

        for warning in result.warnings:
            click.echo(str(warning), err=True)

        asm.write_object(output_file)
        if verbose:
            click.echo(f"Wrote object program to {output_file}")

        if intermediate:
            asm.write_intermediate(intermediate)
            if verbose:
                click.echo(f"Wrote intermediate listing to {intermediate}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if verbose:
            click.echo(result.program_length_text, nl=False)
            click.echo(f"Defined {len(result.symbols)} symbols")
            click.echo(
                f"Assembly complete: {len(result.program.text_records)} text record(s), "
                f"{len(result.warnings)} warning(s)"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
