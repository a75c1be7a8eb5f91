"""
SIC Assembler - Main Interface
==============================

This module provides the Assembler class, the primary interface for
assembling SIC source programs, and the AssemblySession that holds the
state of one run.

Example Usage
-------------
>>> from sicasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.load_optab("optab.txt")
>>> result = asm.assemble_file("copy.asm")
>>> print(result.object_text)
H^COPY  ^001000^000006
T^001000^06^001003^000005
E^1000
>>> asm.write_symbols("copy.sym")

Every call to assemble_file/assemble_string starts a fresh session, so
symbols never leak from one program into the next.

Command-Line Usage
------------------
    $ sicasm copy.asm -t optab.txt -o copy.obj -l copy.lst -s copy.sym
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from sicasm.config import AssemblerConfig
from sicasm.errors import AssemblerError, AssemblerWarning, ErrorCollector
from sicasm.assembler.listing import (
    render_intermediate,
    render_listing,
    render_program_length,
    render_symbol_table,
)
from sicasm.assembler.optab import OpcodeTable, load_optab
from sicasm.assembler.parser import Statement, parse_file, parse_source
from sicasm.assembler.pass1 import IntermediateRecord, Pass1Result, run_pass1
from sicasm.assembler.pass2 import ListingLine, Pass2Result, run_pass2
from sicasm.assembler.records import ObjectProgram
from sicasm.assembler.symbols import SymbolTable

logger = logging.getLogger(__name__)


# =============================================================================
# Assembly Result
# =============================================================================

@dataclass
class AssemblyResult:
    """
    The artifacts of a successful run.

    Attributes:
        records: Intermediate records from Pass 1
        symbols: Symbol table
        starting_address: Operand of START
        program_length: Program size in bytes
        listing: Annotated listing lines from Pass 2
        program: The object program
        warnings: Non-fatal diagnostics collected during the run
    """
    records: tuple[IntermediateRecord, ...]
    symbols: SymbolTable
    starting_address: int
    program_length: int
    listing: list[ListingLine]
    program: ObjectProgram
    warnings: list[AssemblerWarning] = field(default_factory=list)

    @property
    def intermediate_text(self) -> str:
        return render_intermediate(self.records)

    @property
    def symbol_table_text(self) -> str:
        return render_symbol_table(self.symbols)

    @property
    def listing_text(self) -> str:
        return render_listing(self.listing)

    @property
    def object_text(self) -> str:
        return self.program.render()

    @property
    def program_length_text(self) -> str:
        return render_program_length(self.program_length)


# =============================================================================
# Assembly Session
# =============================================================================

class AssemblySession:
    """
    State of a single assembly run.

    The session owns its symbol table and diagnostics. Callers that want
    to stop between the passes call run_pass1() and run_pass2() directly;
    run() does both.

    Usage:
        session = AssemblySession(optab)
        session.run_pass1(statements)
        ...                      # inspect session.symbols
        session.run_pass2()
        result = session.result()
    """

    def __init__(
        self,
        optab: Optional[OpcodeTable] = None,
        config: Optional[AssemblerConfig] = None,
    ):
        self.config = config or AssemblerConfig()
        self.optab = optab if optab is not None else OpcodeTable()
        self.symbols = SymbolTable()
        self.errors = ErrorCollector(max_errors=self.config.max_errors)
        self.starting_address = 0
        self.program_length = 0
        self._pass1: Optional[Pass1Result] = None
        self._pass2: Optional[Pass2Result] = None

        if not self.optab.is_loaded:
            logger.warning("No opcode table loaded; instructions will produce no object code")

    def run_pass1(self, statements: list[Statement]) -> Pass1Result:
        """
        Run Pass 1.

        Raises:
            AssemblerError: If any statement could not be assembled
        """
        self._pass1 = run_pass1(
            statements, self.optab, self.errors, self.config, symbols=self.symbols
        )
        self.starting_address = self._pass1.starting_address
        self.program_length = self._pass1.program_length
        self._check_errors()
        return self._pass1

    def run_pass2(self) -> Pass2Result:
        """
        Run Pass 2 over the records of the preceding Pass 1.

        Raises:
            AssemblerError: If Pass 1 has not run or code generation failed
        """
        if self._pass1 is None:
            raise AssemblerError("pass 2 requested before pass 1")

        self._pass2 = run_pass2(
            self._pass1.records,
            self.symbols,
            self.optab,
            self.starting_address,
            self.program_length,
            self.errors,
            self.config,
        )
        self._check_errors()

        if self.config.warnings_as_errors and self.errors.has_warnings():
            raise AssemblerError(
                f"Assembly failed: {self.errors.warning_count()} warnings "
                f"treated as errors:\n\n{self.errors.report()}"
            )
        return self._pass2

    def run(self, statements: list[Statement]) -> AssemblyResult:
        """Run both passes and return the result."""
        self.run_pass1(statements)
        self.run_pass2()
        return self.result()

    def result(self) -> AssemblyResult:
        if self._pass1 is None or self._pass2 is None:
            raise AssemblerError("assembly has not completed")
        return AssemblyResult(
            records=self._pass1.records,
            symbols=self.symbols,
            starting_address=self.starting_address,
            program_length=self.program_length,
            listing=self._pass2.listing,
            program=self._pass2.program,
            warnings=list(self.errors.warnings),
        )

    def _check_errors(self) -> None:
        if self.errors.has_errors():
            raise AssemblerError(
                f"Assembly failed with {self.errors.error_count()} errors:\n\n"
                f"{self.errors.report()}"
            )


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main SIC assembler class.

    Holds the opcode table and configuration across runs; the symbol
    table and diagnostics belong to each run.

    Attributes:
        config: Assembly options
        optab: The loaded opcode table
    """

    def __init__(
        self,
        optab: Optional[OpcodeTable] = None,
        config: Optional[AssemblerConfig] = None,
        verbose: bool = False,
    ):
        """
        Initialize the assembler.

        Args:
            optab: Opcode table (empty until load_optab is called)
            config: Assembly options (defaults reproduce the classic format)
            verbose: Log phase summaries at INFO level
        """
        self.config = config or AssemblerConfig()
        self.optab = optab if optab is not None else OpcodeTable()
        self._verbose = verbose
        self._session: Optional[AssemblySession] = None
        self._result: Optional[AssemblyResult] = None

    # =========================================================================
    # Configuration
    # =========================================================================

    def load_optab(self, path: Union[str, Path]) -> OpcodeTable:
        """
        Load (replace) the opcode table from a file.

        Raises:
            TableLoadError: If the file cannot be opened or read
        """
        self.optab = load_optab(path)
        if self._verbose:
            logger.info(f"Opcode table: {len(self.optab)} entries from {path}")
        return self.optab

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> AssemblyResult:
        """
        Assemble source code held in a string.

        Args:
            source: Program text
            filename: Virtual filename for diagnostics

        Returns:
            AssemblyResult

        Raises:
            AssemblerError: If assembly fails
        """
        statements = parse_source(source, filename)
        return self._assemble(statements, filename)

    def assemble_file(
        self,
        filepath: Union[str, Path],
        optab_path: Union[str, Path, None] = None,
    ) -> AssemblyResult:
        """
        Assemble a source file.

        Args:
            filepath: Path to the source program
            optab_path: Opcode table file to load first (optional)

        Returns:
            AssemblyResult

        Raises:
            TableLoadError: If the opcode table cannot be loaded
            SourceReadError: If the source file cannot be read
            AssemblerError: If assembly fails
        """
        if optab_path is not None:
            self.load_optab(optab_path)

        statements = parse_file(filepath)
        return self._assemble(statements, str(filepath))

    def _assemble(self, statements: list[Statement], name: str) -> AssemblyResult:
        if self._verbose:
            logger.info(f"Assembling {name} ({len(statements)} statements)")

        self._result = None
        self._session = AssemblySession(self.optab, self.config)
        self._result = self._session.run(statements)

        for warning in self._result.warnings:
            logger.debug(f"{name}: {warning.message}")
        return self._result

    # =========================================================================
    # Output Methods
    # =========================================================================

    @property
    def result(self) -> AssemblyResult:
        if self._result is None:
            raise AssemblerError("nothing has been assembled yet")
        return self._result

    def get_symbols(self) -> dict[str, int]:
        """Symbol table of the last run as name to address."""
        return self.result.symbols.as_dict()

    def get_object_program(self) -> str:
        return self.result.object_text

    def get_listing(self) -> str:
        return self.result.listing_text

    def get_intermediate(self) -> str:
        return self.result.intermediate_text

    def has_warnings(self) -> bool:
        return bool(self._result and self._result.warnings)

    def get_warning_report(self) -> str:
        """Formatted warnings of the last run (or of the failed run)."""
        if self._session is None:
            return ""
        return self._session.errors.report()

    def write_object(self, filepath: Union[str, Path]) -> None:
        """Write the object program."""
        Path(filepath).write_text(self.result.object_text)
        if self._verbose:
            logger.info(f"Wrote object program to {filepath}")

    def write_listing(self, filepath: Union[str, Path]) -> None:
        """Write the annotated output listing."""
        Path(filepath).write_text(self.result.listing_text)
        if self._verbose:
            logger.info(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: Union[str, Path]) -> None:
        """Write the symbol table listing."""
        Path(filepath).write_text(self.result.symbol_table_text)
        if self._verbose:
            logger.info(f"Wrote symbols to {filepath}")

    def write_intermediate(self, filepath: Union[str, Path]) -> None:
        """Write the intermediate listing."""
        Path(filepath).write_text(self.result.intermediate_text)
        if self._verbose:
            logger.info(f"Wrote intermediate listing to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(
    source: str,
    optab: Union[OpcodeTable, dict[str, str], None] = None,
    config: Optional[AssemblerConfig] = None,
    filename: str = "<input>",
) -> AssemblyResult:
    """
    Assemble source code held in a string.

    Args:
        source: Program text
        optab: Opcode table or plain mnemonic to opcode dictionary
        config: Assembly options
        filename: Virtual filename for diagnostics

    Raises:
        AssemblerError: If assembly fails
    """
    if isinstance(optab, dict):
        optab = OpcodeTable.from_mapping(optab)
    return Assembler(optab=optab, config=config).assemble_string(source, filename)


def assemble_file(
    filepath: Union[str, Path],
    optab_path: Union[str, Path],
    config: Optional[AssemblerConfig] = None,
) -> AssemblyResult:
    """
    Assemble a source file with the given opcode table file.

    Raises:
        TableLoadError: If the opcode table cannot be loaded
        SourceReadError: If the source file cannot be read
        AssemblerError: If assembly fails
    """
    return Assembler(config=config).assemble_file(filepath, optab_path)
