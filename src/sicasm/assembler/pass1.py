"""
Pass 1: Address Assignment
==========================

Walks the statements in source order, keeps the location counter,
fills the symbol table and produces the intermediate records that
Pass 2 consumes.

Location Counter Rules
----------------------
The first START sets the starting address (hex operand) and the
location counter. Every other statement is recorded at the current
location counter and then advances it:

| Opcode              | Advance                   |
|---------------------|---------------------------|
| WORD                | 3                         |
| RESW n              | 3 * n                     |
| RESB n              | n                         |
| BYTE C'text'        | len(text)                 |
| BYTE X'hex'         | len(hex) / 2              |
| in opcode table     | 3                         |
| anything else       | 0                         |

A statement whose operand cannot be decoded is reported and does not
advance the location counter.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from sicasm.config import AssemblerConfig
from sicasm.errors import (
    AssemblerError,
    DuplicateLabelWarning,
    ErrorCollector,
    MissingStartDirective,
    MultipleStartDirectives,
    TooManyErrors,
)
from sicasm.assembler.directives import (
    BYTE,
    RESB,
    RESW,
    START,
    WORD,
    WORD_SIZE,
    byte_literal_length,
    parse_decimal_operand,
    parse_hex_operand,
)
from sicasm.assembler.optab import OpcodeTable
from sicasm.assembler.parser import Statement
from sicasm.assembler.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntermediateRecord:
    """
    A statement tagged with the location counter it was assembled at.

    ``address`` is None only for the START statement, which has no
    address of its own.
    """
    address: Optional[int]
    statement: Statement

    @property
    def label(self) -> Optional[str]:
        return self.statement.label

    @property
    def opcode(self) -> Optional[str]:
        return self.statement.opcode

    @property
    def operand(self) -> Optional[str]:
        return self.statement.operand


@dataclass
class Pass1Result:
    """
    Everything Pass 1 hands to Pass 2.

    Attributes:
        records: Intermediate records in source order
        symbols: The populated symbol table
        starting_address: Operand of the first START (0 without START)
        program_length: final_location - starting_address
        final_location: Location counter after the last statement
    """
    records: tuple[IntermediateRecord, ...]
    symbols: SymbolTable
    starting_address: int = 0
    program_length: int = 0
    final_location: int = 0
    locations: list[int] = field(default_factory=list, repr=False)


def statement_size(stmt: Statement, optab: OpcodeTable) -> int:
    """
    Bytes a statement adds to the location counter.

    Raises:
        NumericOperandError: For a bad WORD/RESW/RESB operand
        ByteLiteralError: For a bad BYTE operand
    """
    opcode = stmt.opcode
    if opcode == WORD:
        parse_decimal_operand(stmt)
        return WORD_SIZE
    if opcode == RESW:
        return WORD_SIZE * parse_decimal_operand(stmt)
    if opcode == RESB:
        return parse_decimal_operand(stmt)
    if opcode == BYTE:
        return byte_literal_length(stmt)
    if opcode in optab:
        return WORD_SIZE
    return 0


def run_pass1(
    statements: list[Statement],
    optab: OpcodeTable,
    errors: ErrorCollector,
    config: Optional[AssemblerConfig] = None,
    symbols: Optional[SymbolTable] = None,
) -> Pass1Result:
    """
    Assign addresses and build the symbol table.

    Statement errors are added to ``errors``; the caller decides whether
    to continue. Warnings (duplicate labels, repeated START, missing
    START) are added as warnings.

    Args:
        statements: Parsed source statements
        optab: Opcode table (only membership is used)
        errors: Collector for errors and warnings
        config: Assembly options
        symbols: Symbol table to fill (a new one by default)

    Returns:
        Pass1Result
    """
    config = config or AssemblerConfig()
    symbols = symbols if symbols is not None else SymbolTable()

    records: list[IntermediateRecord] = []
    locations: list[int] = []
    location = 0
    starting_address = 0
    start_stmt: Optional[Statement] = None

    try:
        for stmt in statements:
            if stmt.opcode == START and start_stmt is None:
                start_stmt = stmt
                try:
                    starting_address = parse_hex_operand(stmt)
                except AssemblerError as e:
                    errors.add(e)
                location = starting_address
                records.append(IntermediateRecord(None, stmt))
                locations.append(location)
                continue

            if stmt.opcode == START:
                warning = MultipleStartDirectives(
                    stmt.location, start_stmt.location, stmt.source
                )
                logger.warning(str(warning))
                errors.add_warning(warning)

            if stmt.label is not None:
                existing = symbols.define(stmt.label, location, stmt.location)
                if existing is not None:
                    warning = DuplicateLabelWarning(
                        stmt.label,
                        location=stmt.location,
                        original_location=existing.location,
                        source_line=stmt.source,
                    )
                    logger.warning(str(warning))
                    errors.add_warning(warning)

            records.append(IntermediateRecord(location, stmt))

            try:
                location += statement_size(stmt, optab)
            except AssemblerError as e:
                errors.add(e)
            locations.append(location)
    except TooManyErrors as e:
        errors.errors.append(e)

    if start_stmt is None and statements:
        warning = MissingStartDirective(statements[0].location)
        logger.warning(str(warning))
        errors.add_warning(warning)

    program_length = location - starting_address
    logger.info(
        f"Pass 1: {len(records)} records, {len(symbols)} symbols, "
        f"start {starting_address:X}, length {program_length:X}"
    )

    return Pass1Result(
        records=tuple(records),
        symbols=symbols,
        starting_address=starting_address,
        program_length=program_length,
        final_location=location,
        locations=locations,
    )
