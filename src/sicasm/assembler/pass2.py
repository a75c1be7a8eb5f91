"""
Pass 2: Object Code Generation
==============================

Re-walks the intermediate records produced by Pass 1, resolves operand
symbols and produces the annotated listing and the object program.

Object Code per Statement
-------------------------
| Statement             | Object code                                  |
|-----------------------|----------------------------------------------|
| mnemonic in optab     | opcode + operand address as 4 hex digits     |
| WORD n                | n as 6 hex digits                            |
| BYTE C'text'          | 2 hex digits per character                   |
| BYTE X'hex'           | the hex digits unchanged                     |
| anything else         | (none)                                       |

An operand symbol that is not in the symbol table resolves to address
0 and is reported as UnresolvedSymbolWarning.

Processing stops after the END record. Without END every record is
processed and MissingEndDirective is reported.

With a text record limit, a chunk that does not fit the current record
starts a new one. A single chunk larger than the limit is split across
records, each starting at the address of its first byte.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence
import logging

from sicasm.config import AssemblerConfig
from sicasm.errors import (
    AssemblerError,
    ErrorCollector,
    MissingEndDirective,
    NameTooLongError,
    TooManyErrors,
    UnresolvedSymbolWarning,
)
from sicasm.assembler.directives import (
    BYTE,
    END,
    RESERVE_DIRECTIVES,
    START,
    WORD,
    byte_literal_code,
    word_code,
)
from sicasm.assembler.optab import OpcodeTable
from sicasm.assembler.pass1 import IntermediateRecord
from sicasm.assembler.records import (
    NAME_WIDTH,
    EndRecord,
    HeaderRecord,
    ObjectProgram,
    TextRecord,
)
from sicasm.assembler.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingLine:
    """One line of the annotated output listing."""
    record: IntermediateRecord
    object_code: str = ""

    @property
    def address(self) -> Optional[int]:
        return self.record.address


@dataclass
class Pass2Result:
    """Annotated listing and object program."""
    listing: list[ListingLine] = field(default_factory=list)
    program: Optional[ObjectProgram] = None


def object_code_for(
    record: IntermediateRecord,
    symbols: SymbolTable,
    optab: OpcodeTable,
    errors: Optional[ErrorCollector] = None,
) -> str:
    """
    Compute the object code of one intermediate record.

    Args:
        record: The record to translate
        symbols: Symbol table from Pass 1
        optab: Opcode table
        errors: Receives UnresolvedSymbolWarning (optional)

    Returns:
        Object code as uppercase hex text, "" if the record has none

    Raises:
        NumericOperandError: For a bad WORD operand
        ByteLiteralError: For a bad BYTE operand
    """
    stmt = record.statement
    opcode = stmt.opcode

    if opcode in optab:
        address = symbols.lookup(stmt.operand)
        if address is None:
            address = 0
            if stmt.operand is not None:
                warning = UnresolvedSymbolWarning(
                    stmt.operand,
                    location=stmt.location,
                    source_line=stmt.source,
                    similar_symbols=symbols.similar(stmt.operand),
                )
                logger.warning(str(warning))
                if errors is not None:
                    errors.add_warning(warning)
        return f"{optab.get(opcode)}{address:04X}"

    if opcode == WORD:
        return word_code(stmt)

    if opcode == BYTE:
        return byte_literal_code(stmt)

    return ""


def program_name(
    records: Sequence[IntermediateRecord],
    config: AssemblerConfig,
    errors: ErrorCollector,
) -> str:
    """
    Program name for the header record: the label of the first START.

    Names longer than 6 characters are reported as NameTooLongError
    unless truncation is enabled; either way the returned name fits.
    """
    for record in records:
        if record.opcode != START:
            continue
        name = record.label or ""
        if len(name) > NAME_WIDTH:
            if not config.truncate_program_name:
                errors.add(NameTooLongError(
                    name,
                    NAME_WIDTH,
                    location=record.statement.location,
                    source_line=record.statement.source,
                ))
            else:
                logger.info(f"Program name '{name}' truncated to '{name[:NAME_WIDTH]}'")
            name = name[:NAME_WIDTH]
        return name
    return ""


def run_pass2(
    records: Sequence[IntermediateRecord],
    symbols: SymbolTable,
    optab: OpcodeTable,
    starting_address: int,
    program_length: int,
    errors: ErrorCollector,
    config: Optional[AssemblerConfig] = None,
) -> Pass2Result:
    """
    Generate the annotated listing and the object program.

    Args:
        records: Intermediate records from Pass 1
        symbols: Symbol table from Pass 1
        optab: Opcode table
        starting_address: Starting address from Pass 1
        program_length: Program length from Pass 1
        errors: Collector for errors and warnings
        config: Assembly options (text record limit, end record format)

    Returns:
        Pass2Result with listing lines and the ObjectProgram
    """
    config = config or AssemblerConfig()
    result = Pass2Result()

    # Sub-pass A: header
    header = HeaderRecord(
        name=program_name(records, config, errors),
        start=starting_address,
        length=program_length,
    )
    program = ObjectProgram(header=header)

    # Sub-pass B: code generation
    limit = config.max_text_record_bytes
    current: Optional[TextRecord] = None
    saw_end = False

    def flush() -> None:
        nonlocal current
        if current:
            program.text_records.append(current)
        current = None

    try:
        for record in records:
            try:
                code = object_code_for(record, symbols, optab, errors)
            except AssemblerError as e:
                errors.add(e)
                code = ""

            result.listing.append(ListingLine(record, code))

            if config.break_on_reserve and record.opcode in RESERVE_DIRECTIVES:
                flush()

            if code:
                address = record.address if record.address is not None else starting_address
                size = len(code) // 2
                if current is not None and limit is not None and current.length + size > limit:
                    flush()
                while code:
                    if current is None:
                        current = TextRecord(address)
                    room = None if limit is None else limit - current.length
                    if room is None or len(code) // 2 <= room:
                        current.add(code)
                        break
                    # Chunk larger than a whole record: fill this one, continue in the next
                    current.add(code[:room * 2])
                    code = code[room * 2:]
                    address += room
                    flush()

            if record.opcode == END:
                saw_end = True
                break
    except TooManyErrors as e:
        errors.errors.append(e)

    flush()

    if not saw_end:
        last = records[-1].statement.location if records else None
        warning = MissingEndDirective(last)
        logger.warning(str(warning))
        errors.add_warning(warning)

    program.end = EndRecord(starting_address, padded=config.pad_end_record)
    result.program = program

    logger.info(
        f"Pass 2: {len(result.listing)} listing lines, "
        f"{len(program.text_records)} text record(s)"
    )
    return result
