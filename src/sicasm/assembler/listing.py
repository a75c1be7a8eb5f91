"""
Text Artifacts
==============

Renders the tab-separated listings produced by an assembly run:

- Intermediate listing: ``address  label  opcode  operand``
- Symbol table listing: ``name  address``
- Annotated output listing: ``address  label  opcode  operand  objectcode``

Addresses are uppercase hex without padding. The START line has no
address and shows ``-``, as do absent fields.
"""

from typing import Iterable, Optional

from sicasm.assembler.parser import ABSENT
from sicasm.assembler.pass1 import IntermediateRecord
from sicasm.assembler.pass2 import ListingLine
from sicasm.assembler.symbols import SymbolTable


def format_address(address: Optional[int]) -> str:
    return ABSENT if address is None else f"{address:X}"


def _fields(record: IntermediateRecord) -> list[str]:
    return [
        format_address(record.address),
        record.label or ABSENT,
        record.opcode or ABSENT,
        record.operand or ABSENT,
    ]


def render_intermediate(records: Iterable[IntermediateRecord]) -> str:
    """Intermediate listing, one line per statement."""
    return "".join("\t".join(_fields(record)) + "\n" for record in records)


def render_symbol_table(symbols: SymbolTable) -> str:
    """Symbol table listing in definition order."""
    return "".join(f"{sym.name}\t{sym.address:X}\n" for sym in symbols)


def render_listing(lines: Iterable[ListingLine]) -> str:
    """Annotated output listing with object code per statement."""
    return "".join(
        "\t".join(_fields(line.record) + [line.object_code]) + "\n"
        for line in lines
    )


def render_program_length(length: int) -> str:
    return f"Program Length: {length:X}\n"
