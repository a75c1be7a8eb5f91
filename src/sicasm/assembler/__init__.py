"""
SIC Two-Pass Assembler
======================

This package translates SIC assembly source into a text object program
using the classic two-pass technique.

Main Components
---------------
- **Assembler**: Main class that loads the opcode table and runs assemblies
- **AssemblySession**: State of one run (symbol table, diagnostics)
- **OpcodeTable**: Mnemonic to opcode mapping loaded from a text file
- **parse_line / parse_source**: Three-field statement parser
- **run_pass1**: Address assignment and symbol collection
- **run_pass2**: Object code generation and object program records

Assembly Process
----------------
1. **Pass 1**: Walk statements, keep the location counter, fill the
   symbol table, produce intermediate records.
2. **Pass 2**: Resolve operand symbols, compute object code, build the
   header, text and end records and the annotated listing.

Example Usage
-------------
>>> from sicasm.assembler import assemble
>>> result = assemble('''
... COPY    START   1000
... FIRST   LDA     ALPHA
... ALPHA   WORD    5
... -       END     FIRST
... ''', optab={"LDA": "00"})
>>> result.program.header.render()
'H^COPY  ^001000^000006'
"""

from sicasm.assembler.assembler import (
    Assembler,
    AssemblyResult,
    AssemblySession,
    assemble,
    assemble_file,
)
from sicasm.assembler.optab import OpcodeTable, load_optab
from sicasm.assembler.parser import Statement, parse_line, parse_source, parse_file
from sicasm.assembler.symbols import Symbol, SymbolTable
from sicasm.assembler.pass1 import IntermediateRecord, Pass1Result, run_pass1
from sicasm.assembler.pass2 import ListingLine, Pass2Result, run_pass2, object_code_for
from sicasm.assembler.records import HeaderRecord, TextRecord, EndRecord, ObjectProgram
from sicasm.assembler.listing import (
    render_intermediate,
    render_symbol_table,
    render_listing,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "AssemblyResult",
    "AssemblySession",
    "assemble",
    "assemble_file",
    # Opcode table
    "OpcodeTable",
    "load_optab",
    # Parser
    "Statement",
    "parse_line",
    "parse_source",
    "parse_file",
    # Symbols
    "Symbol",
    "SymbolTable",
    # Passes
    "IntermediateRecord",
    "Pass1Result",
    "run_pass1",
    "ListingLine",
    "Pass2Result",
    "run_pass2",
    "object_code_for",
    # Object program
    "HeaderRecord",
    "TextRecord",
    "EndRecord",
    "ObjectProgram",
    # Listings
    "render_intermediate",
    "render_symbol_table",
    "render_listing",
]
