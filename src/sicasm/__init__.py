"""
sicasm - SIC Two-Pass Assembler
===============================

This package assembles programs for the SIC (Simplified Instructional
Computer) into the classic text object program format.

Main Components
---------------
- **assembler**: Two-pass assembler (Pass 1, Pass 2, opcode table, records)
- **config**: Assembly options, with environment variable overrides
- **errors**: Exception and warning hierarchy
- **cli**: The ``sicasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from sicasm import Assembler
    >>> asm = Assembler()
    >>> asm.load_optab("optab.txt")
    >>> result = asm.assemble_file("copy.asm")
    >>> asm.write_object("copy.obj")

Or use the command-line tool:
    $ sicasm copy.asm -t optab.txt -o copy.obj -l copy.lst

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sicasm.assembler import (
    Assembler,
    AssemblyResult,
    AssemblySession,
    OpcodeTable,
    assemble,
    assemble_file,
    load_optab,
)
from sicasm.config import AssemblerConfig
from sicasm.errors import (
    SicAsmError,
    TableLoadError,
    SourceReadError,
    AssemblerError,
    NumericOperandError,
    ByteLiteralError,
    NameTooLongError,
    AssemblerWarning,
    DuplicateLabelWarning,
    UnresolvedSymbolWarning,
    MissingEndDirective,
    MultipleStartDirectives,
    MissingStartDirective,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "AssemblyResult",
    "AssemblySession",
    "OpcodeTable",
    "assemble",
    "assemble_file",
    "load_optab",
    # Configuration
    "AssemblerConfig",
    # Exception hierarchy
    "SicAsmError",
    "TableLoadError",
    "SourceReadError",
    "AssemblerError",
    "NumericOperandError",
    "ByteLiteralError",
    "NameTooLongError",
    # Warnings
    "AssemblerWarning",
    "DuplicateLabelWarning",
    "UnresolvedSymbolWarning",
    "MissingEndDirective",
    "MultipleStartDirectives",
    "MissingStartDirective",
]
