"""
SIC Assembler Error Hierarchy
=============================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from SicAsmError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
SicAsmError (base)
├── TableLoadError - opcode table file cannot be opened or read
├── SourceReadError - source file cannot be opened or read
└── AssemblerError (statement-level problems)
    ├── NumericOperandError - bad hex/decimal operand
    ├── ByteLiteralError - malformed C'...' or X'...' literal
    ├── NameTooLongError - program name longer than 6 characters
    ├── TooManyErrors - error limit reached
    └── AssemblerWarning (non-fatal, collected)
        ├── DuplicateLabelWarning - label defined twice, first kept
        ├── UnresolvedSymbolWarning - operand symbol not defined
        ├── MissingEndDirective - no END statement
        ├── MultipleStartDirectives - START seen more than once
        └── MissingStartDirective - no START statement

Design Philosophy
-----------------
Each statement-level exception captures the source location (filename,
line, column) when known, so messages point straight at the offending
line:

    copy.asm:3:1: error: invalid decimal operand 'FIVE' for WORD
        ALPHA   WORD    FIVE
    hint: WORD expects an unsigned decimal integer

Warnings share the same formatting with a "warning:" prefix. They are
normally collected and returned next to the assembled artifacts. In
strict mode they fail the run.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SicAsmError(Exception):
    """
    Base exception for all assembler errors.

        try:
            Assembler().assemble_file("copy.asm", "optab.txt")
        except SicAsmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# File Access Exceptions
# =============================================================================

class TableLoadError(SicAsmError):
    """
    The opcode table file could not be opened or read.

    Fatal for the run: without the table no instruction would produce
    object code.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot load opcode table '{path}': {reason}")


class SourceReadError(SicAsmError):
    """The source program could not be opened or read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read source file '{path}': {reason}")


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(SicAsmError):
    """
    Base exception for statement-level assembler errors.

    Provides common formatting with source location, source context
    and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    severity = "error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the message with location, source context, and hint.

        Example output:
            copy.asm:4:1: warning: duplicate label 'ALPHA'
                ALPHA   RESW    1
            hint: 'ALPHA' was first defined at copy.asm:3:1
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.severity}: {self.message}")
        else:
            parts.append(f"{self.severity}: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class NumericOperandError(AssemblerError):
    """
    An operand that must be a number is not one.

    Raised for START (hexadecimal) and WORD, RESW, RESB (decimal) when the
    operand is missing, negative, or contains invalid digits.
    """

    def __init__(
        self,
        directive: str,
        operand: Optional[str],
        base: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.directive = directive
        self.operand = operand
        self.base = base

        kind = "hexadecimal" if base == 16 else "decimal"
        if operand is None:
            message = f"{directive} requires a {kind} operand"
        else:
            message = f"invalid {kind} operand '{operand}' for {directive}"

        super().__init__(
            message,
            location=location,
            hint=f"{directive} expects an unsigned {kind} integer",
            source_line=source_line,
        )


class ByteLiteralError(AssemblerError):
    """
    Malformed BYTE operand.

    Valid forms are C'text' (character constant) and X'hex' (hex
    constant with an even number of hex digits).
    """

    def __init__(
        self,
        operand: Optional[str],
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        self.reason = reason
        super().__init__(
            f"invalid BYTE literal '{operand}': {reason}",
            location=location,
            hint="use C'text' or X'hexdigits'",
            source_line=source_line,
        )


class NameTooLongError(AssemblerError):
    """The START label does not fit in the 6-character header name field."""

    def __init__(
        self,
        name: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.limit = limit
        super().__init__(
            f"program name '{name}' is longer than {limit} characters",
            location=location,
            hint="shorten the START label or enable name truncation",
            source_line=source_line,
        )


# =============================================================================
# Warnings
# =============================================================================

class AssemblerWarning(AssemblerError):
    """
    Base class for non-fatal diagnostics.

    Warnings are instances rather than strings so callers can filter
    them by type. They are only raised in strict mode.
    """

    severity = "warning"


class DuplicateLabelWarning(AssemblerWarning):
    """Label defined more than once. The first definition is kept."""

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate label '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnresolvedSymbolWarning(AssemblerWarning):
    """
    Instruction operand names a symbol that was never defined.

    The operand address defaults to 0 in the generated object code.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        hint = "address 0000 was used"
        if self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}? address 0000 was used"

        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingEndDirective(AssemblerWarning):
    """The program has no END statement; every record was processed."""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "program has no END directive",
            location=location,
            hint="the object program may be incomplete",
        )


class MultipleStartDirectives(AssemblerWarning):
    """A START after the first one is treated as an ordinary statement."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.original_location = original_location
        hint = "only the first START sets the starting address"
        if original_location:
            hint = f"first START is at {original_location}; {hint}"
        super().__init__(
            "START directive repeated",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingStartDirective(AssemblerWarning):
    """The program has no START; addresses begin at 0 and the name is blank."""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "program has no START directive",
            location=location,
            hint="addresses start at 0 and the program name is blank",
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects errors and warnings for batch reporting.

    The passes use this to continue after a bad statement, so that all
    problems are reported together:

        collector = ErrorCollector(max_errors=100)
        try:
            ...
            collector.add(NumericOperandError(...))
        except TooManyErrors:
            pass

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[AssemblerWarning] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"too many errors ({self.max_errors}), stopping")

    def add_warning(self, warning: AssemblerWarning) -> None:
        """Add a warning."""
        self.warnings.append(warning)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors, warnings and a summary line
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        for warning in self.warnings:
            lines.append(str(warning))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered.

    Stops a pass early when the source is fundamentally broken.
    """

    def __init__(self, message: str = "too many errors"):
        super().__init__(message)
