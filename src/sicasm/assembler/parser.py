"""
SIC Source Statement Parser
===========================

Source programs use a fixed three-field layout, fields separated by one
or more whitespace characters:

    LABEL   OPCODE  OPERAND
    COPY    START   1000
    FIRST   LDA     ALPHA
    -       END     FIRST

The token ``-`` in any position means "this field is absent". A line
with fewer than three tokens leaves the trailing fields absent. Tokens
after the third are ignored. Blank lines produce no statement.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging

from sicasm.errors import SourceLocation, SourceReadError

logger = logging.getLogger(__name__)

# Placeholder token for an absent field
ABSENT = "-"


@dataclass(frozen=True)
class Statement:
    """
    One parsed source line.

    Attributes:
        label: Label field, None if absent
        opcode: Mnemonic or directive, None if absent
        operand: Operand field, None if absent
        location: Where the statement was read from
        source: The original line text (without the newline)
    """
    label: Optional[str]
    opcode: Optional[str]
    operand: Optional[str]
    location: SourceLocation
    source: str = ""


def _field(parts: list[str], index: int) -> Optional[str]:
    if index < len(parts) and parts[index] != ABSENT:
        return parts[index]
    return None


def parse_line(
    text: str, line_number: int = 1, filename: str = "<input>"
) -> Optional[Statement]:
    """
    Parse one source line into a Statement.

    Args:
        text: Raw source line
        line_number: 1-based line number for diagnostics
        filename: Source name for diagnostics

    Returns:
        The Statement, or None for a blank line
    """
    parts = text.split()
    if not parts:
        return None

    if len(parts) > 3:
        logger.debug(
            f"{filename}:{line_number}: ignoring {len(parts) - 3} extra token(s)"
        )

    column = len(text) - len(text.lstrip()) + 1
    return Statement(
        label=_field(parts, 0),
        opcode=_field(parts, 1),
        operand=_field(parts, 2),
        location=SourceLocation(filename, line_number, column),
        source=text.rstrip("\r\n"),
    )


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """
    Parse a complete source program.

    Args:
        source: Program text
        filename: Source name for diagnostics

    Returns:
        Statements in source order, blank lines skipped
    """
    statements = []
    for number, line in enumerate(source.splitlines(), start=1):
        stmt = parse_line(line, number, filename)
        if stmt is not None:
            statements.append(stmt)

    logger.debug(f"Parsed {len(statements)} statements from {filename}")
    return statements


def parse_file(path: Union[str, Path]) -> list[Statement]:
    """
    Read and parse a source file.

    Raises:
        SourceReadError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), getattr(e, "strerror", None) or str(e)) from e

    return parse_source(source, str(path))
