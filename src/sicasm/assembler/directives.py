"""
Assembler Directives and Operand Decoding
=========================================

Directives recognised by the assembler:

| Directive | Operand          | Size                  | Object code            |
|-----------|------------------|-----------------------|------------------------|
| START     | hex address      | -                     | -                      |
| END       | (ignored)        | 0                     | -                      |
| WORD      | decimal value    | 3                     | value as 6 hex digits  |
| RESW      | decimal count    | 3 * count             | -                      |
| RESB      | decimal count    | count                 | -                      |
| BYTE      | C'text' / X'hex' | chars / hex digits/2  | char codes / hex as is |

All helpers raise statement-level errors carrying the statement's
location so the passes can collect them.
"""

import re

from sicasm.errors import ByteLiteralError, NumericOperandError
from sicasm.assembler.parser import Statement

START = "START"
END = "END"
WORD = "WORD"
RESW = "RESW"
RESB = "RESB"
BYTE = "BYTE"

RESERVE_DIRECTIVES = frozenset({RESW, RESB})

# Bytes occupied by one instruction or one WORD
WORD_SIZE = 3

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


def parse_hex_operand(stmt: Statement) -> int:
    """
    Parse the operand of ``stmt`` as an unsigned hexadecimal integer.

    Raises:
        NumericOperandError: If the operand is missing or not hexadecimal
    """
    operand = stmt.operand
    if operand is None or not _HEX_RE.fullmatch(operand):
        raise NumericOperandError(
            stmt.opcode or "?", operand, 16,
            location=stmt.location, source_line=stmt.source,
        )
    return int(operand, 16)


def parse_decimal_operand(stmt: Statement) -> int:
    """
    Parse the operand of ``stmt`` as an unsigned decimal integer.

    Raises:
        NumericOperandError: If the operand is missing or not decimal
    """
    operand = stmt.operand
    if operand is None or not _DECIMAL_RE.fullmatch(operand):
        raise NumericOperandError(
            stmt.opcode or "?", operand, 10,
            location=stmt.location, source_line=stmt.source,
        )
    return int(operand, 10)


def split_byte_literal(stmt: Statement) -> tuple[str, str]:
    """
    Split a BYTE operand into its kind ("C" or "X") and content.

    Raises:
        ByteLiteralError: If the operand is not a well-formed literal
    """
    operand = stmt.operand

    def fail(reason: str) -> ByteLiteralError:
        return ByteLiteralError(
            operand, reason, location=stmt.location, source_line=stmt.source
        )

    if operand is None:
        raise fail("missing operand")

    kind = operand[:2]
    if kind not in ("C'", "X'"):
        raise fail("expected C'...' or X'...'")
    if len(operand) < 3 or not operand.endswith("'"):
        raise fail("missing closing quote")

    content = operand[2:-1]
    if kind == "C'" and not content.isascii():
        raise fail("character constant must be ASCII")
    if kind == "X'":
        if not content or not _HEX_RE.fullmatch(content):
            raise fail("hex constant must contain only hex digits")
        if len(content) % 2:
            raise fail("hex constant must have an even number of digits")
    return kind[0], content


def byte_literal_length(stmt: Statement) -> int:
    """
    Number of bytes a BYTE statement occupies.

    C'text' occupies one byte per character (operand length minus the
    prefix and quotes). X'hex' occupies one byte per two hex digits.
    """
    kind, content = split_byte_literal(stmt)
    if kind == "C":
        return len(content)
    return len(content) // 2


def byte_literal_code(stmt: Statement) -> str:
    """Object code for a BYTE statement, as uppercase hex text."""
    kind, content = split_byte_literal(stmt)
    if kind == "C":
        return "".join(f"{ord(ch):02X}" for ch in content)
    return content


def word_code(stmt: Statement) -> str:
    """Object code for a WORD statement: the value as 6 hex digits."""
    return f"{parse_decimal_operand(stmt):06X}"
