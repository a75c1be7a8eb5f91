"""
Shared test fixtures for the SIC assembler tests.
"""

from pathlib import Path

import pytest

from sicasm.assembler import OpcodeTable


# The textbook COPY fragment used throughout the tests
COPY_SOURCE = """\
COPY\tSTART\t1000
FIRST\tLDA\tALPHA
ALPHA\tWORD\t5
-\tEND\tFIRST
"""

# A larger program touching every directive
FULL_SOURCE = """\
COPY    START   1000
FIRST   LDA     ALPHA
-       STA     BETA
-       LDCH    CHARZ
BUF     RESB    10
ALPHA   WORD    5
BETA    RESW    2
CHARZ   BYTE    C'EOF'
HEXB    BYTE    X'F1'
-       END     FIRST
"""

SIC_OPCODES = {
    "LDA": "00",
    "STA": "0C",
    "LDCH": "50",
    "STCH": "54",
    "JSUB": "48",
    "RSUB": "4C",
    "COMP": "28",
    "JEQ": "30",
    "J": "3C",
}


@pytest.fixture
def optab() -> OpcodeTable:
    """Opcode table with a handful of SIC instructions."""
    return OpcodeTable.from_mapping(SIC_OPCODES)


@pytest.fixture
def copy_source() -> str:
    return COPY_SOURCE


@pytest.fixture
def full_source() -> str:
    return FULL_SOURCE


@pytest.fixture
def optab_file(tmp_path: Path) -> Path:
    """Opcode table file on disk."""
    path = tmp_path / "optab.txt"
    path.write_text("".join(f"{m} {o}\n" for m, o in SIC_OPCODES.items()))
    return path


@pytest.fixture
def copy_file(tmp_path: Path) -> Path:
    path = tmp_path / "copy.asm"
    path.write_text(COPY_SOURCE)
    return path
