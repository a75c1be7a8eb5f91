"""
Opcode Table
============

The opcode table maps instruction mnemonics to their opcode strings. It
is loaded from an external text file with one ``mnemonic opcode`` pair
per line:

    LDA   00
    STA   0C
    JSUB  48

Pass 1 only needs table membership (every instruction occupies 3
bytes). Pass 2 concatenates the opcode string with the operand address.
Opcode strings are not validated, so a malformed entry shows up
unchanged in the object code.

Usage:
    >>> optab = load_optab("optab.txt")
    >>> "LDA" in optab
    True
    >>> optab.get("LDA")
    '00'
"""

from pathlib import Path
from typing import Iterator, Optional, Union
import logging

from sicasm.errors import TableLoadError

logger = logging.getLogger(__name__)


class OpcodeTable:
    """
    Mnemonic to opcode mapping.

    An empty (never loaded) table answers False to every membership
    query; assembly still runs but instructions produce no object code.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._source: Optional[Path] = None

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_mapping(cls, mapping: dict[str, str]) -> "OpcodeTable":
        """Build a table from an existing dictionary."""
        table = cls()
        table._entries = dict(mapping)
        return table

    @classmethod
    def from_text(cls, text: str) -> "OpcodeTable":
        """Build a table from opcode-file contents held in memory."""
        table = cls()
        table._replace(text.splitlines(), "<input>")
        return table

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "OpcodeTable":
        """Build a table from an opcode file."""
        table = cls()
        table.load(path)
        return table

    def load(self, path: Union[str, Path]) -> None:
        """
        Replace the table contents with the entries of an opcode file.

        Lines that do not hold exactly two whitespace-separated tokens
        are skipped. A later line for the same mnemonic replaces an
        earlier one.

        Args:
            path: Opcode table file

        Raises:
            TableLoadError: If the file cannot be opened or read
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise TableLoadError(str(path), getattr(e, "strerror", None) or str(e)) from e

        self._replace(lines, str(path))
        self._source = path

    def _replace(self, lines: list[str], origin: str) -> None:
        entries: dict[str, str] = {}
        for number, line in enumerate(lines, start=1):
            parts = line.split()
            if len(parts) != 2:
                if parts:
                    logger.debug(
                        f"{origin}:{number}: skipping opcode line with {len(parts)} tokens"
                    )
                continue
            mnemonic, opcode = parts
            if mnemonic in entries:
                logger.debug(f"{origin}:{number}: '{mnemonic}' redefined as {opcode}")
            entries[mnemonic] = opcode

        self._entries = entries
        logger.info(f"Loaded {len(entries)} opcodes from {origin}")

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, mnemonic: Optional[str]) -> Optional[str]:
        """Return the opcode string for a mnemonic, or None."""
        if mnemonic is None:
            return None
        return self._entries.get(mnemonic)

    @property
    def is_loaded(self) -> bool:
        """True if the table holds at least one entry."""
        return bool(self._entries)

    @property
    def source(self) -> Optional[Path]:
        """File the table was loaded from, if any."""
        return self._source

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, mnemonic: object) -> bool:
        return mnemonic in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"OpcodeTable({len(self._entries)} entries)"


def load_optab(path: Union[str, Path]) -> OpcodeTable:
    """
    Load an opcode table file.

    Args:
        path: Opcode table file

    Returns:
        The loaded OpcodeTable

    Raises:
        TableLoadError: If the file cannot be opened or read
    """
    return OpcodeTable.from_file(path)
