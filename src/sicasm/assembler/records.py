"""
Object Program Records
======================

The object program is plain text, one record per line, fields separated
by ``^``:

    H^COPY  ^001000^000006          Header: name, start, length
    T^001000^06^001003^000005       Text: start, byte length, code chunks
    E^1000                          End: starting address

Header Record
-------------
```
Field   Width  Description
-----   -----  -----------
H       1      Record type
name    6      Program name, space padded
start   6      Starting address, hex, zero padded
length  6      Program length in bytes, hex, zero padded
```

Text Record
-----------
```
Field   Width  Description
-----   -----  -----------
T       1      Record type
start   6      Address of the first chunk, hex, zero padded
length  2      Number of bytes in the record, hex, zero padded
chunk   var    One ^-prefixed object code chunk per statement
```

End Record
----------
The end record carries the starting address in hex *without* zero
padding (``E^1000``), unlike the header and text records. Pass
``padded=True`` for the 6-digit form.
"""

from dataclasses import dataclass, field
from typing import Optional

SEPARATOR = "^"
NAME_WIDTH = 6


@dataclass(frozen=True)
class HeaderRecord:
    """Program name, starting address and length."""
    name: str
    start: int
    length: int

    def render(self) -> str:
        name = self.name.ljust(NAME_WIDTH)
        return f"H^{name}^{self.start:06X}^{self.length:06X}"

    @classmethod
    def parse(cls, text: str) -> "HeaderRecord":
        """
        Parse a rendered header record.

        Raises:
            ValueError: If the text is not a header record
        """
        parts = text.rstrip("\r\n").split(SEPARATOR)
        if len(parts) != 4 or parts[0] != "H":
            raise ValueError(f"not a header record: {text!r}")
        return cls(
            name=parts[1].rstrip(" "),
            start=int(parts[2], 16),
            length=int(parts[3], 16),
        )


@dataclass
class TextRecord:
    """
    A run of object code chunks loaded from consecutive statements.

    ``length`` counts bytes, that is the total hex digits divided by 2.
    """
    start: int
    chunks: list[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        return sum(len(chunk) for chunk in self.chunks) // 2

    def add(self, code: str) -> None:
        self.chunks.append(code)

    def render(self) -> str:
        body = "".join(f"^{chunk}" for chunk in self.chunks)
        return f"T^{self.start:06X}^{self.length:02X}{body}"

    def __bool__(self) -> bool:
        return bool(self.chunks)


@dataclass(frozen=True)
class EndRecord:
    """Transfer address record."""
    start: int
    padded: bool = False

    def render(self) -> str:
        if self.padded:
            return f"E^{self.start:06X}"
        return f"E^{self.start:X}"


@dataclass
class ObjectProgram:
    """Header, text records and end record of an assembled program."""
    header: HeaderRecord
    text_records: list[TextRecord] = field(default_factory=list)
    end: Optional[EndRecord] = None

    def lines(self) -> list[str]:
        result = [self.header.render()]
        result.extend(record.render() for record in self.text_records)
        if self.end is not None:
            result.append(self.end.render())
        return result

    def render(self) -> str:
        """The object program text, newline terminated."""
        return "".join(f"{line}\n" for line in self.lines())
