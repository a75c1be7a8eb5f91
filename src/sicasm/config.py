"""
Assembler Configuration
=======================

Options that select between the classic object-program layout and
stricter or more conventional variants. Configuration can come from:
- Default values (defined here), which reproduce the classic layout
- Environment variables (AssemblerConfig.from_env)
- Command-line options (sicasm), which override both

Environment variables (all optional):
    SICASM_MAX_TEXT_RECORD      Maximum bytes per text record (integer, 0 = unbounded)
    SICASM_BREAK_ON_RESERVE     Start a new text record after RESW/RESB (1/0)
    SICASM_TRUNCATE_NAME        Truncate program names longer than 6 chars (1/0)
    SICASM_PAD_END_RECORD       Zero-pad the end record address to 6 digits (1/0)
    SICASM_WARNINGS_AS_ERRORS   Fail the run on any warning (1/0)
    SICASM_MAX_ERRORS           Error limit per run (integer)
"""

from dataclasses import dataclass
from typing import Optional
import os


# Largest text record the classic SIC loader accepts (0x1E bytes)
SIC_TEXT_RECORD_LIMIT = 0x1E

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable, None if unset or invalid."""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


@dataclass
class AssemblerConfig:
    """
    Configuration for one assembly run.

    Attributes:
        max_text_record_bytes: Split text records so none exceeds this many
            bytes. None (default) emits one unbounded text record.
        break_on_reserve: Flush the current text record at RESW/RESB.
        truncate_program_name: Truncate START labels longer than 6
            characters instead of raising NameTooLongError.
        pad_end_record: Render the end record address as 6 hex digits
            instead of the unpadded classic form.
        warnings_as_errors: Fail the run if any warning was collected.
        max_errors: Stop a pass after this many errors.
    """

    max_text_record_bytes: Optional[int] = None
    break_on_reserve: bool = False
    truncate_program_name: bool = False
    pad_end_record: bool = False
    warnings_as_errors: bool = False
    max_errors: int = 100

    def __post_init__(self) -> None:
        if self.max_text_record_bytes is not None and self.max_text_record_bytes <= 0:
            raise ValueError(
                f"max_text_record_bytes must be positive, got {self.max_text_record_bytes}"
            )
        if self.max_errors <= 0:
            raise ValueError(f"max_errors must be positive, got {self.max_errors}")

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Invalid values are ignored and the default is kept.

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if limit := os.environ.get("SICASM_MAX_TEXT_RECORD"):
            try:
                value = int(limit, 0)
            except ValueError:
                pass  # Ignore invalid values
            else:
                if value > 0:
                    config.max_text_record_bytes = value
                elif value == 0:
                    config.max_text_record_bytes = None

        if (flag := _env_flag("SICASM_BREAK_ON_RESERVE")) is not None:
            config.break_on_reserve = flag

        if (flag := _env_flag("SICASM_TRUNCATE_NAME")) is not None:
            config.truncate_program_name = flag

        if (flag := _env_flag("SICASM_PAD_END_RECORD")) is not None:
            config.pad_end_record = flag

        if (flag := _env_flag("SICASM_WARNINGS_AS_ERRORS")) is not None:
            config.warnings_as_errors = flag

        if max_errors := os.environ.get("SICASM_MAX_ERRORS"):
            try:
                value = int(max_errors)
            except ValueError:
                pass
            else:
                if value > 0:
                    config.max_errors = value

        return config
