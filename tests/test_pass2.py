# =============================================================================
# test_pass2.py - Pass 2 Tests
# =============================================================================
# Tests for object code generation, text record assembly and the
# annotated listing produced by the second pass.
# =============================================================================

import pytest

from sicasm.assembler import parse_source, run_pass1, run_pass2, object_code_for
from sicasm.assembler.parser import parse_line
from sicasm.assembler.pass1 import IntermediateRecord
from sicasm.assembler.symbols import SymbolTable
from sicasm.config import AssemblerConfig
from sicasm.errors import (
    ErrorCollector,
    MissingEndDirective,
    NameTooLongError,
    UnresolvedSymbolWarning,
)


def assemble_passes(source, optab, config=None):
    errors = ErrorCollector()
    p1 = run_pass1(parse_source(source), optab, errors, config)
    p2 = run_pass2(
        p1.records, p1.symbols, optab, p1.starting_address, p1.program_length,
        errors, config,
    )
    return p2, errors


def record(line, address=0):
    return IntermediateRecord(address, parse_line(line))


class TestObjectCode:
    """Test object code for individual statements."""

    def test_instruction(self, optab):
        symbols = SymbolTable()
        symbols.define("ALPHA", 0x1003)
        assert object_code_for(record("FIRST LDA ALPHA"), symbols, optab) == "001003"

    def test_instruction_without_operand(self, optab):
        assert object_code_for(record("- RSUB"), SymbolTable(), optab) == "4C0000"

    def test_unresolved_symbol_defaults_to_zero(self, optab):
        errors = ErrorCollector()
        code = object_code_for(record("- LDA NOWHERE"), SymbolTable(), optab, errors)
        assert code == "000000"
        assert isinstance(errors.warnings[0], UnresolvedSymbolWarning)
        assert errors.warnings[0].symbol == "NOWHERE"

    def test_unresolved_symbol_suggestion(self, optab):
        symbols = SymbolTable()
        symbols.define("ALPHA", 3)
        errors = ErrorCollector()
        object_code_for(record("- LDA ALPAH"), symbols, optab, errors)
        assert "ALPHA" in str(errors.warnings[0])

    @pytest.mark.parametrize("line,code", [
        ("A WORD 5", "000005"),
        ("A WORD 4096", "001000"),
        ("A WORD 0", "000000"),
        ("A BYTE C'EOF'", "454F46"),
        ("A BYTE C'a'", "61"),
        ("A BYTE X'F1'", "F1"),
        ("A BYTE X'05ab'", "05ab"),
        ("A RESW 3", ""),
        ("A RESB 3", ""),
        ("- END FIRST", ""),
        ("A FOO BAR", ""),
    ])
    def test_directives(self, line, code, optab):
        assert object_code_for(record(line), SymbolTable(), optab) == code

    @pytest.mark.parametrize("text", ["A", "HELLO", "XYZ12"])
    def test_character_literal_length(self, text, optab):
        """C'...' with n characters gives 2n hex digits."""
        stmt = parse_line(f"A BYTE C'{text}'")
        code = object_code_for(IntermediateRecord(0, stmt), SymbolTable(), optab)
        assert len(code) == 2 * len(text)

    def test_opcode_string_used_as_is(self):
        from sicasm.assembler import OpcodeTable
        optab = OpcodeTable.from_mapping({"ODD": "xyz"})
        assert object_code_for(record("- ODD"), SymbolTable(), optab) == "xyz0000"


class TestObjectProgram:
    """Test header, text and end records."""

    def test_copy_program(self, copy_source, optab):
        result, errors = assemble_passes(copy_source, optab)
        program = result.program
        assert program.header.render() == "H^COPY  ^001000^000006"
        assert [t.render() for t in program.text_records] == ["T^001000^06^001003^000005"]
        assert program.end.render() == "E^1000"
        assert not errors.has_errors()
        assert not errors.has_warnings()

    def test_single_unbounded_text_record(self, full_source, optab):
        result, _ = assemble_passes(full_source, optab)
        assert result.program.render() == (
            "H^COPY  ^001000^000020\n"
            "T^001000^10^001013^0C1016^50101C^000005^454F46^F1\n"
            "E^1000\n"
        )

    def test_record_limit(self, full_source, optab):
        config = AssemblerConfig(max_text_record_bytes=6)
        result, _ = assemble_passes(full_source, optab, config)
        assert [t.render() for t in result.program.text_records] == [
            "T^001000^06^001013^0C1016",
            "T^001006^06^50101C^000005",
            "T^00101C^04^454F46^F1",
        ]

    def test_oversized_chunk_is_split(self, optab):
        """A BYTE constant longer than the limit spans several records."""
        config = AssemblerConfig(max_text_record_bytes=4)
        source = "P START 0\nA BYTE C'HELLOWORLD'\nB WORD 7\n- END P\n"
        result, _ = assemble_passes(source, optab, config)
        assert [t.render() for t in result.program.text_records] == [
            "T^000000^04^48454C4C",
            "T^000004^04^4F574F52",
            "T^000008^02^4C44",
            "T^00000A^03^000007",
        ]
        assert all(t.length <= 4 for t in result.program.text_records)

    def test_break_on_reserve(self, full_source, optab):
        config = AssemblerConfig(break_on_reserve=True)
        result, _ = assemble_passes(full_source, optab, config)
        assert [t.render() for t in result.program.text_records] == [
            "T^001000^09^001013^0C1016^50101C",
            "T^001013^03^000005",
            "T^00101C^04^454F46^F1",
        ]

    def test_padded_end_record(self, copy_source, optab):
        result, _ = assemble_passes(copy_source, optab, AssemblerConfig(pad_end_record=True))
        assert result.program.end.render() == "E^001000"

    def test_no_object_code(self, optab):
        result, _ = assemble_passes("P START 0\nA RESW 2\n- END P\n", optab)
        assert result.program.text_records == []
        assert result.program.render() == "H^P     ^000000^000006\nE^0\n"

    def test_stops_at_end(self, optab):
        """Records after END are neither listed nor assembled."""
        source = "P START 0\nA WORD 1\n- END P\nB WORD 2\n"
        result, errors = assemble_passes(source, optab)
        assert len(result.listing) == 3
        assert result.program.text_records[0].chunks == ["000001"]
        assert not errors.has_warnings()

    def test_missing_end(self, optab):
        source = "P START 0\nA WORD 1\nB WORD 2\n"
        result, errors = assemble_passes(source, optab)
        assert len(result.listing) == 3
        assert result.program.text_records[0].chunks == ["000001", "000002"]
        assert any(isinstance(w, MissingEndDirective) for w in errors.warnings)


class TestProgramName:
    """Test the header name field."""

    def test_name_padded(self, optab):
        result, _ = assemble_passes("AB START 0\n- END AB\n", optab)
        assert result.program.header.render().startswith("H^AB    ^")

    def test_name_exactly_six(self, optab):
        result, errors = assemble_passes("SIXSIX START 0\n- END SIXSIX\n", optab)
        assert result.program.header.name == "SIXSIX"
        assert not errors.has_errors()

    def test_name_too_long(self, optab):
        _, errors = assemble_passes("LONGNAME START 0\n- END LONGNAME\n", optab)
        assert isinstance(errors.errors[0], NameTooLongError)

    def test_name_truncated(self, optab):
        config = AssemblerConfig(truncate_program_name=True)
        result, errors = assemble_passes("LONGNAME START 0\n- END LONGNAME\n", optab, config)
        assert result.program.header.name == "LONGNA"
        assert not errors.has_errors()

    def test_start_without_label(self, optab):
        result, _ = assemble_passes("- START 0\n- END\n", optab)
        assert result.program.header.render() == "H^      ^000000^000000"


class TestListing:
    """Test the listing lines."""

    def test_listing_lines(self, copy_source, optab):
        result, _ = assemble_passes(copy_source, optab)
        assert [(l.address, l.object_code) for l in result.listing] == [
            (None, ""),
            (0x1000, "001003"),
            (0x1003, "000005"),
            (0x1006, ""),
        ]
