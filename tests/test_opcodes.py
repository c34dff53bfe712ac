"""
Unit Tests for the 6502 Opcode Table
====================================

Test coverage includes:
- Totality of classify() over all 256 byte values
- Mnemonic / addressing mode pairing against the MCS6500 reference map
- Base cycle counts and cycle-counting exception flags for every opcode
- Operand sizes derived from addressing modes
- Invalid (undocumented) opcodes
"""

import dataclasses

import pytest

from dcc6502.cpu import (
    AddressingMode,
    CycleException,
    OPCODE_TABLE,
    ILLEGAL_MNEMONIC,
    MNEMONICS,
    BRANCH_INSTRUCTIONS,
    classify,
    get_opcodes,
    is_valid_opcode,
)


IMM = AddressingMode.IMMEDIATE
ZP = AddressingMode.ZERO_PAGE
ZPX = AddressingMode.ZERO_PAGE_X
ZPY = AddressingMode.ZERO_PAGE_Y
ABS = AddressingMode.ABSOLUTE
ABX = AddressingMode.ABSOLUTE_X
ABY = AddressingMode.ABSOLUTE_Y
IND = AddressingMode.INDIRECT_ABSOLUTE
IZX = AddressingMode.INDEXED_INDIRECT_X
IZY = AddressingMode.INDIRECT_INDEXED_Y
REL = AddressingMode.RELATIVE
ACC = AddressingMode.ACCUMULATOR
IMP = AddressingMode.IMPLIED

# Reference encoding: mnemonic -> {addressing mode: opcode}
REFERENCE_ENCODING = {
    "ADC": {IZX: 0x61, ZP: 0x65, IMM: 0x69, ABS: 0x6D, IZY: 0x71, ZPX: 0x75, ABY: 0x79, ABX: 0x7D},
    "AND": {IZX: 0x21, ZP: 0x25, IMM: 0x29, ABS: 0x2D, IZY: 0x31, ZPX: 0x35, ABY: 0x39, ABX: 0x3D},
    "ASL": {ZP: 0x06, ACC: 0x0A, ABS: 0x0E, ZPX: 0x16, ABX: 0x1E},
    "BCC": {REL: 0x90},
    "BCS": {REL: 0xB0},
    "BEQ": {REL: 0xF0},
    "BIT": {ZP: 0x24, ABS: 0x2C},
    "BMI": {REL: 0x30},
    "BNE": {REL: 0xD0},
    "BPL": {REL: 0x10},
    "BRK": {IMP: 0x00},
    "BVC": {REL: 0x50},
    "BVS": {REL: 0x70},
    "CLC": {IMP: 0x18},
    "CLD": {IMP: 0xD8},
    "CLI": {IMP: 0x58},
    "CLV": {IMP: 0xB8},
    "CMP": {IZX: 0xC1, ZP: 0xC5, IMM: 0xC9, ABS: 0xCD, IZY: 0xD1, ZPX: 0xD5, ABY: 0xD9, ABX: 0xDD},
    "CPX": {IMM: 0xE0, ZP: 0xE4, ABS: 0xEC},
    "CPY": {IMM: 0xC0, ZP: 0xC4, ABS: 0xCC},
    "DEC": {ZP: 0xC6, ABS: 0xCE, ZPX: 0xD6, ABX: 0xDE},
    "DEX": {IMP: 0xCA},
    "DEY": {IMP: 0x88},
    "EOR": {IZX: 0x41, ZP: 0x45, IMM: 0x49, ABS: 0x4D, IZY: 0x51, ZPX: 0x55, ABY: 0x59, ABX: 0x5D},
    "INC": {ZP: 0xE6, ABS: 0xEE, ZPX: 0xF6, ABX: 0xFE},
    "INX": {IMP: 0xE8},
    "INY": {IMP: 0xC8},
    "JMP": {ABS: 0x4C, IND: 0x6C},
    "JSR": {ABS: 0x20},
    "LDA": {IZX: 0xA1, ZP: 0xA5, IMM: 0xA9, ABS: 0xAD, IZY: 0xB1, ZPX: 0xB5, ABY: 0xB9, ABX: 0xBD},
    "LDX": {IMM: 0xA2, ZP: 0xA6, ABS: 0xAE, ZPY: 0xB6, ABY: 0xBE},
    "LDY": {IMM: 0xA0, ZP: 0xA4, ABS: 0xAC, ZPX: 0xB4, ABX: 0xBC},
    "LSR": {ZP: 0x46, ACC: 0x4A, ABS: 0x4E, ZPX: 0x56, ABX: 0x5E},
    "NOP": {IMP: 0xEA},
    "ORA": {IZX: 0x01, ZP: 0x05, IMM: 0x09, ABS: 0x0D, IZY: 0x11, ZPX: 0x15, ABY: 0x19, ABX: 0x1D},
    "PHA": {IMP: 0x48},
    "PHP": {IMP: 0x08},
    "PLA": {IMP: 0x68},
    "PLP": {IMP: 0x28},
    "ROL": {ZP: 0x26, ACC: 0x2A, ABS: 0x2E, ZPX: 0x36, ABX: 0x3E},
    "ROR": {ZP: 0x66, ACC: 0x6A, ABS: 0x6E, ZPX: 0x76, ABX: 0x7E},
    "RTI": {IMP: 0x40},
    "RTS": {IMP: 0x60},
    "SBC": {IZX: 0xE1, ZP: 0xE5, IMM: 0xE9, ABS: 0xED, IZY: 0xF1, ZPX: 0xF5, ABY: 0xF9, ABX: 0xFD},
    "SEC": {IMP: 0x38},
    "SED": {IMP: 0xF8},
    "SEI": {IMP: 0x78},
    "STA": {IZX: 0x81, ZP: 0x85, ABS: 0x8D, IZY: 0x91, ZPX: 0x95, ABY: 0x99, ABX: 0x9D},
    "STX": {ZP: 0x86, ABS: 0x8E, ZPY: 0x96},
    "STY": {ZP: 0x84, ABS: 0x8C, ZPX: 0x94},
    "TAX": {IMP: 0xAA},
    "TAY": {IMP: 0xA8},
    "TSX": {IMP: 0xBA},
    "TXA": {IMP: 0x8A},
    "TXS": {IMP: 0x9A},
    "TYA": {IMP: 0x98},
}

NO = CycleException.NONE
PC = CycleException.PAGE_CROSS
BR = CycleException.PAGE_CROSS | CycleException.BRANCH_TAKEN

# Reference timing: opcode -> (base cycles, cycle-counting exceptions)
REFERENCE_CYCLES = {
    0x00: (7, NO), 0x01: (6, NO), 0x05: (3, NO), 0x06: (5, NO), 0x08: (3, NO), 0x09: (2, NO),
    0x0A: (2, NO), 0x0D: (4, NO), 0x0E: (6, NO), 0x10: (2, BR), 0x11: (5, PC), 0x15: (4, NO),
    0x16: (6, NO), 0x18: (2, NO), 0x19: (4, PC), 0x1D: (4, PC), 0x1E: (7, NO), 0x20: (6, NO),
    0x21: (6, NO), 0x24: (3, NO), 0x25: (3, NO), 0x26: (5, NO), 0x28: (4, NO), 0x29: (2, NO),
    0x2A: (2, NO), 0x2C: (4, NO), 0x2D: (4, NO), 0x2E: (6, NO), 0x30: (2, BR), 0x31: (5, PC),
    0x35: (4, NO), 0x36: (6, NO), 0x38: (2, NO), 0x39: (4, PC), 0x3D: (4, PC), 0x3E: (7, NO),
    0x40: (6, NO), 0x41: (6, PC), 0x45: (3, NO), 0x46: (5, NO), 0x48: (3, NO), 0x49: (2, NO),
    0x4A: (2, NO), 0x4C: (3, NO), 0x4D: (4, NO), 0x4E: (6, NO), 0x50: (2, BR), 0x51: (5, PC),
    0x55: (4, NO), 0x56: (6, NO), 0x58: (2, NO), 0x59: (4, PC), 0x5D: (4, PC), 0x5E: (7, NO),
    0x60: (6, NO), 0x61: (6, NO), 0x65: (3, NO), 0x66: (5, NO), 0x68: (4, NO), 0x69: (2, NO),
    0x6A: (2, NO), 0x6C: (5, NO), 0x6D: (4, NO), 0x6E: (6, NO), 0x70: (2, BR), 0x71: (5, PC),
    0x75: (4, NO), 0x76: (6, NO), 0x78: (2, NO), 0x79: (4, PC), 0x7D: (4, PC), 0x7E: (7, NO),
    0x81: (6, NO), 0x84: (3, NO), 0x85: (3, NO), 0x86: (3, NO), 0x88: (2, NO), 0x8A: (2, NO),
    0x8C: (4, NO), 0x8D: (4, NO), 0x8E: (4, NO), 0x90: (2, BR), 0x91: (5, PC), 0x94: (4, NO),
    0x95: (4, NO), 0x96: (4, NO), 0x98: (2, NO), 0x99: (4, PC), 0x9A: (2, NO), 0x9D: (4, PC),
    0xA0: (2, NO), 0xA1: (6, NO), 0xA2: (2, NO), 0xA4: (3, NO), 0xA5: (3, NO), 0xA6: (3, NO),
    0xA8: (2, NO), 0xA9: (2, NO), 0xAA: (2, NO), 0xAC: (4, NO), 0xAD: (4, NO), 0xAE: (4, NO),
    0xB0: (2, BR), 0xB1: (5, PC), 0xB4: (4, NO), 0xB5: (4, NO), 0xB6: (4, NO), 0xB8: (2, NO),
    0xB9: (4, PC), 0xBA: (2, NO), 0xBC: (4, PC), 0xBD: (4, PC), 0xBE: (4, PC), 0xC0: (2, NO),
    0xC1: (6, NO), 0xC4: (3, NO), 0xC5: (3, NO), 0xC6: (5, NO), 0xC8: (2, NO), 0xC9: (2, NO),
    0xCA: (2, NO), 0xCC: (4, NO), 0xCD: (4, NO), 0xCE: (6, NO), 0xD0: (2, BR), 0xD1: (5, PC),
    0xD5: (4, NO), 0xD6: (6, NO), 0xD8: (2, NO), 0xD9: (4, PC), 0xDD: (4, PC), 0xDE: (7, NO),
    0xE0: (2, NO), 0xE1: (6, NO), 0xE4: (3, NO), 0xE5: (3, NO), 0xE6: (5, NO), 0xE8: (2, NO),
    0xE9: (2, NO), 0xEA: (2, NO), 0xEC: (4, NO), 0xED: (4, NO), 0xEE: (6, NO), 0xF0: (2, BR),
    0xF1: (5, PC), 0xF5: (4, NO), 0xF6: (6, NO), 0xF8: (2, NO), 0xF9: (4, PC), 0xFD: (4, PC),
    0xFE: (7, NO),
}


# =============================================================================
# Table Structure Tests
# =============================================================================

class TestOpcodeTable:
    """Tests for the structure of the opcode table."""

    def test_table_is_total(self):
        """Every byte value has an entry, indexed by its own value."""
        assert len(OPCODE_TABLE) == 256
        for byte in range(256):
            entry = classify(byte)
            assert entry.opcode == byte
            assert entry is OPCODE_TABLE[byte]

    def test_table_is_immutable(self):
        """Entries are frozen and the table is a tuple."""
        assert isinstance(OPCODE_TABLE, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            OPCODE_TABLE[0xA9].cycles = 99

    def test_classify_rejects_non_bytes(self):
        """Values outside 0-255 are a programming error."""
        with pytest.raises(ValueError):
            classify(256)
        with pytest.raises(ValueError):
            classify(-1)

    def test_valid_opcode_count(self):
        """The NMOS 6502 documents 151 opcodes and 56 mnemonics."""
        assert sum(1 for entry in OPCODE_TABLE if entry.valid) == 151
        assert len(MNEMONICS) == 56

    def test_matches_reference_encoding(self):
        """Every documented opcode has the reference mnemonic and mode."""
        expected = {}
        for mnemonic, modes in REFERENCE_ENCODING.items():
            for mode, opcode in modes.items():
                expected[opcode] = (mnemonic, mode)

        assert len(expected) == 151
        for byte in range(256):
            entry = classify(byte)
            if byte in expected:
                assert entry.valid, f"${byte:02X} should be valid"
                assert (entry.mnemonic, entry.mode) == expected[byte], f"${byte:02X}"
            else:
                assert not entry.valid, f"${byte:02X} should be invalid"

    def test_get_opcodes(self):
        """Reverse lookup by mnemonic."""
        assert get_opcodes("jmp") == {ABS: 0x4C, IND: 0x6C}
        assert get_opcodes("XYZ") == {}

    def test_branch_instructions(self):
        """Conditional branches are exactly the RELATIVE-mode instructions."""
        assert BRANCH_INSTRUCTIONS == {"BCC", "BCS", "BEQ", "BMI", "BNE", "BPL", "BVC", "BVS"}
        for entry in OPCODE_TABLE:
            if entry.valid:
                assert entry.is_branch == (entry.mode == REL)


# =============================================================================
# Operand Size Tests
# =============================================================================

class TestOperandSizes:
    """Operand width is a function of the addressing mode alone."""

    @pytest.mark.parametrize("mode", [IMP, ACC])
    def test_no_operand(self, mode):
        assert mode.operand_size == 0

    @pytest.mark.parametrize("mode", [IMM, ZP, ZPX, ZPY, IZX, IZY, REL])
    def test_byte_operand(self, mode):
        assert mode.operand_size == 1

    @pytest.mark.parametrize("mode", [ABS, IND, ABX, ABY])
    def test_word_operand(self, mode):
        assert mode.operand_size == 2

    def test_entry_size(self):
        """Entry size is opcode plus operand."""
        assert classify(0xEA).size == 1   # NOP
        assert classify(0xA9).size == 2   # LDA #
        assert classify(0x4C).size == 3   # JMP abs

    def test_mode_str(self):
        assert str(ABX) == "absolute x"


# =============================================================================
# Cycle Data Tests
# =============================================================================

class TestCycleData:
    """Base cycle counts and exception flags."""

    def test_reference_timing(self):
        """Every documented opcode matches the reference cycles and flags."""
        assert len(REFERENCE_CYCLES) == 151
        for opcode, (cycles, exceptions) in REFERENCE_CYCLES.items():
            entry = classify(opcode)
            assert (entry.cycles, entry.exceptions) == (cycles, exceptions), (
                f"${opcode:02X} {entry.mnemonic}"
            )

    def test_reference_covers_valid_opcodes(self):
        valid = {entry.opcode for entry in OPCODE_TABLE if entry.valid}
        assert valid == set(REFERENCE_CYCLES)

    def test_common_cycle_counts(self):
        """Spot-check base cycle counts."""
        assert classify(0x00).cycles == 7   # BRK
        assert classify(0x69).cycles == 2   # ADC #
        assert classify(0x6C).cycles == 5   # JMP (ind)
        assert classify(0x20).cycles == 6   # JSR
        assert classify(0x1E).cycles == 7   # ASL abs,X
        assert classify(0xB1).cycles == 5   # LDA (zp),Y

    def test_no_exceptions(self):
        """Non-indexed instructions have no cycle exceptions."""
        assert classify(0x69).exceptions == CycleException.NONE
        assert classify(0xAD).exceptions == CycleException.NONE

    def test_indexed_page_cross(self):
        """Indexed reads carry only the page-cross exception."""
        for opcode in (0xBD, 0xB9, 0xB1, 0xBC, 0xBE, 0x7D, 0xF1):
            assert classify(opcode).exceptions == CycleException.PAGE_CROSS

    def test_read_modify_write_has_no_penalty(self):
        """ASL/ROL/INC abs,X always take the full count."""
        for opcode in (0x1E, 0x3E, 0xFE, 0xDE):
            assert classify(opcode).exceptions == CycleException.NONE

    def test_branches_have_both_exceptions(self):
        both = CycleException.PAGE_CROSS | CycleException.BRANCH_TAKEN
        for opcode in (0x10, 0x30, 0x50, 0x70, 0x90, 0xB0, 0xD0, 0xF0):
            entry = classify(opcode)
            assert entry.exceptions == both
            assert entry.cycles == 2

    def test_eor_indexed_indirect_flag(self):
        """$41 EOR (zp,X) keeps its published page-cross flag."""
        assert classify(0x41).exceptions == CycleException.PAGE_CROSS
        assert classify(0x01).exceptions == CycleException.NONE


# =============================================================================
# Invalid Opcode Tests
# =============================================================================

class TestInvalidOpcodes:
    """Undocumented opcodes are present but marked invalid."""

    @pytest.mark.parametrize("opcode", [0x02, 0x03, 0x1A, 0x80, 0x9C, 0xFF])
    def test_invalid(self, opcode):
        entry = classify(opcode)
        assert not entry.valid
        assert not is_valid_opcode(opcode)
        assert entry.mnemonic == ILLEGAL_MNEMONIC
        assert entry.operand_size == 0
        assert entry.size == 1
        assert entry.cycles == 0

    def test_valid(self):
        assert is_valid_opcode(0xEA)
