"""Generators for arithmetic, logic and shift instructions."""

from __future__ import annotations

from ..errors import fatal_error
from ..program import REG_INVALID, InstrArg, Instruction, Opcode, Program


def validate_register_id(program: Program | None, reg: int) -> None:
    """Raise FatalError unless reg was handed out by the program."""
    if program is None:
        return
    if 0 <= reg < program.first_unused_reg:
        return
    fatal_error(f"bug: invalid register identifier {reg}")


def _emit(
    program: Program | None,
    opcode: Opcode,
    rd: int = REG_INVALID,
    rs1: int = REG_INVALID,
    rs2: int = REG_INVALID,
    immediate: int = 0,
) -> Instruction:
    if program is not None:
        return program.gen_instruction(opcode, rd, rs1, rs2, None, immediate)
    return Instruction(
        opcode,
        rd=InstrArg(rd) if rd != REG_INVALID else None,
        rs1=InstrArg(rs1) if rs1 != REG_INVALID else None,
        rs2=InstrArg(rs2) if rs2 != REG_INVALID else None,
        immediate=immediate,
    )


def _r_format(
    program: Program | None, opcode: Opcode, rd: int, rs1: int, rs2: int
) -> Instruction:
    for reg in (rd, rs1, rs2):
        validate_register_id(program, reg)
    return _emit(program, opcode, rd, rs1, rs2)


def _i_format(
    program: Program | None, opcode: Opcode, rd: int, rs1: int, immediate: int
) -> Instruction:
    for reg in (rd, rs1):
        validate_register_id(program, reg)
    return _emit(program, opcode, rd, rs1, REG_INVALID, immediate)


def gen_add(program, rd, rs1, rs2):
    """rd = rs1 + rs2."""
    return _r_format(program, Opcode.ADD, rd, rs1, rs2)


def gen_sub(program, rd, rs1, rs2):
    """rd = rs1 - rs2."""
    return _r_format(program, Opcode.SUB, rd, rs1, rs2)


def gen_and(program, rd, rs1, rs2):
    """rd = rs1 & rs2."""
    return _r_format(program, Opcode.AND, rd, rs1, rs2)


def gen_or(program, rd, rs1, rs2):
    """rd = rs1 | rs2."""
    return _r_format(program, Opcode.OR, rd, rs1, rs2)


def gen_xor(program, rd, rs1, rs2):
    """rd = rs1 ^ rs2."""
    return _r_format(program, Opcode.XOR, rd, rs1, rs2)


def gen_mul(program, rd, rs1, rs2):
    """rd = rs1 * rs2."""
    return _r_format(program, Opcode.MUL, rd, rs1, rs2)


def gen_div(program, rd, rs1, rs2):
    """rd = rs1 / rs2 (signed)."""
    return _r_format(program, Opcode.DIV, rd, rs1, rs2)


def gen_rem(program, rd, rs1, rs2):
    """rd = rs1 % rs2 (signed)."""
    return _r_format(program, Opcode.REM, rd, rs1, rs2)


def gen_sll(program, rd, rs1, rs2):
    """rd = rs1 << (rs2 mod 32)."""
    return _r_format(program, Opcode.SLL, rd, rs1, rs2)


def gen_srl(program, rd, rs1, rs2):
    """rd = rs1 >> (rs2 mod 32), logical."""
    return _r_format(program, Opcode.SRL, rd, rs1, rs2)


def gen_sra(program, rd, rs1, rs2):
    """rd = rs1 >> (rs2 mod 32), arithmetic."""
    return _r_format(program, Opcode.SRA, rd, rs1, rs2)


def gen_addi(program, rd, rs1, immediate):
    """rd = rs1 + immediate."""
    return _i_format(program, Opcode.ADDI, rd, rs1, immediate)


def gen_subi(program, rd, rs1, immediate):
    """rd = rs1 - immediate."""
    return _i_format(program, Opcode.SUBI, rd, rs1, immediate)


def gen_andi(program, rd, rs1, immediate):
    """rd = rs1 & immediate."""
    return _i_format(program, Opcode.ANDI, rd, rs1, immediate)


def gen_muli(program, rd, rs1, immediate):
    """rd = rs1 * immediate."""
    return _i_format(program, Opcode.MULI, rd, rs1, immediate)


def gen_ori(program, rd, rs1, immediate):
    """rd = rs1 | immediate."""
    return _i_format(program, Opcode.ORI, rd, rs1, immediate)


def gen_xori(program, rd, rs1, immediate):
    """rd = rs1 ^ immediate."""
    return _i_format(program, Opcode.XORI, rd, rs1, immediate)


def gen_divi(program, rd, rs1, immediate):
    """rd = rs1 / immediate (signed)."""
    return _i_format(program, Opcode.DIVI, rd, rs1, immediate)


def gen_remi(program, rd, rs1, immediate):
    """rd = rs1 % immediate (signed)."""
    return _i_format(program, Opcode.REMI, rd, rs1, immediate)


def gen_slli(program, rd, rs1, immediate):
    """rd = rs1 << (immediate mod 32)."""
    return _i_format(program, Opcode.SLLI, rd, rs1, immediate)


def gen_srli(program, rd, rs1, immediate):
    """rd = rs1 >> (immediate mod 32), logical."""
    return _i_format(program, Opcode.SRLI, rd, rs1, immediate)


def gen_srai(program, rd, rs1, immediate):
    """rd = rs1 >> (immediate mod 32), arithmetic."""
    return _i_format(program, Opcode.SRAI, rd, rs1, immediate)