"""Generators for memory accesses, system calls and variable/array access."""

from __future__ import annotations

from ..program import (
    REG_0,
    REG_INVALID,
    InstrArg,
    Instruction,
    Label,
    Opcode,
    Program,
    Symbol,
)
from .arith import gen_add, gen_muli, validate_register_id

# Size in addressable units of an array element (a 32-bit word on a
# byte-addressed target).
_ELEMENT_SIZE = 4


def _emit(
    program: Program | None,
    opcode: Opcode,
    rd: int = REG_INVALID,
    rs1: int = REG_INVALID,
    rs2: int = REG_INVALID,
    label: Label | None = None,
    immediate: int = 0,
) -> Instruction:
    if program is not None:
        return program.gen_instruction(opcode, rd, rs1, rs2, label, immediate)
    return Instruction(
        opcode,
        rd=InstrArg(rd) if rd != REG_INVALID else None,
        rs1=InstrArg(rs1) if rs1 != REG_INVALID else None,
        rs2=InstrArg(rs2) if rs2 != REG_INVALID else None,
        immediate=immediate,
        address_param=label,
    )


def gen_li(program, rd, immediate):
    """rd = immediate."""
    validate_register_id(program, rd)
    return _emit(program, Opcode.LI, rd=rd, immediate=immediate)


def gen_la(program, rd, label):
    """rd = address of label."""
    validate_register_id(program, rd)
    return _emit(program, Opcode.LA, rd=rd, label=label)


def gen_lw(program, rd, immediate, rs1):
    """rd = word at address rs1 + immediate."""
    validate_register_id(program, rd)
    validate_register_id(program, rs1)
    return _emit(program, Opcode.LW, rd=rd, rs1=rs1, immediate=immediate)


def gen_sw(program, rs2, immediate, rs1):
    """Store rs2 to the word at address rs1 + immediate."""
    validate_register_id(program, rs2)
    validate_register_id(program, rs1)
    return _emit(program, Opcode.SW, rs1=rs1, rs2=rs2, immediate=immediate)


def gen_lw_global(program, rd, label):
    """rd = word at the address of label."""
    validate_register_id(program, rd)
    return _emit(program, Opcode.LW_G, rd=rd, label=label)


def gen_sw_global(program, rs1, label, r_temp):
    """Store rs1 to the word at label, clobbering r_temp."""
    validate_register_id(program, rs1)
    return _emit(program, Opcode.SW_G, rd=r_temp, rs1=rs1, label=label)


def gen_nop(program):
    """Do nothing."""
    return _emit(program, Opcode.NOP)


def gen_ecall(program):
    """Transfer control to the supervisor."""
    return _emit(program, Opcode.ECALL)


def gen_ebreak(program):
    """Stop for debugging."""
    return _emit(program, Opcode.EBREAK)


def gen_exit0_syscall(program):
    """Terminate the program with exit code zero."""
    return _emit(program, Opcode.CALL_EXIT_0)


def gen_read_int_syscall(program, rd):
    """Read an integer from standard input into rd."""
    validate_register_id(program, rd)
    return _emit(program, Opcode.CALL_READ_INT, rd=rd)


def gen_print_int_syscall(program, rs1):
    """Print the integer in rs1."""
    validate_register_id(program, rs1)
    return _emit(program, Opcode.CALL_PRINT_INT, rs1=rs1)


def gen_print_char_syscall(program, rs1):
    """Print the character whose code is in rs1."""
    validate_register_id(program, rs1)
    return _emit(program, Opcode.CALL_PRINT_CHAR, rs1=rs1)


def gen_load_variable(program: Program, var: Symbol) -> int:
    """Load a scalar variable; returns the register holding its value."""
    if var.is_array():
        program.errors.emit(program.location, f"'{var.name}' is an array")
        return REG_0
    r_addr = program.new_register()
    gen_la(program, r_addr, var.label)
    r_res = program.new_register()
    gen_lw(program, r_res, 0, r_addr)
    return r_res


def gen_store_register_to_variable(program: Program, var: Symbol, reg: int) -> None:
    """Store the value of reg into a scalar variable."""
    if var.is_array():
        program.errors.emit(program.location, f"'{var.name}' is an array")
        return
    r_addr = program.new_register()
    gen_la(program, r_addr, var.label)
    gen_sw(program, reg, 0, r_addr)


def gen_store_constant_to_variable(program: Program, var: Symbol, val: int) -> None:
    """Store a constant into a scalar variable."""
    r_val = program.new_register()
    gen_li(program, r_val, val)
    gen_store_register_to_variable(program, var, r_val)


def gen_load_array_address(program: Program, array: Symbol, r_idx: int) -> int:
    """Compute the address of array[r_idx]; returns the register holding it."""
    if not array.is_array():
        program.errors.emit(program.location, f"'{array.name}' is a scalar")
        return REG_0
    r_addr = program.new_register()
    gen_la(program, r_addr, array.label)
    if _ELEMENT_SIZE != 1:
        r_offset = program.new_register()
        gen_muli(program, r_offset, r_idx, _ELEMENT_SIZE)
    else:
        r_offset = r_idx
    gen_add(program, r_addr, r_addr, r_offset)
    return r_addr


def gen_load_array_element(program: Program, array: Symbol, r_idx: int) -> int:
    """Load array[r_idx]; returns the register holding its value."""
    r_addr = gen_load_array_address(program, array, r_idx)
    r_val = program.new_register()
    gen_lw(program, r_val, 0, r_addr)
    return r_val


def gen_store_register_to_array_element(
    program: Program, array: Symbol, r_idx: int, r_val: int
) -> None:
    """Store the value of r_val into array[r_idx]."""
    r_addr = gen_load_array_address(program, array, r_idx)
    gen_sw(program, r_val, 0, r_addr)


def gen_store_constant_to_array_element(
    program: Program, array: Symbol, r_idx: int, val: int
) -> None:
    """Store a constant into array[r_idx]."""
    r_val = program.new_register()
    gen_li(program, r_val, val)
    gen_store_register_to_array_element(program, array, r_idx, r_val)