import io

import pytest

from acse.errors import ErrorLog, FatalError, FileLocation
from acse.program import (
    REG_INVALID,
    Label,
    Opcode,
    Program,
    SymbolType,
    register_name,
)


@pytest.fixture
def program():
    return Program(ErrorLog(io.StringIO()))


def test_new_program_has_pending_start_label(program):
    start = program.pending_label
    assert str(start) == "_start"
    assert start.is_global
    assert program.first_unused_reg == 1


def test_first_instruction_gets_start_label(program):
    instr = program.gen_instruction(Opcode.NOP)
    assert str(instr.label) == "_start"
    assert program.pending_label is None
    assert program.instructions == [instr]


def test_new_register_increments(program):
    a = program.new_register()
    b = program.new_register()
    assert a >= 1
    assert b == a + 1


def test_unnamed_label_name(program):
    label = program.create_label()
    assert str(label) == f"l_{label.label_id}"


def test_label_ids_are_distinct(program):
    a = program.create_label()
    b = program.create_label()
    assert a.label_id != b.label_id


def test_duplicate_label_names_get_serial(program):
    a = program.create_label()
    b = program.create_label()
    program.set_label_name(a, "foo")
    program.set_label_name(b, "foo")
    assert str(a) == "foo"
    assert str(b) == "foo_0"


def test_label_name_is_sanitized(program):
    label = program.create_label()
    program.set_label_name(label, "a_b-c d!")
    name = str(label)
    assert all(c == "_" or c.isalnum() for c in name)
    assert name.startswith("a_b")


def test_assign_two_labels_makes_alias(program):
    program.gen_instruction(Opcode.NOP)
    a = program.create_label()
    b = program.create_label()
    program.set_label_name(b, "target")
    program.assign_label(a)
    program.assign_label(b)
    assert b.is_alias
    assert a.label_id == b.label_id
    assert str(a) == str(b) == "target"
    instr = program.gen_instruction(Opcode.NOP)
    assert instr.label is a


def test_assign_already_assigned_label_is_fatal(program):
    instr = program.gen_instruction(Opcode.NOP)
    with pytest.raises(FatalError):
        program.assign_label(instr.label)


def test_gen_instruction_operands(program):
    label = program.create_label()
    instr = program.gen_instruction(Opcode.BEQ, REG_INVALID, 1, 2, label, 0)
    assert instr.rd is None
    assert (instr.rs1.reg_id, instr.rs2.reg_id) == (1, 2)
    assert instr.address_param is label


def test_comment_records_location_once(program):
    program.location = FileLocation("prog.src", 4)
    first = program.gen_instruction(Opcode.NOP)
    second = program.gen_instruction(Opcode.NOP)
    assert first.comment == "prog.src:5"
    assert second.comment is None


def test_remove_instruction_moves_label(program):
    first = program.gen_instruction(Opcode.NOP)
    second = program.gen_instruction(Opcode.ADD, 1, 2, 3)
    label = first.label
    program.remove_instruction_at(0)
    assert program.instructions == [second]
    assert second.label is label


def test_remove_last_labeled_instruction_inserts_nop(program):
    program.gen_instruction(Opcode.ADD, 1, 2, 3)
    program.remove_instruction_at(0)
    assert len(program.instructions) == 1
    assert program.instructions[0].opcode is Opcode.NOP
    assert str(program.instructions[0].label) == "_start"


def test_remove_out_of_range(program):
    with pytest.raises(IndexError):
        program.remove_instruction_at(0)


def test_create_and_get_symbol(program):
    sym = program.create_symbol("x", SymbolType.INT, 0)
    assert program.get_symbol("x") is sym
    assert str(sym.label) == "l_x"
    assert not sym.is_array()
    assert program.get_symbol("y") is None


def test_duplicate_symbol_is_error(program):
    program.create_symbol("x", SymbolType.INT, 0)
    assert program.create_symbol("x", SymbolType.INT, 0) is None
    assert program.errors.count() == 1


def test_array_with_bad_size_is_error(program):
    assert program.create_symbol("arr", SymbolType.INT_ARRAY, 0) is None
    assert program.errors.count() == 1
    arr = program.create_symbol("arr", SymbolType.INT_ARRAY, 10)
    assert arr.is_array()
    assert arr.array_size == 10


def test_invalid_symbol_type_is_fatal(program):
    with pytest.raises(FatalError):
        program.create_symbol("x", "int", 0)


def test_gen_epilog_is_idempotent(program):
    program.gen_instruction(Opcode.NOP)
    program.gen_epilog()
    program.gen_epilog()
    assert [i.opcode for i in program.instructions] == [Opcode.NOP, Opcode.CALL_EXIT_0]


def test_gen_epilog_with_pending_label(program):
    program.gen_epilog()
    assert len(program.instructions) == 1
    assert program.instructions[0].opcode.is_exit()
    assert str(program.instructions[0].label) == "_start"


def test_opcode_classification():
    assert Opcode.J.is_jump() and Opcode.J.is_unconditional_jump()
    assert Opcode.BNE.is_jump() and not Opcode.BNE.is_unconditional_jump()
    assert not Opcode.ADD.is_jump()
    assert Opcode.CALL_EXIT_0.is_exit() and not Opcode.NOP.is_exit()


def test_register_name_rejects_invalid():
    assert str(7) in register_name(7)
    with pytest.raises(ValueError):
        register_name(REG_INVALID)


def test_instruction_str_mentions_operands(program):
    instr = program.gen_instruction(Opcode.ADDI, 1, 2, REG_INVALID, None, 42)
    text = str(instr)
    assert register_name(1) in text and register_name(2) in text
    assert text.endswith("42")
    assert text.startswith("_start:")


def test_label_str_prefers_name():
    assert str(Label(3, "loop")) == "loop"


def test_dump(program):
    program.create_symbol("v", SymbolType.INT_ARRAY, 4)
    program.gen_instruction(Opcode.NOP)
    out = io.StringIO()
    program.dump(out)
    text = out.getvalue()
    assert text.startswith("# Program dump\n\n## Variables\n\n")
    assert '"v":\n  type = int[4]\n' in text
    assert "\n## Instructions\n\n" in text
    assert text.rstrip("\n").endswith(str(program.instructions[0]))