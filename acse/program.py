"""Intermediate representation of a program being compiled."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TextIO

from .errors import NULL_LOCATION, ErrorLog, FileLocation, fatal_error

REG_INVALID = -1
REG_0 = 0


class Opcode(enum.Enum):
    """Operations of the intermediate assembly."""

    ADD = enum.auto()
    SUB = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    XOR = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    REM = enum.auto()
    SLL = enum.auto()
    SRL = enum.auto()
    SRA = enum.auto()
    ADDI = enum.auto()
    SUBI = enum.auto()
    ANDI = enum.auto()
    MULI = enum.auto()
    ORI = enum.auto()
    XORI = enum.auto()
    DIVI = enum.auto()
    REMI = enum.auto()
    SLLI = enum.auto()
    SRLI = enum.auto()
    SRAI = enum.auto()
    SEQ = enum.auto()
    SNE = enum.auto()
    SLT = enum.auto()
    SLTU = enum.auto()
    SGE = enum.auto()
    SGEU = enum.auto()
    SGT = enum.auto()
    SGTU = enum.auto()
    SLE = enum.auto()
    SLEU = enum.auto()
    SEQI = enum.auto()
    SNEI = enum.auto()
    SLTI = enum.auto()
    SLTIU = enum.auto()
    SGEI = enum.auto()
    SGEIU = enum.auto()
    SGTI = enum.auto()
    SGTIU = enum.auto()
    SLEI = enum.auto()
    SLEIU = enum.auto()
    J = enum.auto()
    BEQ = enum.auto()
    BNE = enum.auto()
    BLT = enum.auto()
    BLTU = enum.auto()
    BGE = enum.auto()
    BGEU = enum.auto()
    BGT = enum.auto()
    BGTU = enum.auto()
    BLE = enum.auto()
    BLEU = enum.auto()
    LI = enum.auto()
    LA = enum.auto()
    LW = enum.auto()
    SW = enum.auto()
    LW_G = enum.auto()
    SW_G = enum.auto()
    NOP = enum.auto()
    ECALL = enum.auto()
    EBREAK = enum.auto()
    CALL_EXIT_0 = enum.auto()
    CALL_READ_INT = enum.auto()
    CALL_PRINT_INT = enum.auto()
    CALL_PRINT_CHAR = enum.auto()

    @property
    def mnemonic(self) -> str:
        return _MNEMONICS.get(self, self.name.lower())

    def is_jump(self) -> bool:
        """True for jumps and conditional branches."""
        return self in _JUMPS

    def is_unconditional_jump(self) -> bool:
        """True for jumps that are always taken."""
        return self is Opcode.J

    def is_exit(self) -> bool:
        """True for instructions that end the program."""
        return self is Opcode.CALL_EXIT_0


_MNEMONICS = {
    Opcode.LW_G: "lw",
    Opcode.SW_G: "sw",
    Opcode.CALL_EXIT_0: "exit0",
    Opcode.CALL_READ_INT: "readint",
    Opcode.CALL_PRINT_INT: "printint",
    Opcode.CALL_PRINT_CHAR: "printchar",
}

_JUMPS = frozenset(
    {
        Opcode.J,
        Opcode.BEQ,
        Opcode.BNE,
        Opcode.BLT,
        Opcode.BLTU,
        Opcode.BGE,
        Opcode.BGEU,
        Opcode.BGT,
        Opcode.BGTU,
        Opcode.BLE,
        Opcode.BLEU,
    }
)

_IMMEDIATE_OPCODES = frozenset(
    {
        Opcode.ADDI,
        Opcode.SUBI,
        Opcode.ANDI,
        Opcode.MULI,
        Opcode.ORI,
        Opcode.XORI,
        Opcode.DIVI,
        Opcode.REMI,
        Opcode.SLLI,
        Opcode.SRLI,
        Opcode.SRAI,
        Opcode.SEQI,
        Opcode.SNEI,
        Opcode.SLTI,
        Opcode.SLTIU,
        Opcode.SGEI,
        Opcode.SGEIU,
        Opcode.SGTI,
        Opcode.SGTIU,
        Opcode.SLEI,
        Opcode.SLEIU,
        Opcode.LI,
    }
)


def register_name(reg_id: int) -> str:
    """Printable name of a temporary register."""
    if reg_id < 0:
        raise ValueError(f"invalid register identifier {reg_id}")
    if reg_id == REG_0:
        return "zero"
    return f"t{reg_id}"


class SymbolType(enum.Enum):
    """Data types of source variables."""

    INT = enum.auto()
    INT_ARRAY = enum.auto()


@dataclass(eq=False)
class Label:
    """A label; aliases share the same label_id."""

    label_id: int
    name: str | None = None
    is_global: bool = False
    is_alias: bool = False

    def __str__(self) -> str:
        if self.name is not None:
            return self.name
        return f"l_{self.label_id}"


@dataclass
class InstrArg:
    """A register operand, optionally restricted to some machine registers."""

    reg_id: int
    mc_reg_whitelist: list[int] | None = None


def _arg_text(arg: InstrArg | None) -> str:
    return "<!UNDEF!>" if arg is None else register_name(arg.reg_id)


@dataclass(eq=False)
class Instruction:
    """A symbolic assembly instruction."""

    opcode: Opcode
    rd: InstrArg | None = None
    rs1: InstrArg | None = None
    rs2: InstrArg | None = None
    immediate: int = 0
    label: Label | None = None
    address_param: Label | None = None
    comment: str | None = None

    def _body(self) -> str:
        op = self.opcode
        mnemonic = op.mnemonic
        if op is Opcode.LW:
            return f"{mnemonic} {_arg_text(self.rd)}, {self.immediate}({_arg_text(self.rs1)})"
        if op is Opcode.SW:
            return f"{mnemonic} {_arg_text(self.rs2)}, {self.immediate}({_arg_text(self.rs1)})"
        if op is Opcode.SW_G:
            return f"{mnemonic} {_arg_text(self.rs1)}, {self.address_param}, {_arg_text(self.rd)}"
        operands = [register_name(a.reg_id) for a in (self.rd, self.rs1, self.rs2) if a is not None]
        if self.address_param is not None:
            operands.append(str(self.address_param))
        if op in _IMMEDIATE_OPCODES:
            operands.append(str(self.immediate))
        return f"{mnemonic} {', '.join(operands)}" if operands else mnemonic

    def __str__(self) -> str:
        body = self._body()
        if self.label is not None:
            return f"{self.label}: {body}"
        return body


@dataclass(eq=False)
class Symbol:
    """A variable declared in the source program."""

    name: str
    type: SymbolType
    array_size: int = 0
    label: Label | None = None

    def is_array(self) -> bool:
        return self.type is SymbolType.INT_ARRAY


def _sanitize(name: str) -> str:
    return "".join(c for c in name if c == "_" or (c.isascii() and c.isalnum()))


class Program:
    """The program being built: labels, instructions and symbols."""

    def __init__(self, errors: ErrorLog | None = None) -> None:
        self.errors = errors if errors is not None else ErrorLog()
        self.labels: list[Label] = []
        self.instructions: list[Instruction] = []
        self.symbols: list[Symbol] = []
        self.first_unused_reg = 1  # register 0 is reserved
        self.first_unused_label_id = 0
        self.pending_label: Label | None = None
        self.location: FileLocation = NULL_LOCATION
        self._last_location: FileLocation = NULL_LOCATION

        start = self.create_label()
        start.is_global = True
        self.set_label_name(start, "_start")
        self.assign_label(start)

    def create_label(self) -> Label:
        """Reserve a new label not yet bound to any instruction."""
        label = Label(self.first_unused_label_id)
        self.first_unused_label_id += 1
        self.labels.append(label)
        return label

    def _set_raw_label_name(self, label: Label, name: str | None) -> None:
        for other in self.labels:
            if other.label_id == label.label_id:
                other.name = name

    def set_label_name(self, label: Label, name: str) -> None:
        """Name a label, making the name unique among the other labels."""
        base = _sanitize(name)
        taken = {str(other) for other in self.labels if other.label_id != label.label_id}
        final = base
        serial = 0
        while final in taken:
            final = f"{base}_{serial}"
            serial += 1
        self._set_raw_label_name(label, final)

    def assign_label(self, label: Label) -> None:
        """Bind the label to the next instruction generated."""
        if any(
            instr.label is not None and instr.label.label_id == label.label_id
            for instr in self.instructions
        ):
            fatal_error("bug: label already assigned")

        pending = self.pending_label
        if pending is None:
            self.pending_label = label
            return

        name = pending.name
        if name is None or (label.label_id and label.label_id < pending.label_id):
            name = label.name
        label.label_id = pending.label_id
        self._set_raw_label_name(label, name)

        if label.is_global:
            pending.is_global = True
        elif pending.is_global:
            label.is_global = True
        label.is_alias = True

    def new_register(self) -> int:
        """Return a fresh temporary register identifier."""
        reg = self.first_unused_reg
        self.first_unused_reg += 1
        return reg

    def add_instruction(self, instr: Instruction) -> None:
        """Append an instruction, binding the pending label to it."""
        instr.label = self.pending_label
        self.pending_label = None
        loc = self.location
        if loc.row >= 0 and loc != self._last_location:
            instr.comment = f"{loc.file}:{loc.row + 1}"
        self._last_location = loc
        self.instructions.append(instr)

    def gen_instruction(
        self,
        opcode: Opcode,
        rd: int = REG_INVALID,
        rs1: int = REG_INVALID,
        rs2: int = REG_INVALID,
        label: Label | None = None,
        immediate: int = 0,
    ) -> Instruction:
        """Build an instruction from raw operands and append it."""
        instr = Instruction(
            opcode,
            rd=InstrArg(rd) if rd != REG_INVALID else None,
            rs1=InstrArg(rs1) if rs1 != REG_INVALID else None,
            rs2=InstrArg(rs2) if rs2 != REG_INVALID else None,
            immediate=immediate,
            address_param=label,
        )
        self.add_instruction(instr)
        return instr

    def remove_instruction_at(self, index: int) -> None:
        """Remove an instruction, moving its label and comment forward."""
        index = range(len(self.instructions))[index]
        removed = self.instructions[index]
        if removed.label is not None or removed.comment is not None:
            following = (
                self.instructions[index + 1] if index + 1 < len(self.instructions) else None
            )
            if removed.label is not None:
                if following is None or following.label is not None:
                    following = Instruction(Opcode.NOP)
                    self.instructions.insert(index + 1, following)
                following.label = removed.label
                removed.label = None
            if following is not None and removed.comment is not None and following.comment is None:
                following.comment = removed.comment
                removed.comment = None
        del self.instructions[index]

    def create_symbol(
        self, name: str, symbol_type: SymbolType, array_size: int = 0
    ) -> Symbol | None:
        """Declare a variable; returns None after reporting an error."""
        if not isinstance(symbol_type, SymbolType):
            fatal_error("bug: invalid type")
        if symbol_type is SymbolType.INT_ARRAY and array_size <= 0:
            self.errors.emit(self.location, f"invalid size {array_size} for array {name}")
            return None
        if self.get_symbol(name) is not None:
            self.errors.emit(self.location, f"variable '{name}' already declared")
            return None
        symbol = Symbol(name, symbol_type, array_size)
        symbol.label = self.create_label()
        self.set_label_name(symbol.label, f"l_{name}")
        self.symbols.append(symbol)
        return symbol

    def get_symbol(self, name: str) -> Symbol | None:
        """Look up a declared variable by name."""
        return next((s for s in self.symbols if s.name == name), None)

    def gen_epilog(self) -> None:
        """Make sure the program ends with an exit call."""
        if self.pending_label is None and self.instructions:
            if self.instructions[-1].opcode is Opcode.CALL_EXIT_0:
                return
        self.gen_instruction(Opcode.CALL_EXIT_0)

    def dump(self, out: TextIO) -> None:
        """Write a readable description of the program."""
        out.write("# Program dump\n\n")
        out.write("## Variables\n\n")
        for var in self.symbols:
            out.write(f'"{var.name}":\n')
            if var.type is SymbolType.INT:
                out.write("  type = int\n")
            elif var.type is SymbolType.INT_ARRAY:
                out.write(f"  type = int[{var.array_size}]\n")
            else:
                out.write("  type = invalid\n")
            out.write(f"  label = {var.label} (ID={var.label.label_id})\n")
        out.write("\n## Instructions\n\n")
        for instr in self.instructions:
            out.write(f"{instr}\n")
        out.flush()