# acse

Building blocks of a small compiler that targets a RISC-V style machine. The
package gives you an intermediate program representation and helpers that
append instructions to it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Overview

- `acse.errors`
  - `FileLocation` is a file name and a zero-based row. `is_known()` is true
    when both are set.
  - `format_message` builds a diagnostic line. It has the form
    `file:line: category: message`, or `category: message` when the location
    is unknown.
  - `ErrorLog` is for non-fatal errors. `emit(location, message)` writes an
    `error:` line to the stream it was given, or to standard error, and
    `count()` returns how many were emitted.
  - `fatal_error` raises `FatalError`. It is used for internal inconsistencies.
- `acse.program`
  - `Opcode` enumerates the operations of the intermediate assembly. It has
    `is_jump()`, `is_unconditional_jump()` and `is_exit()`.
  - `SymbolType`, `Label`, `InstrArg`, `Instruction` and `Symbol` are the
    pieces of the representation. `str()` of an instruction gives its assembly
    text, and `register_name` gives the printable name of a register (`zero`,
    `t1`, ...).
  - `Program` is the program being built:
    - labels: `create_label`, `set_label_name` (which makes names unique) and
      `assign_label` (which turns a second label on the same instruction into
      an alias);
    - temporary registers: `new_register`;
    - instructions: `add_instruction`, `gen_instruction` and
      `remove_instruction_at` (which moves the label and the comment onto the
      next instruction);
    - the symbol table: `create_symbol` and `get_symbol`;
    - `gen_epilog`, which makes sure the code ends with an exit call;
    - `dump`, which writes a readable listing.
  - A new program starts with a global `_start` label pending on its first
    instruction.
- `acse.codegen.arith` holds one function per arithmetic, logic and shift
  instruction: `gen_add` … `gen_sra`, and `gen_addi` … `gen_srai`. It also has
  `validate_register_id`, which raises `FatalError` for a register the program
  never handed out.
- `acse.codegen.memory`
  - `gen_li`, `gen_la`, `gen_lw`, `gen_sw`, `gen_lw_global`, `gen_sw_global`,
    `gen_nop`, `gen_ecall` and `gen_ebreak` generate single instructions.
  - `gen_exit0_syscall`, `gen_read_int_syscall`, `gen_print_int_syscall` and
    `gen_print_char_syscall` generate system calls.
  - `gen_load_variable`, `gen_store_register_to_variable`,
    `gen_store_constant_to_variable`, `gen_load_array_address`,
    `gen_load_array_element`, `gen_store_register_to_array_element` and
    `gen_store_constant_to_array_element` generate variable and array access.
    Array elements are 4 units wide.
  - Using an array as a scalar, or the other way round, reports an error
    through the program's `ErrorLog` and yields register `zero`.

## Example

```python
import io

from acse.errors import ErrorLog
from acse.program import Program, SymbolType
from acse.codegen.arith import gen_addi
from acse.codegen.memory import gen_load_variable, gen_store_register_to_variable

program = Program(ErrorLog(io.StringIO()))
x = program.create_symbol("x", SymbolType.INT, 0)

value = gen_load_variable(program, x)
result = program.new_register()
gen_addi(program, result, value, 1)
gen_store_register_to_variable(program, x, result)
program.gen_epilog()

listing = io.StringIO()
program.dump(listing)
print(listing.getvalue())
```

This prints:

```
# Program dump

## Variables

"x":
  type = int
  label = l_x (ID=1)

## Instructions

_start: la t1, l_x
lw t2, 0(t1)
addi t3, t2, 1
la t4, l_x
sw t3, 0(t4)
exit0
```

## What the package does not do

- **No parser and no command.** There is no source-language parser and no
  command-line compiler. Programs are built by calling the functions above.
- **No comparison or branch helpers.** There are no dedicated helpers for
  comparisons (`SEQ`, `SLTI`, ...) or for jumps and branches (`J`, `BEQ`, ...).
  Those opcodes exist in `Opcode` and can be emitted with
  `Program.gen_instruction`.
- **No back end.** The package has no control flow graph, no liveness
  analysis, no register allocation, no lowering to machine instructions and
  no writing of an assembly file. `Program.dump` is the only output.