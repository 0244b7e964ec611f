"""Helpers that append arithmetic, logic, memory, system-call and variable-access instructions to a program."""