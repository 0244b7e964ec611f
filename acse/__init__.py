"""Intermediate program representation, error reporting and code generation helpers for a small compiler."""

__version__ = "2.0.2"