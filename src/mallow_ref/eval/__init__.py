"""Evaluator helper modules for the Mallow runtime."""

__all__ = [
    "bind",
    "blocks",
    "common",
    "control",
    "expr",
    "fn",
    "helpers",
    "literals",
    "loops",
    "objects",
]
