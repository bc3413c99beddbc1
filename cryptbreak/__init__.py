"""Worked attacks on weak and misused ciphers."""

__version__ = "0.1.0"

__all__ = [
    "aesmodes",
    "dlog",
    "hexdump",
    "manytimepad",
    "paddingoracle",
    "rsafactor",
    "spacepad",
    "timing",
    "vigenere",
]