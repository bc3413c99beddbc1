"""Partial key recovery for a pad reused across messages of differing lengths.

Every ciphertext is XORed against every other one.  A pair whose XOR has
bit 6 set most likely holds a space against a letter.  When the same row
is seen that way twice, its byte is taken to be a space and the key byte
under it follows.  Positions where nothing could be decided stay unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from cryptbreak.manytimepad import SPACE

BytesLike = Union[bytes, bytearray, memoryview, Sequence[int]]

_LETTER_BIT = 0x40
_UNKNOWN_CHAR = "?"


class _Mark(Enum):
    UNSEEN = 0
    SPACE = 1
    CHAR = 2


@dataclass
class _Analysis:
    key: bytes
    marks: list[list[_Mark]]


def _analyse(rows: list[bytes]) -> _Analysis:
    key = bytearray(max((len(row) for row in rows), default=0))
    marks = [[_Mark.UNSEEN] * len(row) for row in rows]
    for i, row in enumerate(rows):
        row_marks = marks[i]
        for j, other in enumerate(rows):
            if i == j:
                continue
            for column, (a, b) in enumerate(zip(row, other)):
                mixed = a ^ b
                letter_bit = bool(mixed & _LETTER_BIT)
                if key[column]:
                    if letter_bit or not mixed:
                        continue
                    row_marks[column] = _Mark.UNSEEN
                mark = row_marks[column]
                if mark is _Mark.UNSEEN and letter_bit:
                    row_marks[column] = _Mark.SPACE
                elif mark is _Mark.SPACE and letter_bit:
                    key[column] = a ^ SPACE
                elif mark is not _Mark.CHAR and not mixed:
                    row_marks[column] = _Mark.SPACE
                elif mark is not _Mark.CHAR and not letter_bit:
                    row_marks[column] = _Mark.CHAR
    return _Analysis(bytes(key), marks)


def _usable_length(key: bytes) -> int:
    """Length of the key up to its first run of two unknown (zero) bytes."""
    for index, byte in enumerate(key):
        if byte == 0 and (index + 1 == len(key) or key[index + 1] == 0):
            return index
    return len(key)


def recover_partial_key(ciphertexts: Iterable[BytesLike]) -> bytes:
    """Recover as much of the shared key as the space heuristic allows.

    The key is as long as the longest ciphertext; unknown bytes are 0.
    """
    return _analyse([bytes(row) for row in ciphertexts]).key


def apply_partial_key(
    ciphertext: BytesLike, key: BytesLike
) -> list[Optional[int]]:
    """Decrypt the bytes whose key byte is known; unknown ones are ``None``.

    The key is used only up to its first two consecutive unknown bytes.
    """
    data = bytes(ciphertext)
    key_bytes = bytes(key)
    length = min(len(data), _usable_length(key_bytes))
    return [c ^ k if k else None for c, k in zip(data[:length], key_bytes)]


def decrypt_with_partial_key(ciphertexts: Iterable[BytesLike]) -> list[str]:
    """Recover the key and decrypt every ciphertext as far as possible.

    Decrypted bytes are shown as characters, guessed spaces as spaces and
    positions only known to hold some character as ``?``.  Each text ends
    at the first position about which nothing is known.
    """
    rows = [bytes(row) for row in ciphertexts]
    analysis = _analyse(rows)
    texts = []
    for row, marks in zip(rows, analysis.marks):
        chars: list[Optional[str]] = [
            " " if mark is _Mark.SPACE
            else _UNKNOWN_CHAR if mark is _Mark.CHAR
            else None
            for mark in marks
        ]
        for column, byte in enumerate(apply_partial_key(row, analysis.key)):
            if byte is not None:
                chars[column] = chr(byte)
        text = []
        for char in chars:
            if char is None:
                break
            text.append(char)
        texts.append("".join(text))
    return texts