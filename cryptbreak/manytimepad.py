"""Attacks on a one-time pad that was used more than once.

When several messages are XORed with the same key, XORing two ciphertexts
cancels the key and leaves the XOR of the two plaintexts.  An ASCII space
(0x20) XORed with a letter (0x41-0x7A) always has bit 6 set, while two
letters XORed together never do.  That is enough to locate spaces and,
from them, key bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Optional, Sequence, Union

BytesLike = Union[bytes, bytearray, memoryview, Sequence[int]]

SPACE = 0x20
_LETTER_BIT = 0x40


def _as_bytes(value: Union[str, BytesLike]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _rows(ciphertexts: Iterable[BytesLike]) -> list[bytes]:
    """Return the ciphertexts as bytes, all of the same length."""
    rows = [bytes(row) for row in ciphertexts]
    if rows and any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("all ciphertexts must have the same length")
    return rows


def xor_bytes(a: BytesLike, b: BytesLike) -> bytes:
    """XOR two byte strings, stopping at the end of the shorter one."""
    return bytes(x ^ y for x, y in zip(bytes(a), bytes(b)))


def encrypt_with_key(
    messages: Iterable[Union[str, BytesLike]], key: Union[str, BytesLike]
) -> list[bytes]:
    """Encrypt every message with the same key, one key length per message.

    Each message must be at least as long as the key; only the first
    ``len(key)`` bytes of it are encrypted.
    """
    key_bytes = _as_bytes(key)
    result = []
    for message in messages:
        data = _as_bytes(message)
        if len(data) < len(key_bytes):
            raise ValueError(
                f"message of {len(data)} bytes is shorter than the "
                f"{len(key_bytes)}-byte key"
            )
        result.append(xor_bytes(data, key_bytes))
    return result


def recover_key(ciphertexts: Iterable[BytesLike]) -> bytes:
    """Recover the shared key by voting on where the spaces are.

    For each column, a ciphertext byte is taken to hide a space when more of
    the other rows differ from it in bit 6 than differ from it otherwise.
    The key byte is then that ciphertext byte XOR 0x20.  Columns that
    could not be decided are left as 0.
    """
    rows = _rows(ciphertexts)
    if not rows:
        return b""
    key = bytearray(len(rows[0]))
    for i, row in enumerate(rows):
        for column, byte in enumerate(row):
            if key[column]:
                continue
            spaced = differing = 0
            for k, other in enumerate(rows):
                if k == i:
                    continue
                if (byte ^ other[column]) & _LETTER_BIT:
                    spaced += 1
                elif byte != other[column]:
                    differing += 1
            if spaced > differing:
                key[column] = byte ^ SPACE
    return bytes(key)


def decrypt_all(ciphertexts: Iterable[BytesLike], key: BytesLike) -> list[bytes]:
    """XOR every ciphertext with the key."""
    key_bytes = bytes(key)
    return [xor_bytes(row, key_bytes) for row in ciphertexts]


@dataclass(frozen=True)
class _Pair:
    first: int
    second: int
    guess: Optional[int] = None


def _column_pairs(column: Sequence[int]) -> list[_Pair]:
    pairs = []
    for a, b in combinations(column, 2):
        if a == b:
            continue
        mixed = a ^ b
        pairs.append(_Pair(a, b, mixed ^ SPACE if mixed >> 6 else None))
    total = len(column) * (len(column) - 1) // 2
    pairs.extend(_Pair(0, 0) for _ in range(total - len(pairs)))
    return pairs


def _guess_column(column: Sequence[int]) -> list[Optional[str]]:
    pairs = _column_pairs(column)
    guesses: list[Optional[str]] = [None] * len(column)
    for pair in pairs:
        if pair.guess is not None:
            continue
        first_guess: Optional[int] = None
        second_seen = False
        for other in pairs:
            if other.guess is None:
                continue
            if pair.first in (other.first, other.second):
                first_guess = other.guess
            if pair.second in (other.first, other.second):
                second_seen = True
        if first_guess is None:
            continue
        for row, byte in enumerate(column):
            if byte == pair.first:
                guesses[row] = chr(first_guess)
            elif second_seen and byte == pair.second:
                guesses[row] = chr(SPACE)
    return guesses


def guess_plaintexts(ciphertexts: Iterable[BytesLike]) -> list[list[Optional[str]]]:
    """Guess plaintext characters column by column from pairs of ciphertexts.

    Pairs whose XOR has bit 6 or 7 set are read as a space against a
    character.  Pairs that cannot be read that way borrow the letters found
    through other pairs sharing a ciphertext byte.  Unknown characters are
    ``None``.
    """
    rows = _rows(ciphertexts)
    if not rows:
        return []
    columns = [_guess_column(column) for column in zip(*rows)]
    return [list(row) for row in zip(*columns)] if columns else [[] for _ in rows]


def render_guesses(guesses: Iterable[Iterable[Optional[str]]]) -> str:
    """Render guessed rows as text, one line per row, with ``?`` for unknowns."""
    return "".join(
        "".join("?" if char is None else char for char in row) + "\n"
        for row in guesses
    )