"""Breaking a repeating-key XOR cipher with English letter frequencies.

The ciphertext is split into one column per key byte.  For each column
every candidate key byte is tried; a candidate is accepted when all the
decrypted bytes are printable and their frequencies correlate well enough
with those of an English sample.
"""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

BytesLike = Union[bytes, bytearray, memoryview]

ENGLISH_THRESHOLD = 0.057
_PRINTABLE = range(32, 127)


@dataclass(frozen=True)
class Frequencies:
    """Byte counts together with the number of bytes they were taken from."""

    counts: Mapping[int, int] = field(default_factory=dict)
    total: int = 0

    def probability(self, byte: int) -> float:
        """Relative frequency of ``byte``; 0.0 when nothing was counted."""
        if not self.total:
            return 0.0
        return self.counts.get(byte, 0) / self.total


def _lower(byte: int) -> int:
    return byte + 32 if 65 <= byte <= 90 else byte


def _as_bytes(value: Union[str, BytesLike]) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


def _folded_frequencies(data: bytes) -> Frequencies:
    return Frequencies(dict(Counter(_lower(b) for b in data)), len(data))


def english_frequencies(sample: Union[str, BytesLike]) -> Frequencies:
    """Count the bytes of an English sample, folding ASCII letters to lower case."""
    return _folded_frequencies(_as_bytes(sample))


def sum_squared_probabilities(freqs: Frequencies) -> float:
    """Sum of squared probabilities over the printable ASCII bytes."""
    return sum(
        freqs.probability(byte) ** 2 for byte in freqs.counts if byte in _PRINTABLE
    )


def hex_to_bytes(text: Union[str, BytesLike]) -> bytes:
    """Decode hex text, ignoring whitespace such as trailing newlines."""
    if not isinstance(text, str):
        text = bytes(text).decode("ascii")
    digits = "".join(text.split())
    if len(digits) % 2:
        raise ValueError("hex text must have an even number of digits")
    return bytes.fromhex(digits)


def _column(data: bytes, index: int, interval: int) -> bytes:
    # Column ``index`` stops ``index`` bytes short of the end of the data.
    return data[index:max(index, len(data) - index):interval]


def _check_interval(interval: int) -> None:
    if interval < 1:
        raise ValueError("interval must be at least 1")


def column_frequencies(data: BytesLike, interval: int) -> dict[int, Frequencies]:
    """Raw byte counts of every column when the data is cut into ``interval`` columns."""
    _check_interval(interval)
    data = bytes(data)
    result = {}
    for index in range(interval):
        column = _column(data, index, interval)
        result[index] = Frequencies(dict(Counter(column)), len(column))
    return result


def coincidence_by_column(data: BytesLike, interval: int) -> list[float]:
    """Sum of squared byte frequencies in each column.

    Columns enciphered with a single key byte keep the high value of plain
    text, so the right key length shows up as a jump in these sums.
    """
    return [
        sum((count / freqs.total) ** 2 for count in freqs.counts.values())
        for freqs in column_frequencies(data, interval).values()
    ]


def matches_english(freqs: Frequencies, english: Frequencies) -> bool:
    """Whether the sum of q_i * p_i against the English sample reaches 0.057."""
    correlation = sum(
        freqs.probability(byte) * english.probability(byte) for byte in freqs.counts
    )
    return correlation >= ENGLISH_THRESHOLD


def find_key(data: BytesLike, key_length: int, english: Frequencies) -> bytes:
    """Find each key byte as the first candidate that yields English-like text.

    Candidates 0 to 254 are tried; a key byte with no acceptable candidate
    is left as 0.
    """
    _check_interval(key_length)
    data = bytes(data)
    key = bytearray(key_length)
    for index in range(key_length):
        column = _column(data, index, key_length)
        for candidate in range(255):
            plain = bytes(b ^ candidate for b in column)
            if any(b not in _PRINTABLE for b in plain):
                continue
            if matches_english(_folded_frequencies(plain), english):
                key[index] = candidate
                break
    return bytes(key)


def decrypt(data: BytesLike, key: BytesLike) -> bytes:
    """XOR the data with the key repeated over its whole length."""
    key = bytes(key)
    if not key:
        raise ValueError("key must not be empty")
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(bytes(data)))


def _report(english: Frequencies) -> str:
    printable = [b for b in english.counts if b in _PRINTABLE]
    squared = sum_squared_probabilities(english)
    return (
        f"Total Char: {len(english.counts)}\n"
        f"TotalPrintable  Characters: {len(printable)}\n"
        f"\u03a3(Pi2) = {squared:.6f} - {squared * 10000:.6f} %\n"
        f"(1 / 256 = {1 / 256:.6f}) (1 / 95 = {1 / 95:.6f})"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Break a hex-encoded repeating-key XOR ciphertext and write the plaintext."""
    parser = argparse.ArgumentParser(
        description="Recover the key of a repeating-key XOR ciphertext."
    )
    parser.add_argument("sample", nargs="?", default="ptext.txt",
                        help="English sample text")
    parser.add_argument("ciphertext", nargs="?", default="ctest.txt",
                        help="hex-encoded ciphertext")
    parser.add_argument("output", nargs="?", default="ttest.txt",
                        help="where to write the plaintext")
    parser.add_argument("-k", "--key-length", type=int, default=7)
    args = parser.parse_args(argv)

    english = english_frequencies(Path(args.sample).read_bytes())
    print(_report(english))

    data = hex_to_bytes(Path(args.ciphertext).read_text(encoding="ascii"))
    key = find_key(data, args.key_length, english)
    plain = decrypt(data, key)
    print(plain.decode("latin-1"))
    Path(args.output).write_bytes(plain)
    return 0