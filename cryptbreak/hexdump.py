"""Hex dumps in the classic sixteen-bytes-per-line layout, and SHA-256 digests."""

from __future__ import annotations

import hashlib
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

_WIDTH = 16


def hexdump(data: BytesLike) -> str:
    """Format data as offset, hex bytes and printable characters per line."""
    data = bytes(data)
    lines = []
    for offset in range(0, len(data), _WIDTH):
        chunk = data[offset:offset + _WIDTH]
        cells = []
        for position in range(_WIDTH):
            if position < len(chunk):
                separator = "-" if position == 7 else " "
                cells.append(f"{chunk[position]:02x}{separator}")
            else:
                cells.append("   ")
        text = "".join(chr(b) if 32 <= b <= 126 else "." for b in chunk)
        lines.append(f"{offset:04x} - {''.join(cells)}  {text}\n")
    return "".join(lines)


def sha256_dump(data: BytesLike = b"\x01\x02\x03\x05") -> str:
    """Hex dump of the SHA-256 digest of the data."""
    return hexdump(hashlib.sha256(bytes(data)).digest())