"""AES-128-CBC without padding and a timed byte comparison.

Comparing secrets with an early-exit comparison leaks, through its running
time, how many leading bytes matched.
"""

from __future__ import annotations

import argparse
import time
from typing import Optional, Sequence, Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cryptbreak.hexdump import hexdump

BytesLike = Union[bytes, bytearray, memoryview]

BLOCK_SIZE = 16
_ZERO_IV = bytes(BLOCK_SIZE)
_DEMO_KEY = bytes([
    0x21, 0x9D, 0xA2, 0x97, 0x13, 0x0C, 0x3A, 0x3C,
    0xCE, 0x37, 0x73, 0xEE, 0x7B, 0x2F, 0x6C, 0x4E,
])
_DEMO_MESSAGE = b"strongstpassword"


def _cipher(key: BytesLike) -> Cipher:
    key = bytes(key)
    if len(key) != 16:
        raise ValueError(f"AES-128 key must be 16 bytes, not {len(key)}")
    return Cipher(algorithms.AES(key), modes.CBC(_ZERO_IV))


def _check_blocks(data: bytes) -> bytes:
    if len(data) % BLOCK_SIZE:
        raise ValueError(f"data length must be a multiple of {BLOCK_SIZE}")
    return data


def encrypt_block_cbc(key: BytesLike, message: BytesLike) -> bytes:
    """AES-128-CBC encrypt with a zero IV and no padding."""
    encryptor = _cipher(key).encryptor()
    return encryptor.update(_check_blocks(bytes(message))) + encryptor.finalize()


def decrypt_block_cbc(key: BytesLike, ciphertext: BytesLike) -> bytes:
    """AES-128-CBC decrypt with a zero IV and no padding."""
    decryptor = _cipher(key).decryptor()
    return decryptor.update(_check_blocks(bytes(ciphertext))) + decryptor.finalize()


def timed_compare(
    expected: BytesLike, actual: BytesLike, length: int = BLOCK_SIZE
) -> tuple[bool, int]:
    """Compare the first ``length`` bytes; return the result and nanoseconds taken."""
    expected, actual = bytes(expected), bytes(actual)
    if len(expected) < length or len(actual) < length:
        raise ValueError(f"both inputs must hold at least {length} bytes")
    start = time.perf_counter_ns()
    equal = expected[:length] == actual[:length]
    finish = time.perf_counter_ns()
    return equal, finish - start


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Encrypt a block, decrypt it again and time a comparison against zeros."""
    parser = argparse.ArgumentParser(
        description="Time a comparison of an AES-CBC ciphertext."
    )
    parser.parse_args(argv)

    cipher = encrypt_block_cbc(_DEMO_KEY, _DEMO_MESSAGE)
    print(hexdump(cipher), end="")
    plain = decrypt_block_cbc(_DEMO_KEY, cipher)

    equal, nanoseconds = timed_compare(cipher, bytes(2 * BLOCK_SIZE))
    print("Success!" if equal else "Failed!")
    print(hexdump(plain), end="")
    print(f"{nanoseconds} nano seconds")
    return 0