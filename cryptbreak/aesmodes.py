"""AES in CBC and CTR mode built on the raw block cipher.

The 16-byte IV is prepended to every ciphertext.  CBC uses PKCS#5 padding;
CTR treats the IV as a 128-bit big-endian counter.
"""

from __future__ import annotations

import os
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

BLOCK_SIZE = 16


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) not in (16, 24, 32):
        raise ValueError(f"AES key must be 16, 24 or 32 bytes, not {len(key)}")
    return key


def _check_iv(iv: Optional[bytes]) -> bytes:
    if iv is None:
        return os.urandom(BLOCK_SIZE)
    iv = bytes(iv)
    if len(iv) != BLOCK_SIZE:
        raise ValueError(f"IV must be {BLOCK_SIZE} bytes, not {len(iv)}")
    return iv


def _ecb(key: bytes) -> Cipher:
    return Cipher(algorithms.AES(_check_key(key)), modes.ECB())


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _blocks(data: bytes):
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start:start + BLOCK_SIZE]


def increment_counter(block: bytes) -> bytes:
    """Add one to a big-endian counter block, wrapping around at the top."""
    block = bytes(block)
    value = (int.from_bytes(block, "big") + 1) % (1 << (8 * len(block)))
    return value.to_bytes(len(block), "big")


def pkcs5_pad(data: bytes) -> bytes:
    """Pad to a whole number of blocks; a full block is added if aligned."""
    count = BLOCK_SIZE - len(data) % BLOCK_SIZE
    return bytes(data) + bytes([count]) * count


def pkcs5_unpad(data: bytes) -> bytes:
    """Strip PKCS#5 padding, raising ``ValueError`` if it is malformed."""
    data = bytes(data)
    if not data or len(data) % BLOCK_SIZE:
        raise ValueError("padded data must be a non-empty multiple of the block size")
    count = data[-1]
    if not 1 <= count <= BLOCK_SIZE or data[-count:] != bytes([count]) * count:
        raise ValueError("invalid padding")
    return data[:-count]


def cbc_encrypt(key: bytes, plaintext: bytes, iv: Optional[bytes] = None) -> bytes:
    """Encrypt with CBC and PKCS#5 padding; returns IV followed by ciphertext."""
    iv = _check_iv(iv)
    encryptor = _ecb(key).encryptor()
    out = bytearray(iv)
    previous = iv
    for block in _blocks(pkcs5_pad(plaintext)):
        previous = encryptor.update(_xor(block, previous))
        out += previous
    return bytes(out)


def cbc_decrypt(key: bytes, data: bytes, unpad: bool = True) -> bytes:
    """Decrypt IV-prefixed CBC data, removing the padding unless told not to."""
    data = bytes(data)
    if len(data) < BLOCK_SIZE or len(data) % BLOCK_SIZE:
        raise ValueError("CBC data must be a multiple of the block size, IV included")
    decryptor = _ecb(key).decryptor()
    previous = data[:BLOCK_SIZE]
    out = bytearray()
    for block in _blocks(data[BLOCK_SIZE:]):
        out += _xor(decryptor.update(block), previous)
        previous = block
    return pkcs5_unpad(out) if unpad else bytes(out)


def _ctr_stream(key: bytes, iv: bytes, data: bytes) -> bytes:
    encryptor = _ecb(key).encryptor()
    out = bytearray()
    counter = iv
    for chunk in _blocks(data):
        out += _xor(chunk, encryptor.update(counter))
        counter = increment_counter(counter)
    return bytes(out)


def ctr_encrypt(key: bytes, plaintext: bytes, iv: Optional[bytes] = None) -> bytes:
    """Encrypt with CTR mode; returns IV followed by ciphertext."""
    iv = _check_iv(iv)
    return iv + _ctr_stream(key, iv, bytes(plaintext))


def ctr_decrypt(key: bytes, data: bytes) -> bytes:
    """Decrypt IV-prefixed CTR data."""
    data = bytes(data)
    if len(data) < BLOCK_SIZE:
        raise ValueError("CTR data is shorter than its IV")
    return _ctr_stream(key, data[:BLOCK_SIZE], data[BLOCK_SIZE:])