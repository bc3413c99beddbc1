"""Factoring RSA moduli whose primes were chosen too close together.

When ``|p - q|`` is small, the mid-point ``A = (p + q) / 2`` lies just above
``sqrt(N)`` and ``N = A^2 - x^2`` gives the factors as ``A - x`` and
``A + x`` (Fermat's method).  With the factorisation known, the private
exponent follows and a PKCS#1 v1.5 encrypted message can be read.
"""

from __future__ import annotations

from math import isqrt
from typing import Optional

DEFAULT_EXPONENT = 65537
DEFAULT_SCAN_LIMIT = 1 << 20

# Challenge 1: |p - q| < 2 * N^(1/4).
CHALLENGE_N1 = int(
    "17976931348623159077293051907890247336179769789423065727343008115"
    "77326758055056206869853794492129829595855013875371640157101398586"
    "47833778606925583497541085196591615128057575940752635007475935288"
    "71082364994994077189561705436114947486504671101510156394068052754"
    "0071584560878577663743040086340742855278549092581"
)

# Challenge 2: |p - q| < 2^11 * N^(1/4).
CHALLENGE_N2 = int(
    "6484558428080716696628242653467722787263437207069762630604390703787"
    "9730861808111646271401527606141756919558732184025452065542490671989"
    "2428844841839353281972988531310511738648965962582821502504990264452"
    "1008852816733037111422964210278402893076574586452336833570778346897"
    "15838646088239640236866252211790085787877"
)

# Challenge 3: |3p - 2q| < N^(1/4).
CHALLENGE_N3 = int(
    "72006226374735042527956443552558373833808445147399984182665305798191"
    "63556901883377904234086641876639384851752649940178970835240791356868"
    "77441155132015188279331812309091996246361896836573643119174094961348"
    "52463970788523879939683923036467667022162701835329944324119217381272"
    "9276147530748597302192751375739387929"
)

# Challenge 4: encrypted under CHALLENGE_N1 with e = 65537 and PKCS#1 v1.5.
CHALLENGE_CIPHERTEXT = int(
    "22096451867410381776306561134883418017410069787892831071731839143676"
    "13560012053800428232965047350942434394621975151225646583996794288946"
    "07645420405815647489880137348641204523252293201764879166664029975091"
    "88729971690526083222067771600019329260870009579993724077458967773697"
    "817571267229951148662959627934791540"
)


def _check_modulus(n: int) -> None:
    if n < 1:
        raise ValueError("modulus must be a positive integer")


def isqrt_ceil(n: int) -> int:
    """Smallest integer whose square is at least ``n``."""
    if n < 0:
        raise ValueError("square root of a negative number")
    if n == 0:
        return 0
    return isqrt(n - 1) + 1


def fermat_factor(n: int) -> tuple[int, int]:
    """Factor ``n`` whose primes satisfy ``|p - q| < 2 * N^(1/4)``.

    Returns ``(p, q)`` with ``p <= q``; raises ``ValueError`` when the
    primes are too far apart for a single step to find them.
    """
    _check_modulus(n)
    a = isqrt_ceil(n)
    x = isqrt_ceil(a * a - n)
    p, q = a - x, a + x
    if p * q != n:
        raise ValueError("the factors of n are not close enough to sqrt(n)")
    return p, q


def fermat_factor_scan(n: int, limit: int = DEFAULT_SCAN_LIMIT) -> tuple[int, int]:
    """Scan ``A`` upwards from ``sqrt(n)`` for at most ``limit`` steps.

    Returns ``(p, q)`` with ``p <= q``; raises ``ValueError`` if no
    factorisation is found within the limit.
    """
    _check_modulus(n)
    a = isqrt(n)
    for _ in range(limit):
        a += 1
        x = isqrt(a * a - n)
        p, q = a - x, a + x
        if p * q == n:
            return p, q
    raise ValueError(f"no factorisation found within {limit} steps")


def factor_unbalanced(n: int) -> tuple[int, int]:
    """Factor ``n = p * q`` where ``|3p - 2q| < N^(1/4)``.

    ``3p + 2q`` is the ceiling of ``sqrt(24 N)`` and ``(3p + 2q)^2 - 24 N``
    is ``(3p - 2q)^2``, which gives both primes.  Returns the factors in
    increasing order.
    """
    _check_modulus(n)
    m = 24 * n
    a = isqrt_ceil(m)
    x = isqrt(a * a - m)
    if x * x != a * a - m:
        raise ValueError("the factors of n are not close to the 3:2 ratio")
    for six_p, four_q in ((a + x, a - x), (a - x, a + x)):
        if six_p % 6 or four_q % 4:
            continue
        p, q = six_p // 6, four_q // 4
        if p * q == n:
            return (p, q) if p <= q else (q, p)
    raise ValueError("the factors of n are not close to the 3:2 ratio")


def private_exponent(e: int, p: int, q: int) -> int:
    """Decryption exponent: the inverse of ``e`` modulo ``(p - 1)(q - 1)``."""
    phi = (p - 1) * (q - 1)
    try:
        return pow(e, -1, phi)
    except ValueError:
        raise ValueError(f"e = {e} has no inverse modulo phi(N)") from None


def pkcs1_unpad(message: int, size: Optional[int] = None) -> bytes:
    """Strip PKCS#1 v1.5 encryption padding from a decrypted integer.

    ``size`` is the byte length of the modulus.  The block must read
    ``00 02``, non-zero padding bytes, a ``00`` separator and the data.
    """
    if message < 0:
        raise ValueError("message must not be negative")
    if size is None:
        size = (message.bit_length() + 7) // 8 + 1
    try:
        block = message.to_bytes(size, "big")
    except OverflowError:
        raise ValueError(f"message does not fit in {size} bytes") from None
    if block[:2] != b"\x00\x02":
        raise ValueError("block does not start with 00 02")
    separator = block.find(b"\x00", 2)
    if separator < 0:
        raise ValueError("no 00 separator after the padding")
    return block[separator + 1:]


def decrypt_pkcs1(
    ciphertext: int, n: int, p: int, q: int, e: int = DEFAULT_EXPONENT
) -> bytes:
    """Decrypt an RSA ciphertext with the factors of ``n`` and remove the padding."""
    _check_modulus(n)
    if p * q != n:
        raise ValueError("p * q does not equal n")
    d = private_exponent(e, p, q)
    message = pow(ciphertext, d, n)
    return pkcs1_unpad(message, (n.bit_length() + 7) // 8)