"""Discrete logarithms modulo a prime by meet in the middle.

To find ``x`` with ``h = g^x (mod p)`` and ``x < B^2``, write
``x = x0 * B + x1``.  Then ``h / g^x1 = (g^B)^x0``.  A table of the left-hand
side for every ``x1`` is built first, and ``(g^B)^x0`` is looked up in it
for every ``x0``.  This takes about ``2B`` multiplications instead of
``B^2``.
"""

from __future__ import annotations

DEFAULT_BASE = 1 << 20
DEFAULT_BRUTE_LIMIT = 1 << 40

CHALLENGE_P = int(
    "13407807929942597099574024998205846127479365820592393377723561443721"
    "76403007354697680187429816690342769003185818648605085375388281194656"
    "9946433649006084171"
)
CHALLENGE_G = int(
    "11717829880366207009516117596335367088558084999998952205599979459063"
    "92949973658374667057217647146031292859482967542827946656652711521274"
    "8467589894601965568"
)
CHALLENGE_H = int(
    "32394751040504504435652643787280657886490975209524495278347924529719"
    "81976143292558073856937958553180532878928001494706097394108577585732"
    "452307673444020333"
)
CHALLENGE_X = 375374217830


def _check_group(p: int, g: int) -> None:
    if p < 2:
        raise ValueError("modulus must be at least 2")
    if g % p == 0:
        raise ValueError("generator must be invertible modulo p")


def discrete_log(p: int, g: int, h: int, base: int = DEFAULT_BASE) -> int:
    """Smallest ``x < base**2`` with ``g**x == h (mod p)``.

    Raises ``ValueError`` when no such ``x`` exists in that range.
    """
    _check_group(p, g)
    if base < 1:
        raise ValueError("base must be at least 1")
    try:
        g_inverse = pow(g, -1, p)
    except ValueError:
        raise ValueError("generator must be invertible modulo p") from None

    table: dict[int, int] = {}
    value = h % p
    for x1 in range(base):
        table.setdefault(value, x1)
        value = value * g_inverse % p

    giant = pow(g, base, p)
    value = 1 % p
    for x0 in range(base):
        x1 = table.get(value)
        if x1 is not None:
            return x0 * base + x1
        value = value * giant % p
    raise ValueError(f"no logarithm below {base * base} found")


def brute_force_log(p: int, g: int, h: int, limit: int = DEFAULT_BRUTE_LIMIT) -> int:
    """Smallest ``x < limit`` with ``g**x == h (mod p)``, found by trying each.

    Raises ``ValueError`` when none is found below ``limit``.
    """
    _check_group(p, g)
    target = h % p
    value = 1 % p
    step = g % p
    for x in range(limit):
        if value == target:
            return x
        value = value * step % p
    raise ValueError(f"no logarithm below {limit} found")


def check_log(p: int, g: int, h: int, x: int) -> bool:
    """Whether ``g**x == h (mod p)``."""
    if p < 1:
        raise ValueError("modulus must be positive")
    return pow(g, x, p) == h % p