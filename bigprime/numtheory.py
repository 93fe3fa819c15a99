# bigprime/numtheory.py
# Number theory on BigInt4096
# - square-and-multiply modular exponentiation
# - Miller-Rabin with fixed witnesses (2, 3, 5, 7, 11)

from __future__ import annotations
from typing import Tuple, Union

from .bigint import BigInt4096
from .errors import ZeroModulus

WITNESSES = (2, 3, 5, 7, 11)

_ONE = BigInt4096(1)
_TWO = BigInt4096(2)
_THREE = BigInt4096(3)

IntLike = Union[BigInt4096, int]


def mod_exp(base: IntLike, exponent: IntLike, modulus: IntLike) -> BigInt4096:
    """
    base^exponent mod modulus, exponent consumed low bit first.
    Products are formed in 4096 bits, so results are exact for modulus <= 2^2048.
    """
    modulus = BigInt4096(modulus)
    if not modulus:
        raise ZeroModulus()
    result = BigInt4096(1)
    base = BigInt4096(base) % modulus
    exponent = BigInt4096(exponent)
    while exponent:
        if exponent.words[0] & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def split_power_of_two(value: IntLike) -> Tuple[BigInt4096, int]:
    """Return (d, r) with value == d * 2^r and d odd."""
    d = BigInt4096(value)
    if not d:
        raise ValueError("zero has no odd part")
    r = 0
    while not d.words[0] & 1:
        d >>= 1
        r += 1
    return d, r


def is_prime(n: IntLike, rounds: int = 5) -> bool:
    """Probabilistic: composites slip through with probability <= 4^-rounds."""
    if not 0 <= rounds <= len(WITNESSES):
        raise ValueError(f"rounds must be in 0..{len(WITNESSES)}, got {rounds}")
    n = BigInt4096(n)
    if n <= _ONE:
        return False
    if n == _TWO or n == _THREE:
        return True
    if not n.words[0] & 1:
        return False

    n_minus_one = n - _ONE
    d, r = split_power_of_two(n_minus_one)

    for w in WITNESSES[:rounds]:
        a = BigInt4096(w) % n
        if not a:
            continue  # n is the witness itself
        x = mod_exp(a, d, n)
        if x == _ONE or x == n_minus_one:
            continue
        for _ in range(r - 1):
            x = (x * x) % n
            if x == n_minus_one:
                break
        else:
            return False
    return True
