from typing import Tuple


def inv_mod_2k(a: int, k: int) -> int:
    """
    Computes the inverse of an odd integer modulo 2^k, one bit per step.

    After step i the low i+1 bits of the result x satisfy a*x = 1 (mod 2^(i+1)).
    The running value b keeps a*x + 2^i * b = 1 over the integers, so every
    shift below is exact (b may go negative, which Python's floor shift handles).

    Args:
        a (int): Odd integer to invert.
        k (int): Power of two of the modulus (must be non-negative).

    Returns:
        int: x in [0, 2^k) with a*x = 1 (mod 2^k).

    Raises:
        ValueError: If a is even or k is negative.
    """
    if a % 2 == 0:
        raise ValueError("Only odd integers are invertible modulo a power of two.")
    if k < 0:
        raise ValueError("Power of two (k) cannot be negative.")

    x, b = 0, 1
    for i in range(k):
        if b & 1:
            x |= 1 << i
            b = (b - a) >> 1
        else:
            b >>= 1
    return x


def almost_inverse(a: int, modulus: int) -> Tuple[int, int]:
    """
    Kaliski's almost Montgomery inverse.

    Runs a binary extended GCD on (modulus, a) and returns (x, k) such that
    a*x = 2^k (mod modulus), where bit_length(modulus) <= k <= 2*bit_length(modulus).
    The power 2^k still has to be removed by the caller.

    Args:
        a (int): Value to invert, in [1, modulus).
        modulus (int): Odd modulus.

    Returns:
        (int, int): The almost inverse x in (0, modulus] and the step count k.

    Raises:
        ValueError: If a and modulus are not coprime.
    """
    u, v = modulus, a
    r, s = 0, 1
    k = 0

    while v > 0:
        if u & 1 == 0:
            u >>= 1
            s <<= 1
        elif v & 1 == 0:
            v >>= 1
            r <<= 1
        elif u > v:
            u = (u - v) >> 1
            r += s
            s <<= 1
        else:
            v = (v - u) >> 1
            s += r
            r <<= 1
        k += 1

    # u now holds gcd(a, modulus)
    if u != 1:
        raise ValueError(f"{a} is not invertible modulo {modulus}.")

    if r >= modulus:
        r -= modulus
    return modulus - r, k
