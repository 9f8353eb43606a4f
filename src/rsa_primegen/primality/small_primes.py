from typing import Tuple

import numpy as np

SMALL_PRIME_LIMIT = 1000


def sieve(limit: int) -> Tuple[int, ...]:
    """
    Sieve of Eratosthenes.

    Args:
        limit (int): Exclusive upper bound.

    Returns:
        tuple[int, ...]: All primes below limit, in increasing order, as Python ints.
    """
    if limit <= 2:
        return ()

    is_prime = np.ones(limit, dtype=bool)
    is_prime[:2] = False
    for p in range(2, int(limit ** 0.5) + 1):
        if is_prime[p]:
            is_prime[p * p::p] = False
    return tuple(int(p) for p in np.flatnonzero(is_prime))


# The first 168 primes, 2 through 997
SMALL_PRIMES = sieve(SMALL_PRIME_LIMIT)
