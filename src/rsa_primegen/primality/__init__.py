from .generator import draw_candidate, gen_prime
from .small_primes import SMALL_PRIMES
from .tester import (
    FERMAT_BASE,
    MILLER_RABIN_ROUNDS,
    PrimeTestContext,
    is_probable_prime,
    trial_division,
)

__all__ = [
    "FERMAT_BASE",
    "MILLER_RABIN_ROUNDS",
    "PrimeTestContext",
    "SMALL_PRIMES",
    "draw_candidate",
    "gen_prime",
    "is_probable_prime",
    "trial_division",
]
