from dataclasses import dataclass
from enum import Enum


class TrialDivisionVerdict(Enum):
    """
    Outcome of testing a candidate against the table of small primes.

    Attributes:
        PRIME: The candidate is itself one of the small primes.
        COMPOSITE: The candidate has a small prime factor (or is below 2).
        INCONCLUSIVE: No small factor was found; a probabilistic test must decide.
    """
    PRIME = "prime"
    COMPOSITE = "composite"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True, slots=True)
class FactorDecomposition:
    """
    Represents n - 1 written as 2^r * d with d odd, as used by Miller-Rabin.

    Attributes:
        r (int): The exponent of two.
        d (int): The odd part.

    Raises:
        ValueError: If d is not odd or r is negative.
    """
    r: int
    d: int

    def __post_init__(self):
        if self.r < 0:
            raise ValueError("Exponent of two (r) cannot be negative.")
        if self.d % 2 == 0:
            raise ValueError("Odd part (d) must be odd.")

    @classmethod
    def of(cls, value: int) -> 'FactorDecomposition':
        """Splits a positive integer into its power of two and its odd part."""
        if value <= 0:
            raise ValueError("Only positive integers can be decomposed.")
        r, d = 0, value
        while d % 2 == 0:
            r += 1
            d >>= 1
        return cls(r, d)
