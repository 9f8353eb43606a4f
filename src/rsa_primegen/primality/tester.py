from typing import Optional

from rsa_primegen.core import FactorDecomposition, RandomSource, TrialDivisionVerdict
from rsa_primegen.montgomery import MontgomeryContext
from rsa_primegen.primality.small_primes import SMALL_PRIMES

MILLER_RABIN_ROUNDS = 10
FERMAT_BASE = 2


def trial_division(n: int) -> TrialDivisionVerdict:
    """
    Tests a candidate against the table of the first 168 primes.

    Args:
        n (int): The candidate.

    Returns:
        TrialDivisionVerdict: PRIME if n is a table entry, COMPOSITE if a table
        entry divides n (or n < 2), INCONCLUSIVE otherwise.
    """
    if n < 2:
        return TrialDivisionVerdict.COMPOSITE
    for p in SMALL_PRIMES:
        if n == p:
            return TrialDivisionVerdict.PRIME
        if n % p == 0:
            return TrialDivisionVerdict.COMPOSITE
    return TrialDivisionVerdict.INCONCLUSIVE


class PrimeTestContext:
    """
    Per-candidate state for the Fermat and Miller-Rabin tests.

    Caches N - 1 in plain and Montgomery form together with the Montgomery
    forms of one and two, so that both tests share a single context. Meant to
    be discarded once the candidate has been decided.

    Args:
        context (MontgomeryContext): Context whose modulus is the candidate.

    Raises:
        ValueError: If the candidate is smaller than 5.
    """

    def __init__(self, context: MontgomeryContext):
        if context.modulus < 5:
            raise ValueError("Probabilistic tests need a candidate of at least 5.")

        self.context = context
        self.candidate = context.modulus
        self.n1 = self.candidate - 1

        self.one = context.one()
        self.two = context.transform(FERMAT_BASE)
        self.n1r = context.transform(self.n1)

    @classmethod
    def for_candidate(cls, candidate: int, bits: Optional[int] = None) -> 'PrimeTestContext':
        """Builds the Montgomery context for a candidate, using its bit length by default."""
        if bits is None:
            bits = candidate.bit_length()
        return cls(MontgomeryContext(candidate, bits))

    def fermat(self) -> bool:
        """Returns True if 2^(N-1) = 1 (mod N)."""
        return self.two.pow_mod(self.n1) == self.one

    def miller_rabin(self, random_source: RandomSource, rounds: int = MILLER_RABIN_ROUNDS) -> bool:
        """
        Miller-Rabin probabilistic primality test.

        Each round draws a fresh witness from (2, N-2]. The first round that
        proves N composite ends the test.

        Args:
            random_source (RandomSource): Supplier of the witnesses.
            rounds (int): Number of independent rounds. Defaults to 10.

        Returns:
            bool: False if N is definitely composite, True if N is probably prime
            (a composite survives all rounds with probability at most 4^-rounds).
        """
        decomposition = FactorDecomposition.of(self.n1)

        for _ in range(rounds):
            a = self.context.transform(random_source.randrange(2, self.candidate - 2))
            x = a.pow_mod(decomposition.d)
            if x == self.one or x == self.n1r:
                continue

            # Square x repeatedly r-1 times
            for _ in range(decomposition.r - 1):
                x = x.square()
                if x == self.n1r:
                    break
            else:
                return False
        return True


def is_probable_prime(
        n: int,
        random_source: RandomSource,
        bits: Optional[int] = None,
        rounds: int = MILLER_RABIN_ROUNDS
) -> bool:
    """
    Runs trial division, then the Fermat test, then Miller-Rabin on one candidate.

    Args:
        n (int): The candidate.
        random_source (RandomSource): Supplier of Miller-Rabin witnesses.
        bits (int, optional): Montgomery width. Defaults to the bit length of n.
        rounds (int): Miller-Rabin rounds. Defaults to 10.

    Returns:
        bool: True if n is (probably) prime, False if it is composite.
    """
    verdict = trial_division(n)
    if verdict is not TrialDivisionVerdict.INCONCLUSIVE:
        return verdict is TrialDivisionVerdict.PRIME

    ctx = PrimeTestContext.for_candidate(n, bits)
    return ctx.fermat() and ctx.miller_rabin(random_source, rounds)
