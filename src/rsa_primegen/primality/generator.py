import logging
from typing import Optional

from rsa_primegen.core import RandomSource, TrialDivisionVerdict
from rsa_primegen.montgomery import MontgomeryContext
from rsa_primegen.primality.tester import MILLER_RABIN_ROUNDS, PrimeTestContext, trial_division
from rsa_primegen.utils.random_source import ChaCha20RandomSource

logger = logging.getLogger(__name__)


def draw_candidate(bits: int, random_source: RandomSource) -> int:
    """
    Draws a random odd integer with exactly the given bit length.

    The top bit is forced so that every candidate has `bits` significant bits.
    """
    return random_source.randodd(bits) | (1 << bits - 1)


def gen_prime(
        bits: int,
        random_source: Optional[RandomSource] = None,
        rounds: int = MILLER_RABIN_ROUNDS,
        max_attempts: Optional[int] = None
) -> int:
    """
    Generate a random probable prime with exactly the specified bit length.

    Candidates go through trial division first; only those without a small
    factor get a Montgomery context, a base-2 Fermat test and Miller-Rabin.
    Without max_attempts the loop is unbounded (it ends with probability 1,
    after about 0.35 * bits candidates on average).

    Args:
        bits (int): The desired bit length of the prime (at least 2).
        random_source (RandomSource, optional): Source of candidates and witnesses.
            Callers generating several primes should create one source and pass
            it to every call. When omitted, a convenience OS-seeded
            ChaCha20RandomSource is created for this call only and reused for
            all of its candidates and witnesses; it is never kept between calls.
        rounds (int): Number of Miller-Rabin rounds. Defaults to 10.
        max_attempts (int, optional): Maximum number of candidates to try.
            Defaults to None (no limit).

    Returns:
        int: An odd prime (with error probability at most 4^-rounds) with exactly 'bits' bits.

    Raises:
        ValueError: If bits is smaller than 2.
        RuntimeError: If no prime found within max_attempts
    """
    if bits < 2:
        raise ValueError("A prime needs at least 2 bits.")
    if random_source is None:
        random_source = ChaCha20RandomSource()

    attempts = 0
    screened = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = draw_candidate(bits, random_source)

        verdict = trial_division(candidate)
        if verdict is TrialDivisionVerdict.COMPOSITE:
            continue
        if verdict is TrialDivisionVerdict.INCONCLUSIVE:
            screened += 1
            ctx = PrimeTestContext(MontgomeryContext(candidate, bits))
            if not (ctx.fermat() and ctx.miller_rabin(random_source, rounds)):
                continue

        logger.debug(
            "Found %d-bit prime after %d candidates (%d reached the Montgomery stage)",
            bits, attempts, screened
        )
        return candidate

    raise RuntimeError(f"Unable to generate a {bits} bits prime after {max_attempts} attempts.")
