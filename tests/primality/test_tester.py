import pytest

from rsa_primegen.core import TrialDivisionVerdict
from rsa_primegen.montgomery import MontgomeryContext
from rsa_primegen.primality.tester import PrimeTestContext, is_probable_prime, trial_division


class TestTrialDivision:
    """
    Tests for trial division by the first 168 primes.
    """

    @pytest.mark.parametrize("prime_number", [2, 3, 5, 7, 11, 13, 101, 509, 997])
    def test_table_primes_are_prime(self, prime_number):
        """Members of the table are reported as prime."""
        assert trial_division(prime_number) is TrialDivisionVerdict.PRIME

    @pytest.mark.parametrize("composite_number", [
        -1, 0, 1, 4, 9, 15, 341, 561, 997 * 997, 1 << 64, 3 * 1000003
    ])
    def test_small_factor_means_composite(self, composite_number):
        """Values below 2 and multiples of table primes are composite."""
        assert trial_division(composite_number) is TrialDivisionVerdict.COMPOSITE

    @pytest.mark.parametrize("number", [
        1009,  # first prime above the table
        1009 * 1013,  # composite without small factors
        8191,  # Mersenne prime
        (1 << 127) - 1,  # Mersenne prime
    ])
    def test_no_small_factor_is_inconclusive(self, number):
        """Values without a table factor are left to the probabilistic tests."""
        assert trial_division(number) is TrialDivisionVerdict.INCONCLUSIVE


class TestPrimeTestContext:
    """
    Tests for the Fermat and Miller-Rabin stages.
    """

    def test_cached_values(self):
        """The context caches N, N - 1 and the Montgomery forms of 1, 2 and N - 1."""
        ctx = PrimeTestContext(MontgomeryContext(8191, 16))
        assert ctx.candidate == 8191
        assert ctx.n1 == 8190
        assert ctx.one.recover() == 1
        assert ctx.two.recover() == 2
        assert ctx.n1r.recover() == 8190

    def test_for_candidate_uses_bit_length(self):
        """for_candidate sizes the width to the candidate."""
        ctx = PrimeTestContext.for_candidate(8191)
        assert ctx.context == MontgomeryContext(8191, 13)

    def test_tiny_candidate_raises_error(self):
        """Candidates below 5 leave no room for witnesses."""
        with pytest.raises(ValueError, match="at least 5"):
            PrimeTestContext(MontgomeryContext(3, 8))

    @pytest.mark.parametrize("prime_number", [1009, 8191, 65537, (1 << 61) - 1, (1 << 127) - 1])
    def test_primes_pass_both_tests(self, prime_number, rng):
        """Known primes pass Fermat and Miller-Rabin."""
        ctx = PrimeTestContext.for_candidate(prime_number)
        assert ctx.fermat() is True
        assert ctx.miller_rabin(rng) is True

    def test_reference_primes_pass_both_tests(self, reference_primes, rng):
        """1024-bit primes from the cryptography package pass both tests."""
        for p in reference_primes:
            ctx = PrimeTestContext.for_candidate(p)
            assert ctx.fermat() is True
            assert ctx.miller_rabin(rng) is True

    def test_composite_without_small_factors_fails_fermat(self):
        """1009 * 1013 is caught by the base-2 Fermat test."""
        # 2^(N-1) = 2^4 = 16 (mod 1009), so the base-2 test cannot pass
        ctx = PrimeTestContext.for_candidate(1009 * 1013)
        assert ctx.fermat() is False

    def test_product_of_large_primes_fails_fermat(self, reference_primes):
        """An RSA-style modulus p * q fails the Fermat test."""
        p, q = reference_primes
        assert PrimeTestContext.for_candidate(p * q).fermat() is False

    def test_fermat_pseudoprime_caught_by_miller_rabin(self, rng):
        """341 = 11 * 31 fools the base-2 Fermat test (2^10 = 1 mod 341) but not Miller-Rabin."""
        ctx = PrimeTestContext.for_candidate(341)
        assert ctx.fermat() is True
        assert ctx.miller_rabin(rng) is False

    @pytest.mark.parametrize("carmichael", [1105, 1729, 2465, 2821, 6601, 8911])
    def test_carmichael_numbers_caught_by_miller_rabin(self, carmichael, rng):
        """Carmichael numbers pass Fermat but fail Miller-Rabin."""
        ctx = PrimeTestContext.for_candidate(carmichael)
        assert ctx.fermat() is True
        assert ctx.miller_rabin(rng) is False

    def test_witnesses_drawn_from_expected_range(self, rng):
        """Every round asks for a witness in (2, N - 2]."""
        calls = []

        class RecordingSource:
            def randrange(self, low, high):
                calls.append((low, high))
                return rng.randrange(low, high)

        ctx = PrimeTestContext.for_candidate(8191)
        assert ctx.miller_rabin(RecordingSource(), rounds=4) is True
        assert calls == [(2, 8189)] * 4

    def test_miller_rabin_stops_at_first_failing_round(self, rng):
        """No further witnesses are drawn once one round fails."""
        calls = []

        class RecordingSource:
            def randrange(self, low, high):
                calls.append((low, high))
                return 5  # 5 is a witness for 1105: 5 divides it

        ctx = PrimeTestContext.for_candidate(1105)
        assert ctx.miller_rabin(RecordingSource()) is False
        assert len(calls) == 1


class TestIsProbablePrime:
    """
    Tests for the complete primality protocol.
    """

    @pytest.mark.parametrize("prime_number", [2, 3, 5, 7, 11, 13, 17, 19, 997, 1009, 8191, 65537])
    def test_known_primes(self, prime_number, rng):
        """Table primes and larger primes are accepted."""
        assert is_probable_prime(prime_number, rng) is True

    @pytest.mark.parametrize("composite_number", [
        -1, 0, 1, 4, 6, 8, 9, 10, 12, 15, 21, 100, 341, 561, 1009 * 1013, 1009 * 1009
    ])
    def test_composite_numbers(self, composite_number, rng):
        """Small composites, pseudoprimes and values below 2 are rejected."""
        assert is_probable_prime(composite_number, rng) is False

    def test_explicit_width(self, rng):
        """A caller-chosen width wider than the candidate is accepted."""
        assert is_probable_prime((1 << 89) - 1, rng, bits=128) is True
        assert is_probable_prime((1 << 89) + 1, rng, bits=128) is False

    def test_reference_primes(self, reference_primes, rng):
        """1024-bit primes are accepted and their product rejected."""
        p, q = reference_primes
        assert is_probable_prime(p, rng) is True
        assert is_probable_prime(q, rng) is True
        assert is_probable_prime(p * q, rng) is False
