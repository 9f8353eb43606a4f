import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from rsa_primegen.utils import ChaCha20RandomSource


@pytest.fixture
def rng() -> ChaCha20RandomSource:
    """A deterministic random source, fresh for every test."""
    return ChaCha20RandomSource(seed=20241019)


@pytest.fixture(scope="session")
def reference_primes() -> tuple[int, int]:
    """Two independent 1024-bit primes taken from a 'cryptography' RSA key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    numbers = key.private_numbers()
    return numbers.p, numbers.q
