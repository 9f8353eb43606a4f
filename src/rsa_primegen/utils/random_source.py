import os
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from rsa_primegen.core import RandomSource

_NONCE = bytes(16)


class ChaCha20RandomSource(RandomSource):
    """
    A seedable, cryptographically strong random source built on the ChaCha20 keystream.

    The seed is hashed with SHA-256 into the cipher key, and random bytes are the
    keystream obtained by encrypting zeros. The same seed always yields the same
    stream, which makes prime generation reproducible in tests; without a seed the
    key comes from os.urandom.

    Args:
        seed (int | bytes, optional): Seed material. Defaults to None (OS entropy).

    Raises:
        ValueError: If an integer seed is negative.
    """

    def __init__(self, seed: Optional[Union[int, bytes]] = None):
        if seed is None:
            seed = os.urandom(32)
        elif isinstance(seed, int):
            if seed < 0:
                raise ValueError("Seed cannot be negative.")
            seed = seed.to_bytes(max(1, (seed.bit_length() + 7) // 8), "big")

        digest = hashes.Hash(hashes.SHA256())
        digest.update(seed)
        key = digest.finalize()

        self._keystream = Cipher(algorithms.ChaCha20(key, _NONCE), mode=None).encryptor()

    def random_bytes(self, count: int) -> bytes:
        """Returns the next count bytes of the keystream."""
        if count < 0:
            raise ValueError("Byte count cannot be negative.")
        return self._keystream.update(bytes(count))

    def randint(self, bits: int) -> int:
        if bits < 0:
            raise ValueError("Bit length cannot be negative.")
        if bits == 0:
            return 0
        nbytes = (bits + 7) // 8
        x = int.from_bytes(self.random_bytes(nbytes), "big")
        return x >> (nbytes * 8 - bits)
