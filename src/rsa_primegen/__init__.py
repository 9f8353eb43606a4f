import logging

from .montgomery import ContextMismatchError, MontgomeryContext, Residue
from .primality import gen_prime, is_probable_prime
from .utils import ChaCha20RandomSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ChaCha20RandomSource",
    "ContextMismatchError",
    "MontgomeryContext",
    "Residue",
    "gen_prime",
    "is_probable_prime",
]
