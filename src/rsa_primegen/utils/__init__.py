from .random_source import ChaCha20RandomSource

__all__ = [
    "ChaCha20RandomSource",
]
