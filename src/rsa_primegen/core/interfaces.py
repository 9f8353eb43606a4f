from abc import ABC, abstractmethod


class RandomSource(ABC):
    """
    Abstract interface for the random integer supplier used by prime generation.

    Implementations must be cryptographically strong: the primality guarantees
    and the secrecy of any key built from the generated primes are only as good
    as the stream behind this interface. An instance is created once and reused,
    never reseeded per call, and it is not meant to be shared between threads.
    """

    @abstractmethod
    def randint(self, bits: int) -> int:
        """
        Draws a uniform integer with at most the given number of bits.

        Args:
            bits (int): Bit length bound (must be non-negative).

        Returns:
            int: A uniform integer in [0, 2^bits).
        """
        pass

    def randodd(self, bits: int) -> int:
        """
        Draws a uniform odd integer with at most the given number of bits.

        The default implementation redraws from randint until the value is odd.

        Args:
            bits (int): Bit length bound (must be at least 1).

        Returns:
            int: A uniform odd integer in [0, 2^bits).
        """
        if bits < 1:
            raise ValueError("An odd integer needs at least one bit.")
        while True:
            x = self.randint(bits)
            if x & 1:
                return x

    def randrange(self, low: int, high: int) -> int:
        """
        Draws a uniform integer from the half-open range (low, high].

        The default implementation uses rejection sampling on randint.

        Args:
            low (int): Exclusive lower bound.
            high (int): Inclusive upper bound (must be greater than low).

        Returns:
            int: A uniform integer x with low < x <= high.
        """
        span = high - low
        if span < 1:
            raise ValueError("Upper bound must be strictly greater than lower bound.")
        width = span.bit_length()
        while True:
            x = self.randint(width)
            if x < span:
                return low + 1 + x
