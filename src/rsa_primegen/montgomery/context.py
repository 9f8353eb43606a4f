from dataclasses import dataclass, field

from rsa_primegen.montgomery.inverse import almost_inverse, inv_mod_2k


class ContextMismatchError(ValueError):
    """Raised when residues bound to different Montgomery contexts are combined."""


@dataclass(frozen=True, slots=True)
class MontgomeryContext:
    """
    Precomputed constants for Montgomery arithmetic modulo an odd integer.

    With R = 2^bits, values are held as a*R mod N so that modular reduction only
    needs masks, multiplications and shifts. The context is immutable and
    compares equal to any other context with the same modulus and width.

    Attributes:
        modulus (int): The odd modulus N.
        bits (int): The working width; R = 2^bits must exceed the modulus.
        r2 (int): R^2 mod N, used to enter the Montgomery domain.
        r_mask (int): R - 1, substitutes for "mod R".
        n_prime (int): R - (N^-1 mod R), so that N * n_prime = -1 (mod R).

    Raises:
        ValueError: If the modulus is even or not greater than 1, or if the
            width is too small to hold the modulus.
    """
    modulus: int
    bits: int
    r2: int = field(init=False, repr=False, compare=False)
    r_mask: int = field(init=False, repr=False, compare=False)
    n_prime: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.modulus <= 1:
            raise ValueError("Modulus must be greater than 1.")
        if self.modulus % 2 == 0:
            raise ValueError("Montgomery arithmetic requires an odd modulus.")
        if self.bits < self.modulus.bit_length():
            raise ValueError(
                f"Width of {self.bits} bits cannot hold a {self.modulus.bit_length()}-bit modulus."
            )

        r_mask = (1 << self.bits) - 1
        object.__setattr__(self, "r_mask", r_mask)
        object.__setattr__(self, "n_prime", r_mask + 1 - inv_mod_2k(self.modulus, self.bits))
        object.__setattr__(self, "r2", self._compute_r2())

    def _compute_r2(self) -> int:
        # 2^(bits-1) doubled bits+1 times is R^2; each doubling stays below 2N
        c = (1 << self.bits - 1) % self.modulus
        for _ in range(self.bits + 1):
            c <<= 1
            if c >= self.modulus:
                c -= self.modulus
        return c

    def reduce(self, t: int) -> int:
        """
        Montgomery reduction (REDC).

        The caller guarantees 0 <= t < N*R; larger inputs come back
        under-corrected and are not detected.

        Args:
            t (int): Value to reduce.

        Returns:
            int: t * R^-1 mod N, in [0, N).
        """
        m = ((t & self.r_mask) * self.n_prime) & self.r_mask
        u = (t + m * self.modulus) >> self.bits
        if u >= self.modulus:
            u -= self.modulus
        return u

    def transform(self, a: int) -> 'Residue':
        """Converts a plain integer into a residue of this context."""
        return Residue.transform(a, self)

    def one(self) -> 'Residue':
        """Returns the Montgomery form of 1, i.e. R mod N."""
        return self.transform(1)

    def u_inv(self, a: int, montgomery: bool) -> int:
        """
        Inverts a value through the almost inverse and a scaling correction.

        The almost inverse carries a factor 2^k. It is first renormalized to
        exactly R, giving a^-1 * R mod N, which is then either reduced to the
        plain inverse or multiplied by R^2 mod N.

        Args:
            a (int): Value in [1, N), coprime to N.
            montgomery (bool): Return a^-1 * R^2 mod N instead of a^-1 mod N.

        Returns:
            int: The requested inverse, in [0, N).
        """
        x, k = almost_inverse(a, self.modulus)
        if x >= self.modulus:
            x -= self.modulus

        if k != self.bits:
            shift = 2 * self.bits - k
            # keep x << shift below N*R for the reduction below
            while shift > self.bits:
                x <<= 1
                if x >= self.modulus:
                    x -= self.modulus
                shift -= 1
            x = self.reduce(x << shift)

        if montgomery:
            return self.reduce(x * self.r2)
        return self.reduce(x)

    def inverse(self, a: int) -> int:
        """
        Computes the plain modular inverse of a.

        Args:
            a (int): Value in [1, N), coprime to N.

        Returns:
            int: a^-1 mod N.

        Raises:
            ValueError: If a is out of range or not coprime to the modulus.
        """
        if not 0 < a < self.modulus:
            raise ValueError("Value to invert is out of range [1, modulus).")
        return self.u_inv(a, montgomery=False)

    def inverse_mod(self, a: int) -> int:
        """Same as inverse, after reducing a modulo N."""
        return self.inverse(a % self.modulus)


@dataclass(frozen=True, slots=True)
class Residue:
    """
    A value held in Montgomery form, bound to the context that produced it.

    Attributes:
        value (int): a*R mod N for the represented integer a, in [0, N).
        context (MontgomeryContext): The owning context.

    Raises:
        ValueError: If value is outside [0, N).
    """
    value: int
    context: MontgomeryContext

    def __post_init__(self):
        if not 0 <= self.value < self.context.modulus:
            raise ValueError(
                f"Residue value must be in range [0, {self.context.modulus})."
            )

    @classmethod
    def transform(cls, a: int, context: MontgomeryContext) -> 'Residue':
        """
        Enters the Montgomery domain.

        Computes REDC(a * R^2 mod N) = a*R mod N. Integers outside [0, R) are
        reduced modulo N first so that the reduction precondition holds.
        """
        if a < 0 or a.bit_length() > context.bits:
            a %= context.modulus
        return cls(context.reduce(a * context.r2), context)

    def recover(self) -> int:
        """Leaves the Montgomery domain, returning the plain integer in [0, N)."""
        return self.context.reduce(self.value)

    def _check_context(self, other: 'Residue'):
        if self.context != other.context:
            raise ContextMismatchError(
                f"Cannot combine residues modulo {self.context.modulus} ({self.context.bits} bits) "
                f"and modulo {other.context.modulus} ({other.context.bits} bits)."
            )

    def multiply(self, other: 'Residue') -> 'Residue':
        """
        Montgomery product of two residues of the same context.

        Raises:
            ContextMismatchError: If other belongs to a different context.
        """
        self._check_context(other)
        return Residue(self.context.reduce(self.value * other.value), self.context)

    def square(self) -> 'Residue':
        return self.multiply(self)

    def pow_mod(self, exponent: int) -> 'Residue':
        """
        Square-and-multiply exponentiation, most significant bit first.

        The work done depends on the exponent bits; this is not constant-time.

        Args:
            exponent (int): Non-negative exponent.

        Returns:
            Residue: self^exponent in Montgomery form.

        Raises:
            ValueError: If exponent is negative.
        """
        if exponent < 0:
            raise ValueError("Exponent cannot be negative.")

        result = self.context.one()
        for i in range(exponent.bit_length() - 1, -1, -1):
            result = result.square()
            if (exponent >> i) & 1:
                result = result.multiply(self)
        return result

    def inverse(self) -> 'Residue':
        """
        Returns the Montgomery form of the multiplicative inverse.

        Raises:
            ValueError: If the represented value is not invertible.
        """
        if self.value == 0:
            raise ValueError("Zero has no multiplicative inverse.")
        return Residue(self.context.u_inv(self.value, montgomery=True), self.context)
