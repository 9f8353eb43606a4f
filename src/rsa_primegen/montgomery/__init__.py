from .context import ContextMismatchError, MontgomeryContext, Residue
from .inverse import almost_inverse, inv_mod_2k

__all__ = [
    "ContextMismatchError",
    "MontgomeryContext",
    "Residue",
    "almost_inverse",
    "inv_mod_2k",
]
