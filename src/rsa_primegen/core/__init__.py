from .interfaces import RandomSource

from .models import (
    FactorDecomposition,
    TrialDivisionVerdict,
)

__all__ = [
    "FactorDecomposition",
    "RandomSource",
    "TrialDivisionVerdict",
]
