"""Working-precision configuration for numeric evaluation.

Every numeric routine in derivnode runs in a single floating-point working
precision. Instead of branching on the size of a number type, callers pass
a :class:`Precision` tag which is mapped to a small
:class:`PrecisionConfig` record holding the dtype and the constants that
depend on it.

Examples:
    >>> from derivnode.utils.precision import Precision, get_precision_config
    >>> cfg = get_precision_config(Precision.REDUCED)
    >>> cfg.dtype
    <class 'numpy.float32'>
    >>> get_precision_config("double").machine_epsilon == 2.0 ** -52
    True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import numpy as np

__all__ = [
    "Precision",
    "PrecisionConfig",
    "get_precision_config",
    "resolve_precision",
    "as_precision_config",
]


class Precision(Enum):
    """Floating-point working precision."""

    REDUCED = "reduced"
    FULL = "full"


_ALIASES: dict[str, Precision] = {
    "reduced": Precision.REDUCED,
    "single": Precision.REDUCED,
    "float": Precision.REDUCED,
    "float32": Precision.REDUCED,
    "full": Precision.FULL,
    "double": Precision.FULL,
    "float64": Precision.FULL,
}

_DTYPES: dict[Precision, type[np.floating]] = {
    Precision.REDUCED: np.float32,
    Precision.FULL: np.float64,
}


@dataclass(frozen=True)
class PrecisionConfig:
    """Constants of one working precision.

    Attributes:
        precision: The precision tag this record describes.
        dtype: The numpy scalar type all arithmetic is carried out in.
        minimum_magnitude: Smallest positive normal number of ``dtype``.
        machine_epsilon: Distance from 1.0 to the next representable number.
        maximum_magnitude: Largest finite number of ``dtype``.
    """

    precision: Precision
    dtype: type[np.floating]
    minimum_magnitude: np.floating
    machine_epsilon: np.floating
    maximum_magnitude: np.floating

    def cast(self, value) -> np.floating:
        """Returns ``value`` as a scalar of the working dtype."""
        return self.dtype(value)

    @property
    def nan(self) -> np.floating:
        """Not-a-number in the working dtype."""
        return self.dtype(np.nan)


def resolve_precision(precision: Precision | str) -> Precision:
    """Resolves a precision tag or one of its spellings.

    Args:
        precision: A :class:`Precision` member, or a name such as
            ``"reduced"``, ``"single"``, ``"float64"``. Matching ignores
            case and punctuation.

    Returns:
        The matching :class:`Precision` member.

    Raises:
        ValueError: If the name is not a known precision.
    """
    if isinstance(precision, Precision):
        return precision
    key = re.sub(r"[^a-z0-9]+", "", str(precision).lower())
    try:
        return _ALIASES[key]
    except KeyError:
        opts = ", ".join(sorted(_ALIASES))
        raise ValueError(f"Unknown precision '{precision}'. Choose one of {{{opts}}}.") from None


@lru_cache(maxsize=None)
def _config_for(precision: Precision) -> PrecisionConfig:
    dtype = _DTYPES[precision]
    info = np.finfo(dtype)
    return PrecisionConfig(
        precision=precision,
        dtype=dtype,
        minimum_magnitude=dtype(info.tiny),
        machine_epsilon=dtype(info.eps),
        maximum_magnitude=dtype(info.max),
    )


def get_precision_config(precision: Precision | str = Precision.FULL) -> PrecisionConfig:
    """Returns the constants of a working precision.

    Args:
        precision: Precision tag or alias. Defaults to full (double) precision.

    Returns:
        The :class:`PrecisionConfig` for that precision.
    """
    return _config_for(resolve_precision(precision))


def as_precision_config(precision: Precision | str | PrecisionConfig) -> PrecisionConfig:
    """Returns ``precision`` as a :class:`PrecisionConfig`, resolving tags and aliases."""
    if isinstance(precision, PrecisionConfig):
        return precision
    return get_precision_config(precision)
