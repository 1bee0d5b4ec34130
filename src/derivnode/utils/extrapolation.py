"""Extrapolation table used by Ridders' method.

The table holds derivative estimates indexed by ``(order, step)``:

* ``(0, k)`` is a raw central difference at the ``k``-th shrunken step;
* ``(j, k)`` for ``j > 0`` is the Richardson combination of ``(j-1, k)``
  and ``(j-1, k-1)``.

A table lives for one extrapolation pass and is then discarded.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "TABLE_SIZE",
    "richardson_step",
    "ExtrapolationTable",
]

TABLE_SIZE = 10


def richardson_step(fine: np.floating, coarse: np.floating, factor: np.floating) -> np.floating:
    """Combines two estimates to cancel their leading error term.

    Args:
        fine: Estimate at the smaller step size.
        coarse: Estimate at the larger step size.
        factor: ``r**p`` where ``r`` is the step ratio and ``p`` the order
            of the leading error term being cancelled.

    Returns:
        ``(fine * factor - coarse) / (factor - 1)``.
    """
    return (fine * factor - coarse) / (factor - 1)


class ExtrapolationTable:
    """Square table of Richardson-extrapolated estimates.

    Attributes:
        size: Maximum extrapolation order and number of step sizes.
        dtype: Working dtype of the entries.
    """

    def __init__(self, size: int = TABLE_SIZE, dtype: type[np.floating] = np.float64) -> None:
        """Creates an empty table.

        Args:
            size: Number of rows and columns. Must be at least 2.
            dtype: Numpy scalar type of the entries.

        Raises:
            ValueError: If ``size`` is smaller than 2.
        """
        if size < 2:
            raise ValueError("ExtrapolationTable requires size >= 2.")
        self.size = int(size)
        self.dtype = dtype
        # unfilled entries stay NaN so that reading one is never silent
        self._entries = np.full((self.size, self.size), np.nan, dtype=dtype)

    def __getitem__(self, index: tuple[int, int]) -> np.floating:
        order, step = index
        return self._entries[order, step]

    def set_base(self, step: int, value: np.floating) -> None:
        """Stores the raw (order 0) estimate for step index ``step``."""
        self._entries[0, step] = value

    def extrapolate(self, order: int, step: int, factor: np.floating) -> np.floating:
        """Fills entry ``(order, step)`` from the previous order.

        Args:
            order: Extrapolation order, ``1 <= order <= step``.
            step: Step index.
            factor: Richardson weight for this order.

        Returns:
            The new entry.

        Raises:
            IndexError: If ``(order, step)`` is not a derived entry.
        """
        if not 1 <= order <= step < self.size:
            raise IndexError(f"Entry ({order}, {step}) cannot be extrapolated.")
        with np.errstate(all="ignore"):
            value = self.dtype(
                richardson_step(
                    self._entries[order - 1, step],
                    self._entries[order - 1, step - 1],
                    self.dtype(factor),
                )
            )
        self._entries[order, step] = value
        return value

    def local_error(self, order: int, step: int) -> np.floating:
        """Error estimate of entry ``(order, step)``.

        The entry is compared with the estimate one order lower at the same
        step and at the previous step; the larger difference is returned.
        """
        value = self._entries[order, step]
        with np.errstate(all="ignore"):
            same_step = np.abs(value - self._entries[order - 1, step])
            previous_step = np.abs(value - self._entries[order - 1, step - 1])
        return same_step if same_step > previous_step else previous_step

    def diagonal_jump(self, step: int) -> np.floating:
        """Returns ``|T[step, step] - T[step-1, step-1]|``."""
        with np.errstate(all="ignore"):
            return np.abs(self._entries[step, step] - self._entries[step - 1, step - 1])
