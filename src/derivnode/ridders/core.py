"""One pass of Ridders' extrapolation at a fixed starting step."""

from __future__ import annotations

import numpy as np

from derivnode.ridders.config import RiddersConfig
from derivnode.utils.extrapolation import ExtrapolationTable
from derivnode.utils.numerics import central_difference, representable_step
from derivnode.utils.precision import PrecisionConfig
from derivnode.utils.types import ScalarFunction

__all__ = [
    "ridders_pass",
]


def ridders_pass(
    function: ScalarFunction,
    x: np.floating,
    h: np.floating,
    config: RiddersConfig,
    precision: PrecisionConfig,
) -> tuple[np.floating, np.floating]:
    """Returns the best Ridders estimate of ``f'(x)`` starting from step ``h``.

    Central differences are computed at steps ``h, h/r, h/r^2, ...`` with
    ``r = config.step_reduction_factor``, each made exactly representable
    around ``x``. Every new column of the table is extrapolated to all
    orders it supports. The entry with the smallest local error is kept.
    The pass stops early when the latest diagonal entry moves away from the
    previous one by more than ``config.safety_factor`` times that error.

    Reference: Ridders, C.J.F. 1982, Advances in Engineering Software,
    vol. 4, no. 2, pp. 75-76.

    Args:
        function: Scalar function evaluated in the working dtype.
        x: Abscissa.
        h: Starting step size, must be non-zero.
        config: Step and threshold configuration.
        precision: Working precision.

    Returns:
        A tuple ``(value, error)``. ``value`` is ``0`` and ``error`` the
        largest finite number when no entry had a comparable error.

    Raises:
        ValueError: If ``h`` is zero.
    """
    if h == 0:
        raise ValueError("ridders_pass requires a non-zero step size.")

    x = precision.cast(x)
    r = precision.cast(config.step_reduction_factor)
    r2 = r * r

    best_error = precision.maximum_magnitude
    best_value = precision.cast(0)

    table = ExtrapolationTable(config.table_size, dtype=precision.dtype)
    hh = representable_step(x, h, precision)
    table.set_base(0, central_difference(function, x, hh, precision))

    for step in range(1, table.size):
        hh = representable_step(x, hh / r, precision)
        table.set_base(step, central_difference(function, x, hh, precision))

        factor = r2
        for order in range(1, step + 1):
            value = table.extrapolate(order, step, factor)
            factor = factor * r2
            error = table.local_error(order, step)
            if error < best_error:
                best_error = error
                best_value = value

        # higher order is significantly worse: stop
        with np.errstate(over="ignore"):
            threshold = precision.cast(config.safety_factor) * best_error
        if table.diagonal_jump(step) > threshold:
            break

    return best_value, best_error
