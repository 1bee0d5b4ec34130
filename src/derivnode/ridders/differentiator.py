"""Provides the NumericDifferentiator class.

The differentiator estimates ``f'(x)`` of a scalar function by running
Ridders' extrapolation passes with shrinking starting steps until the
estimate is accurate relative to its own size.

Examples:
--------
>>> import numpy as np
>>> from derivnode.ridders.differentiator import NumericDifferentiator
>>> result = NumericDifferentiator().differentiate(np.sin, 0.0)
>>> float(result.value)
1.0

Failures are values, not exceptions:

>>> bad = NumericDifferentiator().differentiate(lambda x: 1 / x if x else np.nan, 0.0)
>>> bad.is_defined, bad.reason.name
(False, 'NON_NUMERIC_INPUT')
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from derivnode.logger import derivnode_logger
from derivnode.ridders.config import RiddersConfig
from derivnode.ridders.core import ridders_pass
from derivnode.utils.numerics import is_nan, relative_error, round_to_error
from derivnode.utils.precision import Precision, PrecisionConfig, as_precision_config
from derivnode.utils.types import ScalarFunction

__all__ = [
    "UndefinedReason",
    "DifferentiationResult",
    "UndefinedResult",
    "NumericDifferentiator",
]


class UndefinedReason(Enum):
    """Why a derivative could not be estimated."""

    NON_NUMERIC_INPUT = "non-numeric input"
    CONVERGENCE_FAILURE = "convergence failure"
    UNSUPPORTED_OPERAND_KIND = "unsupported operand kind"


@dataclass(frozen=True)
class DifferentiationResult:
    """An accepted derivative estimate.

    Attributes:
        value: Best estimate, rounded to the digits its error supports.
        error: Absolute error estimate of the unrounded best estimate.
        step: Starting step size of the accepted extrapolation pass.
    """

    value: np.floating
    error: np.floating
    step: np.floating

    @property
    def is_defined(self) -> bool:
        return True


@dataclass(frozen=True)
class UndefinedResult:
    """A derivative that could not be estimated.

    Attributes:
        reason: The failure kind.
    """

    reason: UndefinedReason

    @property
    def is_defined(self) -> bool:
        return False

    @property
    def value(self) -> float:
        return float("nan")

    @property
    def error(self) -> float:
        return float("nan")


class NumericDifferentiator:
    """Adaptive, error-controlled numeric first derivative.

    Each call is independent: the extrapolation table and the best-result
    tracker are local to :meth:`differentiate`, so one instance can be
    shared between threads.

    Attributes:
        config: Step and threshold configuration.
        precision: Working precision constants.
    """

    def __init__(
        self,
        config: RiddersConfig | None = None,
        precision: Precision | str | PrecisionConfig = Precision.FULL,
    ) -> None:
        """Initialises the differentiator.

        Args:
            config: Step and threshold configuration. Defaults to
                :class:`RiddersConfig` defaults.
            precision: Working precision tag, alias, or an already resolved
                :class:`PrecisionConfig`. Defaults to full precision.
        """
        self.config = config if config is not None else RiddersConfig()
        self.precision = as_precision_config(precision)

    def _is_accepted(self, value: np.floating, error: np.floating) -> bool:
        if is_nan(error):
            return False
        # 0/0 is NaN and compares as accepted
        return not relative_error(error, value) > self.config.max_error_rate

    def differentiate(
        self,
        function: ScalarFunction,
        abscissa: float,
    ) -> DifferentiationResult | UndefinedResult:
        """Estimates the derivative of ``function`` at ``abscissa``.

        Args:
            function: Scalar function of one variable. It receives values of
                the working dtype and returns a scalar, NaN when undefined.
            abscissa: Point at which the derivative is evaluated.

        Returns:
            A :class:`DifferentiationResult`, or an :class:`UndefinedResult`
            when the abscissa or the function value there is NaN, or when no
            pass reached ``config.max_error_rate``.
        """
        cfg = self.precision
        x = cfg.cast(abscissa)
        if is_nan(x) or is_nan(cfg.cast(function(x))):
            return UndefinedResult(UndefinedReason.NON_NUMERIC_INPUT)

        h = cfg.cast(self.config.min_initial_step)
        shrink = cfg.cast(self.config.retry_shrink_factor)
        while True:
            step = h
            value, error = ridders_pass(function, x, h, self.config, cfg)
            h = cfg.cast(h / shrink)
            if self._is_accepted(value, error) or h < cfg.machine_epsilon:
                break
            derivnode_logger.debug(
                "Ridders pass at h=%g gave value=%g error=%g; retrying with h=%g.",
                step, value, error, h,
            )

        if not self._is_accepted(value, error):
            derivnode_logger.info(
                "No derivative estimate at x=%g reached relative error %g.",
                x, self.config.max_error_rate,
            )
            return UndefinedResult(UndefinedReason.CONVERGENCE_FAILURE)

        return DifferentiationResult(
            value=round_to_error(value, error, cfg),
            error=error,
            step=step,
        )
