"""Configuration for the adaptive Ridders differentiator.

This config controls the starting step size, how the step is shrunk
within one extrapolation pass and between passes, and the error
thresholds that decide whether an estimate is accepted.
"""

from __future__ import annotations

from derivnode.utils.extrapolation import TABLE_SIZE


class RiddersConfig:
    """Configuration for :class:`NumericDifferentiator`."""

    def __init__(
        self,
        min_initial_step: float = 1e-2,
        max_error_rate: float = 1e-2,
        step_reduction_factor: float = 1.4,
        retry_shrink_factor: float = 10.0,
        safety_factor: float = 2.0,
        table_size: int = TABLE_SIZE,
    ):
        """Initialize configuration.

        Args:
            min_initial_step:
                Step size of the first extrapolation pass. Each failed pass
                restarts with this step divided by ``retry_shrink_factor``.

            max_error_rate:
                Largest accepted ``|error / value|``. A pass whose best
                estimate is less certain than this is retried with a
                smaller starting step.

            step_reduction_factor:
                Ratio between successive step sizes inside one pass. The
                Richardson weight of order ``j`` is this factor to the
                power ``2j``.

            retry_shrink_factor:
                Factor the starting step is divided by between passes.

            safety_factor:
                A pass stops early once the diagonal of the table moves by
                more than this multiple of the best error found so far.

            table_size:
                Number of step sizes and extrapolation orders per pass.

        Raises:
            ValueError: If a step, factor or tolerance is out of range.
        """
        if min_initial_step <= 0:
            raise ValueError("min_initial_step must be positive.")
        if max_error_rate <= 0:
            raise ValueError("max_error_rate must be positive.")
        if step_reduction_factor <= 1:
            raise ValueError("step_reduction_factor must be greater than 1.")
        if retry_shrink_factor <= 1:
            raise ValueError("retry_shrink_factor must be greater than 1.")
        if safety_factor <= 0:
            raise ValueError("safety_factor must be positive.")
        if table_size < 2:
            raise ValueError("table_size must be at least 2.")

        self.min_initial_step = float(min_initial_step)
        self.max_error_rate = float(max_error_rate)
        self.step_reduction_factor = float(step_reduction_factor)
        self.retry_shrink_factor = float(retry_shrink_factor)
        self.safety_factor = float(safety_factor)
        self.table_size = int(table_size)

    def __repr__(self) -> str:
        return (
            f"RiddersConfig(min_initial_step={self.min_initial_step!r}, "
            f"max_error_rate={self.max_error_rate!r}, "
            f"step_reduction_factor={self.step_reduction_factor!r}, "
            f"retry_shrink_factor={self.retry_shrink_factor!r}, "
            f"safety_factor={self.safety_factor!r}, "
            f"table_size={self.table_size!r})"
        )
