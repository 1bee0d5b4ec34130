"""Shared typing aliases for derivnode."""

from __future__ import annotations

from typing import Callable, TypeAlias

import numpy as np

ScalarFunction: TypeAlias = Callable[[np.floating], np.floating]
