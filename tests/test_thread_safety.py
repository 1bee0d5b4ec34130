"""Tests that concurrent differentiations do not interfere."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from derivnode.expressions import parse
from derivnode.ridders import NumericDifferentiator

TEXTS = [
    "diff(s^3,s,2)",
    "diff(exp(s),s,0)",
    "diff(sin(s),s,0.7)",
    "diff(ln(s),s,2)",
    "diff(1/s,s,0)",
]


def test_parallel_node_evaluations_match_serial(extra_threads_ok):
    """Tests that evaluating nodes on several threads matches a serial run."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads in this environment")

    nodes = [parse(text) for text in TEXTS] * 4
    serial = [node.approximate().tobytes() for node in nodes]
    with ThreadPoolExecutor(max_workers=4) as ex:
        parallel = list(ex.map(lambda node: node.approximate().tobytes(), nodes))

    assert parallel == serial


def test_shared_differentiator_across_threads(extra_threads_ok):
    """Tests that one differentiator instance can be shared between threads."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads in this environment")

    d = NumericDifferentiator()
    points = [0.1 * k for k in range(1, 17)]

    def run(x):
        return float(d.differentiate(lambda t: t**3, x).value)

    with ThreadPoolExecutor(max_workers=4) as ex:
        results = list(ex.map(run, points))

    assert results == [run(x) for x in points]
