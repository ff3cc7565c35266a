"""Performance tests and benchmarks for Moo.

These tests are marked as 'slow' and can be skipped with: pytest -m "not slow"
"""

import time

import pytest

from moo_pkg.parser import Parser


@pytest.mark.slow
class TestParsingPerformance:
    """Test parsing performance."""

    def test_simple_expression_parsing_time(self):
        """Benchmark parsing of a small mixed-precedence expression."""
        parser = Parser()
        start = time.time()
        for _ in range(1000):
            parser.parse("1 + 4.9 ^ 0.2 * x")
        elapsed = time.time() - start
        assert elapsed < 2.0, f"Parsing too slow: {elapsed}s"

    def test_long_expression_parsing_time(self):
        """Benchmark parsing of a forty-term sum."""
        expr = " + ".join(f"({i} * x)" for i in range(40))
        parser = Parser()
        start = time.time()
        for _ in range(20):
            parser.parse(expr)
        elapsed = time.time() - start
        assert elapsed < 2.0, f"Long expression parsing too slow: {elapsed}s"


@pytest.mark.slow
class TestEvaluationPerformance:
    """Test evaluation and integration performance."""

    def test_repeated_evaluation_time(self):
        program = Parser().parse("sin(x) * cos(y) + x ^ 2")
        start = time.time()
        for i in range(10000):
            program.evaluate(i * 0.001, 0.5)
        elapsed = time.time() - start
        assert elapsed < 5.0, f"Evaluation too slow: {elapsed}s"

    def test_trajectory_time(self):
        program = Parser().parse("x - y")
        start = time.time()
        xs, ys = program.integrate(0.0, 1.0, 0.001, 2000)
        elapsed = time.time() - start
        assert len(ys) == 2001
        assert elapsed < 5.0, f"Integration too slow: {elapsed}s"
