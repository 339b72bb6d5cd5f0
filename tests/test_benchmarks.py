"""Smoke tests for the benchmark suite."""
import importlib.util
from pathlib import Path

import pytest

pytest.importorskip("numpy")
pytest.importorskip("plotly")
pytest.importorskip("tqdm")

_SCRIPT = Path(__file__).resolve().parent.parent / "benchmarks" / "run_benchmarks.py"


@pytest.fixture(scope="module")
def bench():
    spec = importlib.util.spec_from_file_location("run_benchmarks", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_run_collects_metrics(bench):
    suite = bench.BenchmarkSuite(50, "additive")
    metrics = suite.run("Colliding", bench.colliding_keys(50))
    assert len(metrics.write_latencies) == 50
    assert len(metrics.read_latencies) == 50
    assert sum(metrics.chain_lengths) == 50
    assert metrics.to_dict()["chains"]["max"] == 50


def test_run_rejects_oversized_keys(bench):
    suite = bench.BenchmarkSuite(1, "additive")
    with pytest.raises(ValueError):
        suite.run("Long", ["k" * 40])
