#!/usr/bin/env python3
"""Benchmark suite for pyhtable: spread keys versus colliding keys."""

import argparse
import json
import logging
import time
from itertools import islice, permutations
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pyhtable import KEY_SIZE, Table
from pyhtable.hashing import HASH_FUNCTIONS


class Metrics:
    def __init__(self):
        self.write_latencies: List[float] = []
        self.read_latencies: List[float] = []
        self.chain_lengths: List[int] = []

    def to_dict(self) -> Dict:
        return {
            "write_latencies": {
                "p50": np.percentile(self.write_latencies, 50),
                "p95": np.percentile(self.write_latencies, 95),
                "p99": np.percentile(self.write_latencies, 99),
            },
            "read_latencies": {
                "p50": np.percentile(self.read_latencies, 50),
                "p95": np.percentile(self.read_latencies, 95),
                "p99": np.percentile(self.read_latencies, 99),
            },
            "chains": {
                "max": int(np.max(self.chain_lengths)),
                "mean_occupied": float(np.mean([n for n in self.chain_lengths if n] or [0])),
                "empty_buckets": int(np.count_nonzero(np.array(self.chain_lengths) == 0)),
            },
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        fig.add_trace(go.Box(y=self.write_latencies, name="Write Latency", boxpoints="outliers"))
        fig.add_trace(go.Box(y=self.read_latencies, name="Read Latency", boxpoints="outliers"))
        fig.update_layout(title=title, yaxis_title="Latency (ms)", boxmode="group")
        fig.write_html(output_path)


def spread_keys(count: int) -> List[str]:
    return [f"key_{i}" for i in range(count)]


def colliding_keys(count: int) -> List[str]:
    """Anagrams of one word: every key has the same byte sum."""
    alphabet = "abcdefghij"
    keys = ["".join(p) for p in islice(permutations(alphabet), count)]
    if len(keys) < count:
        raise ValueError(f"at most {len(keys)} colliding keys are available")
    return keys


class BenchmarkSuite:
    def __init__(self, num_entries: int, hash_name: str):
        self.num_entries = num_entries
        self.hash_func = HASH_FUNCTIONS[hash_name]

    def run(self, label: str, keys: List[str]) -> Metrics:
        if any(len(k.encode()) >= KEY_SIZE for k in keys):
            raise ValueError(f"keys must be shorter than {KEY_SIZE} bytes")
        metrics = Metrics()
        with Table(hash_func=self.hash_func) as table:
            for i, key in enumerate(tqdm(keys, desc=f"{label} Write")):
                start = time.perf_counter()
                table.set(key, i)
                metrics.write_latencies.append((time.perf_counter() - start) * 1000)

            for key in tqdm(keys, desc=f"{label} Read"):
                start = time.perf_counter()
                table.get(key)
                metrics.read_latencies.append((time.perf_counter() - start) * 1000)

            metrics.chain_lengths = [table.chain_length(i) for i in range(table.bucket_count)]
        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=10000, help="Number of entries")
    parser.add_argument("--hash", choices=sorted(HASH_FUNCTIONS), default="additive", help="Hash function")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    parser.add_argument("--plot", action="store_true", help="Write plotly latency plots")
    parser.add_argument("--verbose", action="store_true", help="Log table debug trace")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.hash)
    results = {
        "spread": suite.run("Spread", spread_keys(args.size)),
        "colliding": suite.run("Colliding", colliding_keys(args.size)),
    }

    if args.plot:
        for name, metrics in results.items():
            metrics.plot_latencies(f"pyhtable {name} keys ({args.hash})", args.output / f"{name}_latencies.html")

    with open(args.output / "metrics.json", "w") as f:
        json.dump({name: m.to_dict() for name, m in results.items()}, f, indent=2)


if __name__ == "__main__":
    main()
