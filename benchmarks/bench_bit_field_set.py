"""Benchmark for bitfield construction and enumeration.

Times parsing, enumerating and re-serializing 8000 piece bitfields that are
empty, half full (every other piece) and full.
"""

import argparse
import json
import statistics
import time
from typing import Any, Callable, Dict

from bfset.config import get_config
from bfset.core.bit_field_set import BitFieldSet

NUM_PIECES = 8000

PAYLOADS = {
    "empty": bytes(NUM_PIECES // 8),
    "half-full": bytes([0xAA]) * (NUM_PIECES // 8),
    "full": bytes([0xFF]) * (NUM_PIECES // 8),
}


class BitFieldSetBenchmark:
    """Benchmark BitFieldSet operations on fixed payloads."""

    def __init__(self, iterations: int):
        self.iterations = iterations
        self.chunk_bits = get_config().bitfield.enumeration_chunk_bits
        self.results: Dict[str, Any] = {}

    def _time(self, func: Callable[[], Any]) -> Dict[str, float]:
        timings = []
        for _ in range(self.iterations):
            start_time = time.perf_counter()
            func()
            timings.append(time.perf_counter() - start_time)

        return {
            "mean_us": statistics.mean(timings) * 1e6,
            "std_us": statistics.stdev(timings) * 1e6 if len(timings) > 1 else 0.0,
            "min_us": min(timings) * 1e6,
        }

    def benchmark_payload(self, payload: bytes) -> Dict[str, Any]:
        """Benchmark construction, enumeration and serialization of one payload."""
        bitfield = BitFieldSet.new(payload, NUM_PIECES)
        return {
            "construct": self._time(lambda: BitFieldSet.new(payload, NUM_PIECES)),
            "enumerate": self._time(
                lambda: list(bitfield.iter_indices(self.chunk_bits))
            ),
            "count": self._time(bitfield.count),
            "to_binary": self._time(bitfield.to_binary),
            "members": bitfield.count(),
        }

    def run_all_benchmarks(self) -> None:
        print("Starting BitFieldSet Benchmarks")
        print("=" * 50)

        for name, payload in PAYLOADS.items():
            print(f"Running {name}-bitfield...")
            self.results[f"{name}-bitfield"] = self.benchmark_payload(payload)

        print("\n" + "=" * 50)
        print("Benchmark Summary:")
        for name, result in self.results.items():
            print(
                f"  {name}: construct {result['construct']['mean_us']:.1f}us, "
                f"enumerate {result['enumerate']['mean_us']:.1f}us"
            )

    def save_results(self, filename: str) -> None:
        with open(filename, "w") as f:
            json.dump(self.results, f, indent=2)

        print(f"Results saved to {filename}")


def main():
    """Main benchmark function."""
    parser = argparse.ArgumentParser(description="BitFieldSet Performance Benchmark")
    parser.add_argument("--iterations", "-n", type=int, default=200,
                        help="Timed runs per operation")
    parser.add_argument("--output", "-o", default=None,
                        help="Optional output file for results")
    args = parser.parse_args()

    benchmark = BitFieldSetBenchmark(args.iterations)
    benchmark.run_all_benchmarks()
    if args.output:
        benchmark.save_results(args.output)


if __name__ == "__main__":
    main()
