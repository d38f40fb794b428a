"""Latency benchmark for sillogismi.

Measures:
- Sentence processing (statement and question)
- Forward query over a long chain
- Inverse query over a wide fan-in
- Guarded traversal over a dense cyclic graph

Usage:
    python -m benchmarks.latency
    python benchmarks/latency.py
"""

import json
import statistics
import time
from typing import Dict, List

from sillogismi import FactStore, SentenceInterpreter, default_lexicon


def _timed(fn, iterations: int = 1000) -> Dict[str, float]:
    """Run fn() `iterations` times and return latency stats in ms."""
    times: List[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        fn()
        elapsed = (time.perf_counter() - t0) * 1000
        times.append(elapsed)

    times.sort()
    return {
        "mean_ms": round(statistics.mean(times), 3),
        "median_ms": round(statistics.median(times), 3),
        "p95_ms": round(times[int(len(times) * 0.95)], 3),
        "p99_ms": round(times[int(len(times) * 0.99)], 3),
        "min_ms": round(times[0], 3),
        "max_ms": round(times[-1], 3),
        "iterations": iterations,
    }


def _interpreter() -> SentenceInterpreter:
    return SentenceInterpreter(FactStore(identity=default_lexicon().identity))


def bench_statement() -> Dict[str, float]:
    """Store a fact through the interpreter."""
    interpreter = _interpreter()
    return _timed(lambda: interpreter.process("Il gatto è un animale"))


def bench_question() -> Dict[str, float]:
    """Answer a forward question on a 3-step chain."""
    interpreter = _interpreter()
    for sentence in (
        "Il gatto è un felino",
        "Il felino è un mammifero",
        "Il mammifero è un animale",
    ):
        interpreter.process(sentence)
    return _timed(lambda: interpreter.process("Cosa sai sul gatto?"))


def bench_long_chain(n: int = 200) -> Dict[str, float]:
    """Forward query over an n-step chain."""
    store = FactStore()
    for i in range(n):
        store.store(f"n{i}", f"n{i + 1}")
    return _timed(lambda: store.query("n0"), iterations=200)


def bench_fan_in(n: int = 200) -> Dict[str, float]:
    """Inverse query where n subjects share one attribute."""
    store = FactStore()
    for i in range(n):
        store.store(f"s{i}", "comune")
    return _timed(lambda: store.inverse_query("comune"), iterations=200)


def bench_dense_cycle(n: int = 30) -> Dict[str, float]:
    """Forward query on a complete graph (every node points to every other)."""
    store = FactStore()
    for i in range(n):
        for j in range(n):
            if i != j:
                store.store(f"k{i}", f"k{j}")
    return _timed(lambda: store.query("k0"), iterations=200)


def main():
    print("sillogismi Latency Benchmark")
    print("=" * 50)
    print()

    benchmarks = [
        ("statement", bench_statement),
        ("question (3-step chain)", bench_question),
        ("long_chain (200 steps)", bench_long_chain),
        ("fan_in (200 subjects)", bench_fan_in),
        ("dense_cycle (30 nodes)", bench_dense_cycle),
    ]

    results: Dict[str, Dict[str, float]] = {}
    for name, bench in benchmarks:
        print(f"Running: {name} ...")
        r = bench()
        results[name] = r
        print(f"  mean={r['mean_ms']:.3f}ms  p95={r['p95_ms']:.3f}ms  p99={r['p99_ms']:.3f}ms")

    print()
    print("=" * 50)
    print("Summary (guarded traversal):")
    print()
    for name, r in results.items():
        print(f"  {name:30s}  mean={r['mean_ms']:7.3f}ms  p95={r['p95_ms']:7.3f}ms")

    # Save results
    output_path = "benchmarks/latency_results.json"
    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)
    print(f"\nResults saved to {output_path}")


if __name__ == "__main__":
    main()
