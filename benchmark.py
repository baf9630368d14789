#!/usr/bin/env python3
"""
Performance benchmark for TurboEscape against other HTML escapers.
Generates a synthetic corpus of reference-heavy text in memory, so no
dataset has to be downloaded.
"""

# ruff: noqa: PLC0415, BLE001
from __future__ import annotations

import argparse
import os
import random
import string
import sys
import threading
import time

from turboescape import NAMED_ENTITIES, escape, unescape

# MEMORY: optional dependency for RSS sampling
try:
    import psutil

    _PSUTIL_AVAILABLE = True
except Exception:
    psutil = None
    _PSUTIL_AVAILABLE = False


class MemoryMonitor:
    def __init__(self, pid: int | None = None, sample_interval: float = 0.01):
        """
        pid: process ID to monitor (default: current process).
        sample_interval: seconds between samples (default 10ms).
        """
        self.sample_interval = sample_interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        target_pid = pid if pid is not None else os.getpid()
        self._proc = psutil.Process(target_pid) if _PSUTIL_AVAILABLE else None
        self.start_rss = None
        self.end_rss = None
        self.peak_rss = None
        self.samples = 0

    def _get_rss(self) -> int | None:
        if not self._proc:
            return None
        return self._proc.memory_info().rss

    def start(self):
        if not _PSUTIL_AVAILABLE:
            return
        self.start_rss = self._get_rss()
        self.peak_rss = self.start_rss
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop.is_set():
            rss = self._get_rss()
            if rss is not None:
                if self.peak_rss is None or rss > self.peak_rss:
                    self.peak_rss = rss
                self.samples += 1
            self._stop.wait(self.sample_interval)

    def stop(self):
        if not _PSUTIL_AVAILABLE:
            return
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1.0)
        self.end_rss = self._get_rss()

    def to_dict(self) -> dict:
        if not _PSUTIL_AVAILABLE:
            return {"memory_note": "psutil not installed; memory metrics skipped"}

        def mb(x):
            return (x or 0) / (1024 * 1024)

        return {
            "rss_start_mb": mb(self.start_rss),
            "rss_end_mb": mb(self.end_rss),
            "rss_delta_mb": mb(self.end_rss) - mb(self.start_rss),
            "rss_peak_mb": mb(self.peak_rss),
            "mem_samples": self.samples,
        }


def generate_corpus(count: int, size: int, seed: int | None = None) -> list[tuple[str, str]]:
    """
    Build (label, text) pairs of raw text mixing prose, markup and
    references of every kind, roughly `size` characters each.
    """
    rng = random.Random(seed)
    names = sorted(NAMED_ENTITIES)
    pieces = [
        lambda: "".join(rng.choices(string.ascii_letters + " ", k=rng.randint(5, 40))),
        lambda: f"&{rng.choice(names)};",
        lambda: f"&#{rng.randint(32, 0x2FFF)};",
        lambda: f"&#x{rng.randint(32, 0x2FFF):x};",
        lambda: "<a href=\"/x?a=1&b=2\">link</a>",
        lambda: "Tom & Jerry",
        lambda: "&bogus;",
    ]
    corpus = []
    for i in range(count):
        parts = []
        length = 0
        while length < size:
            part = rng.choice(pieces)()
            parts.append(part)
            length += len(part)
        corpus.append((f"doc-{i:04d}", "".join(parts)))
    return corpus


def _time_function(fn, texts: list[tuple[str, str]], iterations: int) -> dict:
    all_times = []
    errors = 0
    error_files = []
    for _ in range(iterations):
        for label, text in texts:
            try:
                start = time.perf_counter()
                fn(text)
                all_times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((label, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "min_time": min(all_times) if all_times else 0,
        "max_time": max(all_times) if all_times else 0,
        "errors": errors,
        "success_count": len(all_times),
        "error_files": error_files,
    }


def benchmark_turboescape(texts: list, iterations: int = 1) -> dict:
    """Benchmark TurboEscape escape + unescape."""
    return _time_function(lambda text: unescape(escape(text)), texts, iterations)


def benchmark_stdlib(texts: list, iterations: int = 1) -> dict:
    """Benchmark html.escape + html.unescape from the standard library."""
    import html

    return _time_function(lambda text: html.unescape(html.escape(text)), texts, iterations)


def benchmark_bs4(texts: list, iterations: int = 1) -> dict:
    """Benchmark BeautifulSoup entity substitution and html.parser decoding."""
    try:
        from bs4 import BeautifulSoup
        from bs4.dammit import EntitySubstitution
    except ImportError:
        return {"error": "bs4 not installed"}

    def round_trip(text):
        escaped = EntitySubstitution.substitute_html(text)
        return BeautifulSoup(escaped, "html.parser").get_text()

    return _time_function(round_trip, texts, iterations)


BENCHMARKS = {
    "turboescape": benchmark_turboescape,
    "html": benchmark_stdlib,
    "bs4": benchmark_bs4,
}


def print_results(results: dict, file_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({file_count} documents x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({file_count} documents)")
    print("=" * 80)

    header = f"\n{'Library':<15} {'Total (s)':<10} {'Mean (ms)':<10} {'Peak (MB)':<10} {'Delta (MB)':<10} {'Errors':<8}"
    print(header)
    print("-" * 80)

    turboescape_time = results.get("turboescape", {}).get("total_time", 0)

    for name in BENCHMARKS:
        if name not in results:
            continue
        result = results[name]
        if "error" in result:
            print(f"{name:<15} {result['error']}")
            continue

        total = result["total_time"]
        mean_ms = result["mean_time"] * 1000
        errors = result["errors"]

        peak_mb = result.get("rss_peak_mb", 0)
        delta_mb = result.get("rss_delta_mb", 0)
        mem_str = f"{peak_mb:>10.1f} {delta_mb:>10.1f}" if "rss_peak_mb" in result else f"{'n/a':>10} {'n/a':>10}"

        speedup = ""
        if name != "turboescape" and turboescape_time > 0 and total > 0:
            speedup = f" ({total / turboescape_time:.2f}x)"

        print(f"{name:<15} {total:<10.3f} {mean_ms:<10.3f} {mem_str} {errors:<8}{speedup}")

    print("\n" + "=" * 80)

    for name in BENCHMARKS:
        error_files = results.get(name, {}).get("error_files", [])
        if error_files:
            print(f"\nErrors for {name}:")
            for label, error_msg in error_files:
                print(f"  {label}: {error_msg}")
            print()


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark HTML escaping and reference decoding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--documents", type=int, default=200, help="Number of generated documents (default: 200)",
    )
    parser.add_argument(
        "--size", type=int, default=20_000, help="Approximate characters per document (default: 20000)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Corpus random seed (default: 0)")
    parser.add_argument(
        "--iterations", type=int, default=5, help="Number of iterations to run for averaging (default: 5)",
    )
    parser.add_argument(
        "--only",
        nargs="+",
        choices=list(BENCHMARKS),
        default=list(BENCHMARKS),
        help="Libraries to benchmark (default: all)",
    )
    parser.add_argument("--no-mem", action="store_true", help="Disable memory measurement (RSS sampling)")
    parser.add_argument(
        "--mem-sample-ms", type=float, default=10.0, help="Memory sampling interval in milliseconds (default: 10ms)",
    )

    args = parser.parse_args()

    texts = generate_corpus(args.documents, args.size, args.seed)
    if not texts:
        print("ERROR: No documents generated")
        sys.exit(1)
    total_chars = sum(len(text) for _, text in texts)
    print(f"Generated {len(texts)} documents ({total_chars / 1024 / 1024:.2f} M characters)")

    if not _PSUTIL_AVAILABLE and not args.no_mem:
        print("Note: psutil not installed; memory metrics will be skipped. Install with: pip install psutil")

    results = {}
    for name in args.only:
        print(f"\nBenchmarking {name}...", end="", flush=True)
        monitor = None
        if not args.no_mem:
            monitor = MemoryMonitor(sample_interval=args.mem_sample_ms / 1000)
            monitor.start()
        res = BENCHMARKS[name](texts, args.iterations)
        if monitor:
            monitor.stop()
            if "error" not in res:
                res.update(monitor.to_dict())
        results[name] = res
        if "error" in res:
            print(f" SKIPPED ({res['error']})")
        else:
            print(f" DONE ({res['total_time']:.3f}s)")

    print_results(results, len(texts), args.iterations)


if __name__ == "__main__":
    main()
