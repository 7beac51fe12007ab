"""Shared fuzzing infrastructure for Atheris-based ABI fuzzers.

Provides dependency checks, process-level observability (latency and RSS
history), and crash-proof JSON reporting. Harness-level counters live in
abifuzz.stats.HarnessStats; this module adds what only a long-running
instrumented process can measure.

Not a fuzz target itself -- no FUZZ_PLUGIN header.
"""

from __future__ import annotations

import json
import os
import pathlib
import statistics
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

try:
    import psutil
except ImportError:
    psutil = None  # type: ignore[assignment]


type FuzzStats = dict[str, int | str | float | list[Any]]

GC_INTERVAL = 256
"""Periodic gc.collect() interval to reclaim Atheris instrumentation cycles."""


_process: psutil.Process | None = None


def get_process() -> psutil.Process:
    """Lazy-initialize psutil process handle."""
    global _process  # noqa: PLW0603  # pylint: disable=global-statement
    if _process is None:
        _process = psutil.Process(os.getpid())
    return _process


def check_dependencies(dep_names: Sequence[str], dep_modules: Sequence[Any]) -> None:
    """Exit with install instructions if any fuzzing dependency is missing.

    Args:
        dep_names: Human-readable names (e.g., ["psutil", "atheris"])
        dep_modules: Corresponding module objects (None if import failed)
    """
    missing = [name for name, mod in zip(dep_names, dep_modules, strict=True) if mod is None]
    if missing:
        print("-" * 80, file=sys.stderr)
        print("ERROR: Missing required dependencies for fuzzing:", file=sys.stderr)
        for dep in missing:
            print(f"  - {dep}", file=sys.stderr)
        print("", file=sys.stderr)
        print("Install with: pip install -e '.[atheris]'", file=sys.stderr)
        print("-" * 80, file=sys.stderr)
        sys.exit(1)


@dataclass
class ProcessState:
    """Process-level observability for one fuzzing session."""

    status: str = "incomplete"
    findings: int = 0
    initial_memory_mb: float = 0.0

    performance_history: deque[float] = field(
        default_factory=lambda: deque(maxlen=10000),
    )
    memory_history: deque[float] = field(
        default_factory=lambda: deque(maxlen=1000),
    )

    checkpoint_interval: int = 500


def record_memory(state: ProcessState) -> None:
    """Sample current RSS (call every ~100 iterations)."""
    current_mb = get_process().memory_info().rss / (1024 * 1024)
    state.memory_history.append(current_mb)


def record_latency(state: ProcessState, start_time: float) -> None:
    """Record elapsed ms since start_time (a time.perf_counter() value)."""
    state.performance_history.append((time.perf_counter() - start_time) * 1000)


def build_process_stats(state: ProcessState) -> FuzzStats:
    """Latency percentiles and memory growth for the JSON report."""
    stats: FuzzStats = {"status": state.status, "findings": state.findings}

    perf = list(state.performance_history)
    if perf:
        stats["perf_mean_ms"] = round(statistics.mean(perf), 3)
        stats["perf_median_ms"] = round(statistics.median(perf), 3)
        stats["perf_max_ms"] = round(max(perf), 3)
        if len(perf) >= 20:
            stats["perf_p95_ms"] = round(statistics.quantiles(perf, n=20)[18], 3)

    mem = list(state.memory_history)
    if mem:
        stats["memory_peak_mb"] = round(max(mem), 2)
        stats["memory_delta_mb"] = round(max(mem) - state.initial_memory_mb, 2)

    return stats


def emit_final_report(
    state: ProcessState,
    stats: FuzzStats,
    report_dir: pathlib.Path,
    report_filename: str,
) -> None:
    """Emit crash-proof JSON report to stderr and file.

    Args:
        state: Process state (status set to "complete" unless a finding ended the run)
        stats: Pre-built stats dictionary; its status is refreshed from state
        report_dir: Directory for the JSON report file
        report_filename: Filename for the JSON report
    """
    if state.status != "finding":
        state.status = "complete"
    stats["status"] = state.status
    report = json.dumps(stats, sort_keys=True)

    print(
        f"\n[SUMMARY-JSON-BEGIN]{report}[SUMMARY-JSON-END]",
        file=sys.stderr,
        flush=True,
    )

    try:
        report_dir.mkdir(parents=True, exist_ok=True)
        (report_dir / report_filename).write_text(report, encoding="utf-8")
    except OSError:
        pass


def print_fuzzer_banner(title: str, target: str, state: ProcessState) -> None:
    """Print the startup banner to stderr."""
    print("=" * 80, file=sys.stderr)
    print(title, file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(f"Target:     {target}", file=sys.stderr)
    print(f"Checkpoint: every {state.checkpoint_interval} iterations", file=sys.stderr)
    print("Stopping:   Press Ctrl+C (findings are crashes)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
