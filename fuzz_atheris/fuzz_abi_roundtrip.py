#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: abi_roundtrip - ABI decode/encode differential roundtrip
# FUZZ_PLUGIN_HEADER_END
"""ABI Round-Trip Fuzzer (Atheris).

Targets: eth_abi codec via abifuzz.codec.EthAbiCodec

Each input seeds the signature generator with its first byte and is then
used twice per candidate: as an encoded payload (decode -> encode) and as
the Hypothesis choice sequence for placeholder values (encode -> decode).

Invariants:
- decode(d, b) == v implies encode(d, v) == b
- encode(d, v) == b implies decode(d, b) == v

A violated invariant raises RoundTripDefectError out of test_one_input,
which libFuzzer records as a crash. Parse, decode and encode failures are
expected and ignored.

Requires Python 3.13+ (uses PEP 695 type aliases).
"""

from __future__ import annotations

import argparse
import atexit
import gc
import logging
import pathlib
import sys
import time
from typing import Any

# --- Dependency Checks ---
_psutil_mod: Any = None
_atheris_mod: Any = None

try:  # noqa: SIM105 - need module ref for check_dependencies
    import psutil as _psutil_mod  # type: ignore[no-redef]
except ImportError:
    pass

try:  # noqa: SIM105 - need module ref for check_dependencies
    import atheris as _atheris_mod  # type: ignore[no-redef]
except ImportError:
    pass

from fuzz_common import (  # noqa: E402 - after dependency capture  # pylint: disable=C0413
    GC_INTERVAL,
    ProcessState,
    build_process_stats,
    check_dependencies,
    emit_final_report,
    get_process,
    print_fuzzer_banner,
    record_latency,
    record_memory,
)

check_dependencies(["psutil", "atheris"], [_psutil_mod, _atheris_mod])

import atheris  # noqa: E402  # pylint: disable=C0412,C0413

# --- Instrumentation & Harness ---

logging.getLogger("abifuzz").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["abifuzz", "eth_abi"]):
    from abifuzz import GeneratorConfig, HarnessStats, RoundTripDefectError, run

# --- Global State ---

_state = ProcessState()
_stats = HarnessStats()
_config = GeneratorConfig()

# --- Reporting ---

_REPORT_DIR = pathlib.Path(".fuzz_atheris_corpus") / "abi_roundtrip"


def _emit_report() -> None:
    """Emit comprehensive final report (crash-proof)."""
    stats = build_process_stats(_state)
    stats.update(_stats.as_dict())
    emit_final_report(_state, stats, _REPORT_DIR, "fuzz_abi_roundtrip_report.json")


atexit.register(_emit_report)


def test_one_input(data: bytes) -> None:
    """Atheris entry point: run every candidate signature against data."""
    if _stats.iterations == 0:
        _state.initial_memory_mb = get_process().memory_info().rss / (1024 * 1024)

    _state.status = "running"
    start_time = time.perf_counter()

    try:
        run(data, config=_config, stats=_stats)

    except RoundTripDefectError:
        _state.findings += 1
        _state.status = "finding"
        raise

    except KeyboardInterrupt:
        _state.status = "stopped"
        raise

    finally:
        record_latency(_state, start_time)

        if _stats.iterations % _state.checkpoint_interval == 0:
            _emit_report()

        if _stats.iterations % GC_INTERVAL == 0:
            gc.collect()

        if _stats.iterations % 100 == 0:
            record_memory(_state)


def main() -> None:
    """Run the ABI round-trip fuzzer with CLI support."""
    global _config  # noqa: PLW0603  # pylint: disable=global-statement

    parser = argparse.ArgumentParser(
        description="ABI decode/encode differential roundtrip fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval", type=int, default=500,
        help="Emit report every N iterations (default: 500)",
    )
    parser.add_argument(
        "--max-arguments", type=int, default=_config.max_arguments,
        help=f"Maximum arguments per generated signature (default: {_config.max_arguments})",
    )

    args, remaining = parser.parse_known_args()
    if args.checkpoint_interval < 1:
        parser.error(f"--checkpoint-interval must be >= 1, got {args.checkpoint_interval}")
    if args.max_arguments < 0:
        parser.error(f"--max-arguments must be >= 0, got {args.max_arguments}")
    _state.checkpoint_interval = args.checkpoint_interval
    _config = GeneratorConfig(max_arguments=args.max_arguments)

    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")

    sys.argv = [sys.argv[0], *remaining]

    print_fuzzer_banner(
        title="ABI Round-Trip Fuzzer (Atheris)",
        target="eth_abi decode/encode via abifuzz.run",
        state=_state,
    )

    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
