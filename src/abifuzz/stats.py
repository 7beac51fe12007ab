"""Run statistics collected by the driver for fuzzing reports."""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec import Descriptor
from .oracle import Verdict
from .types import scalar_base

__all__ = ["HarnessStats"]


@dataclass
class HarnessStats:
    """Counters accumulated across driver invocations.

    Passed to explore() by long-running entry points; a missing stats object
    costs nothing.
    """

    iterations: int = 0
    candidates: int = 0
    parse_failures: int = 0
    compiled: int = 0

    decode_inconclusive: int = 0
    decode_conclusive: int = 0
    encode_inconclusive: int = 0
    encode_conclusive: int = 0

    defects: int = 0
    good_iterations: int = 0

    # Scalar base -> number of compiled arguments using it
    type_coverage: dict[str, int] = field(default_factory=dict)

    def record_descriptor(self, descriptor: Descriptor) -> None:
        self.compiled += 1
        for param in descriptor.inputs:
            base = scalar_base(param.type)
            self.type_coverage[base] = self.type_coverage.get(base, 0) + 1

    def record_decode(self, verdict: Verdict) -> None:
        if verdict.defect is not None:
            self.defects += 1
        elif verdict.conclusive:
            self.decode_conclusive += 1
        else:
            self.decode_inconclusive += 1

    def record_encode(self, verdict: Verdict) -> None:
        if verdict.defect is not None:
            self.defects += 1
        elif verdict.conclusive:
            self.encode_conclusive += 1
        else:
            self.encode_inconclusive += 1

    def as_dict(self) -> dict[str, int]:
        """Flatten for JSON reports."""
        stats = {
            "iterations": self.iterations,
            "candidates": self.candidates,
            "parse_failures": self.parse_failures,
            "compiled": self.compiled,
            "decode_inconclusive": self.decode_inconclusive,
            "decode_conclusive": self.decode_conclusive,
            "encode_inconclusive": self.encode_inconclusive,
            "encode_conclusive": self.encode_conclusive,
            "defects": self.defects,
            "good_iterations": self.good_iterations,
            "types_covered": len(self.type_coverage),
        }
        for base, count in sorted(self.type_coverage.items()):
            stats[f"type_{base}"] = count
        return stats
