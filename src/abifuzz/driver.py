"""Fuzz driver: one input, the full candidate cross-product, one verdict.

explore() is the internal form: it returns an Exploration that carries any
defect as data. run() is the fuzz-engine boundary: it raises
RoundTripDefectError for a defect (the crash is the test signal) and
otherwise returns 1 when at least one cell produced a conclusive round trip,
else 0. The integer is a coverage hint for the engine, not a pass/fail.

The generator is seeded from the first input byte (FALLBACK_SEED when the
input is empty), so a buffer always explores the same candidates; the fuzz
engine relies on that to reproduce and minimize crashes.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .codec import AbiCodec, EthAbiCodec
from .constants import FALLBACK_SEED
from .errors import RoundTripDefectError, SignatureParseError
from .materializer import materialize
from .oracle import Defect, check_decode_encode, check_encode_decode
from .signature import FunctionSignature, GeneratorConfig, iter_candidates
from .stats import HarnessStats

__all__ = ["Exploration", "explore", "run", "seed_for"]

logger = logging.getLogger(__name__)

_default_codec: EthAbiCodec | None = None


def _get_default_codec() -> EthAbiCodec:
    """Lazy-initialize the shared eth-abi codec."""
    global _default_codec  # noqa: PLW0603  # pylint: disable=global-statement
    if _default_codec is None:
        _default_codec = EthAbiCodec()
    return _default_codec


@dataclass(frozen=True, slots=True)
class Exploration:
    """Result of exploring one input.

    Attributes:
        good: At least one cell produced a conclusive round trip
        defect: First defect found; exploration stops there
        signature: Candidate that produced the defect
        candidates: Cells visited
        compiled: Candidates that compiled to a Descriptor
    """

    good: bool
    defect: Defect | None = None
    signature: FunctionSignature | None = None
    candidates: int = 0
    compiled: int = 0


def seed_for(data: bytes) -> int:
    """Generator seed for an input: its first byte, or FALLBACK_SEED."""
    return data[0] if data else FALLBACK_SEED


def explore(
    data: bytes,
    codec: AbiCodec | None = None,
    config: GeneratorConfig | None = None,
    stats: HarnessStats | None = None,
) -> Exploration:
    """Run both round-trip checks for every candidate derived from data."""
    codec = codec or _get_default_codec()
    rng = random.Random(seed_for(data))
    good = False
    candidates = compiled = 0

    if stats is not None:
        stats.iterations += 1

    for signature in iter_candidates(rng, config):
        candidates += 1
        if stats is not None:
            stats.candidates += 1

        try:
            descriptor = codec.parse(signature.render())
        except SignatureParseError:
            if stats is not None:
                stats.parse_failures += 1
            continue

        compiled += 1
        if stats is not None:
            stats.record_descriptor(descriptor)

        decoded = check_decode_encode(codec, descriptor, data)
        if stats is not None:
            stats.record_decode(decoded)
        if decoded.defect is not None:
            return Exploration(good, decoded.defect, signature, candidates, compiled)

        values = materialize(descriptor.inputs, data)
        encoded = check_encode_decode(codec, descriptor, values)
        if stats is not None:
            stats.record_encode(encoded)
        if encoded.defect is not None:
            return Exploration(good, encoded.defect, signature, candidates, compiled)

        good = good or decoded.conclusive or encoded.conclusive

    if stats is not None and good:
        stats.good_iterations += 1
    logger.debug(
        "Explored %d candidates (%d compiled) for %d-byte input: good=%s",
        candidates, compiled, len(data), good,
    )
    return Exploration(good, None, None, candidates, compiled)


def run(
    data: bytes,
    codec: AbiCodec | None = None,
    config: GeneratorConfig | None = None,
    stats: HarnessStats | None = None,
) -> int:
    """Fuzz-engine entry point.

    Returns:
        1 if any candidate produced a conclusive round trip, else 0

    Raises:
        RoundTripDefectError: encode and decode disagreed for some candidate
    """
    result = explore(data, codec, config, stats)
    if result.defect is not None:
        signature = result.signature.render() if result.signature else ""
        logger.error("Round-trip defect under %s\n%s", signature, result.defect.describe())
        raise RoundTripDefectError(result.defect)
    return 1 if result.good else 0
