"""abifuzz - differential round-trip fuzz harness for the contract ABI codec.

Generates function signatures across the ABI type grammar, compiles them,
and checks that decode and encode are faithful inverses of each other for
every candidate derived from a fuzz input.

Public API:
    run - Fuzz-engine entry point: bytes -> 0/1, raises on a defect
    explore - Same exploration, returning the defect as data
    EthAbiCodec - Codec boundary backed by eth-abi
    GeneratorConfig - Signature generation tunables
    HarnessStats - Counters for long fuzzing runs

Exceptions:
    AbiFuzzError - Base exception class
    CodecError - Expected codec failures (parse, decode, encode)
    RoundTripDefectError - Fatal: encode and decode disagree

Submodules:
    abifuzz.constants - Catalogs and limits
    abifuzz.types - ABI type tagged union
    abifuzz.values - ABI value tagged union
    abifuzz.signature - Candidate signature generation
    abifuzz.materializer - Byte-driven value materialization
    abifuzz.oracle - Round-trip checks
"""

from .codec import AbiCodec, Descriptor, EthAbiCodec, Parameter
from .driver import Exploration, explore, run, seed_for
from .errors import (
    AbiFuzzError,
    CodecError,
    DecodeError,
    EncodeError,
    RoundTripDefectError,
    SignatureParseError,
)
from .oracle import Defect, RoundTripDirection, Verdict
from .signature import FunctionSignature, GeneratorConfig
from .stats import HarnessStats

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("abifuzz")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AbiCodec",
    "AbiFuzzError",
    "CodecError",
    "DecodeError",
    "Defect",
    "Descriptor",
    "EncodeError",
    "EthAbiCodec",
    "Exploration",
    "FunctionSignature",
    "GeneratorConfig",
    "HarnessStats",
    "Parameter",
    "RoundTripDefectError",
    "RoundTripDirection",
    "SignatureParseError",
    "Verdict",
    "__version__",
    "explore",
    "run",
    "seed_for",
]
