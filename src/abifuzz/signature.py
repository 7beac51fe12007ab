"""Signature builder: seeded generation of candidate function signatures.

A candidate is drawn per cell of the cross-product

    FUNCTION_NAMES x STATE_MUTABILITIES x PAYABLES

and rendered to a JSON interface description in which the argument list
serves as both inputs and outputs, so decode-then-encode and
encode-then-decode see the same type shapes.

Draw order per candidate (fixed so a seed replays exactly):
    1. argument count in [0, max_arguments]
    2. per argument: name, base type, dynamic-suffix roll,
       fixed-suffix roll, fixed length (only when that roll hits)

The two suffix rolls are independent. A type hit by both becomes T[][N].
Types produced this way that the codec rejects are ordinary parse failures.
"""

from __future__ import annotations

import json
import random
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .constants import (
    ARGUMENT_NAMES,
    ARGUMENT_TYPES,
    ARRAY_SUFFIX_ODDS,
    FUNCTION_NAMES,
    MAX_ARGUMENTS,
    MAX_FIXED_ARRAY_LENGTH,
    PAYABLES,
    STATE_MUTABILITIES,
)

__all__ = [
    "Argument",
    "FunctionSignature",
    "GeneratorConfig",
    "SignatureBuilder",
    "iter_candidates",
]


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Tunables for signature generation (defaults from abifuzz.constants)."""

    max_arguments: int = MAX_ARGUMENTS
    array_suffix_odds: int = ARRAY_SUFFIX_ODDS
    max_fixed_array_length: int = MAX_FIXED_ARRAY_LENGTH

    def __post_init__(self) -> None:
        if self.max_arguments < 0:
            msg = f"max_arguments must be >= 0, got {self.max_arguments}"
            raise ValueError(msg)
        if self.array_suffix_odds < 1:
            msg = f"array_suffix_odds must be >= 1, got {self.array_suffix_odds}"
            raise ValueError(msg)
        if self.max_fixed_array_length < 0:
            msg = f"max_fixed_array_length must be >= 0, got {self.max_fixed_array_length}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Argument:
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    """Candidate function: name, optional modifiers, ordered arguments."""

    name: str
    state_mutability: str | None = None
    payable: bool | None = None
    arguments: tuple[Argument, ...] = ()

    def render(self) -> str:
        """Render as a one-entry JSON interface description."""
        entry: dict[str, Any] = {"type": "function", "name": self.name}
        if self.state_mutability is not None:
            entry["stateMutability"] = self.state_mutability
        if self.payable is not None:
            entry["payable"] = self.payable
        if self.arguments:
            params = [{"name": a.name, "type": a.type} for a in self.arguments]
            entry["inputs"] = params
            entry["outputs"] = params
        return json.dumps([entry])


class SignatureBuilder:
    """Draws arguments for a cell from a caller-owned random generator.

    One seed drives a whole exploration: each cell continues where the
    previous one stopped.
    """

    def __init__(self, rng: random.Random, config: GeneratorConfig | None = None) -> None:
        self._rng = rng
        self._config = config or GeneratorConfig()

    def _argument_type(self) -> str:
        rng, config = self._rng, self._config
        type_str = rng.choice(ARGUMENT_TYPES)
        if rng.randrange(config.array_suffix_odds) == 0:
            type_str += "[]"
        if rng.randrange(config.array_suffix_odds) == 0:
            type_str += f"[{rng.randint(0, config.max_fixed_array_length)}]"
        return type_str

    def build(
        self,
        name: str,
        state_mutability: str | None = None,
        payable: bool | None = None,
    ) -> FunctionSignature:
        """Build one candidate for the given cell."""
        count = self._rng.randint(0, self._config.max_arguments)
        arguments: list[Argument] = []
        for _ in range(count):
            arg_name = self._rng.choice(ARGUMENT_NAMES)
            arguments.append(Argument(arg_name, self._argument_type()))
        return FunctionSignature(name, state_mutability, payable, tuple(arguments))


def iter_candidates(
    rng: random.Random,
    config: GeneratorConfig | None = None,
) -> Iterator[FunctionSignature]:
    """Lazily yield one candidate per cell of the catalog cross-product."""
    builder = SignatureBuilder(rng, config)
    for name in FUNCTION_NAMES:
        for state_mutability in STATE_MUTABILITIES:
            for payable in PAYABLES:
                yield builder.build(name, state_mutability, payable)
