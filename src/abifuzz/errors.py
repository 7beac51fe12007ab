"""abifuzz exception hierarchy.

Two disjoint classes of failure:

- CodecError and its subclasses are expected. A signature that does not
  compile, bytes that do not decode, or values that do not encode prune the
  search space; the driver and oracle absorb them.
- RoundTripDefectError is fatal. It is raised only at the engine boundary
  (abifuzz.driver.run) and is never caught inside the package: the crash is
  the test result.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .oracle import Defect

__all__ = [
    "AbiFuzzError",
    "CodecError",
    "DecodeError",
    "EncodeError",
    "RoundTripDefectError",
    "SignatureParseError",
]


class AbiFuzzError(Exception):
    """Base exception for all abifuzz errors."""


class CodecError(AbiFuzzError):
    """Expected failure reported by the codec boundary."""


class SignatureParseError(CodecError):
    """Interface description does not compile to a Descriptor.

    Attributes:
        source: The rendered description that failed to compile
    """

    def __init__(self, message: str, source: str = "") -> None:
        """Initialize SignatureParseError.

        Args:
            message: Human-readable reason
            source: The rendered description that failed to compile
        """
        super().__init__(message)
        self.source = source


class DecodeError(CodecError):
    """Bytes do not decode under a Descriptor."""


class EncodeError(CodecError):
    """Values do not encode under a Descriptor."""


class RoundTripDefectError(AbiFuzzError):
    """Encode and decode disagree: the codec is not a faithful inverse.

    Attributes:
        defect: Both sides of the failed comparison
    """

    def __init__(self, defect: Defect) -> None:
        super().__init__(defect.describe())
        self.defect = defect
