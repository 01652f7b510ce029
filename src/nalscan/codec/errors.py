"""Failure types raised while scanning a length-prefixed NAL payload."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .nal_types import Codec


class ScanErrorKind(str, Enum):
    PREMATURE_END = "premature_end"
    MALFORMED_LENGTH = "malformed_length"
    INVALID_HEADER_BIT = "invalid_header_bit"
    UNDERLYING_IO = "underlying_io"


class NaluScanError(ValueError):
    """Base class for a payload that could not be scanned.

    ``kind`` tells callers which of the four failure modes occurred and
    ``position`` is the byte offset at which it was detected, when known.
    """

    kind: ScanErrorKind

    def __init__(self, message: str, *, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class PrematureEndError(NaluScanError):
    kind = ScanErrorKind.PREMATURE_END


class MalformedLengthError(NaluScanError):
    kind = ScanErrorKind.MALFORMED_LENGTH


class InvalidHeaderBitError(NaluScanError):
    kind = ScanErrorKind.INVALID_HEADER_BIT

    def __init__(
        self,
        header: int,
        codec: "Codec",
        *,
        position: Optional[int] = None,
    ) -> None:
        width = 4 if codec.is_hevc else 2
        super().__init__(
            f"forbidden_zero_bit set in {codec.value} header 0x{header:0{width}x}",
            position=position,
        )
        self.header = header
        self.codec = codec

    def __reduce__(self):
        # args holds only the message; rebuild from (header, codec) instead
        return (type(self), (self.header, self.codec), self.__dict__)


class UnderlyingIoError(NaluScanError):
    kind = ScanErrorKind.UNDERLYING_IO


__all__ = [
    "InvalidHeaderBitError",
    "MalformedLengthError",
    "NaluScanError",
    "PrematureEndError",
    "ScanErrorKind",
    "UnderlyingIoError",
]
