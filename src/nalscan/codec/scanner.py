"""
Length-prefixed NAL unit scanner for FLV video tag payloads.

A video tag body starts with a fixed 5-byte header (frame type / codec id,
AVCPacketType, 24-bit composition time) followed by AVCC-framed NAL units:

    [u32 length][header][payload ...][u32 length][header][payload ...]

The scanner reads each length and header, classifies the header and skips
the rest of the unit without reading it. Descriptors hold offsets into the
caller's buffer; no payload bytes are copied.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Iterable, List, Optional, Union

from nalscan.config.logging_policy import ScanLogging

from .errors import (
    MalformedLengthError,
    NaluScanError,
    PrematureEndError,
    UnderlyingIoError,
)
from .nal_types import Codec, CodecLike, NalType, as_codec, classify

logger = logging.getLogger(__name__)

TAG_HEADER_SIZE = 5
NAL_LENGTH_SIZE = 4

BytesLike = Union[bytes, bytearray, memoryview]
PayloadSource = Union[BytesLike, BinaryIO]


@dataclass
class NalUnitDescriptor:
    """One NAL unit found in a payload.

    - start_position: offset of the unit header (just after its length prefix).
    - full_size: the length prefix value (header + payload).
    - type: classified nal_unit_type.
    - hash: content digest slot; filled by a deduplication layer, never by the scanner.

    Only ``hash`` may be assigned after construction.
    """

    start_position: int
    full_size: int
    type: NalType
    hash: Optional[str] = None

    def __setattr__(self, name: str, value: object) -> None:
        if name != "hash" and name in self.__dict__:
            raise AttributeError(f"NalUnitDescriptor.{name} is read-only")
        object.__setattr__(self, name, value)

    @property
    def end_position(self) -> int:
        return self.start_position + self.full_size

    def payload(self, buffer: BytesLike) -> memoryview:
        """Zero-copy view of this unit (header included) inside ``buffer``."""
        mv = memoryview(buffer).cast("B")
        if self.end_position > len(mv):
            raise ValueError(
                f"unit [{self.start_position}, {self.end_position}) outside buffer of {len(mv)} bytes"
            )
        return mv[self.start_position : self.end_position]


# --- Stream primitives ---


def _tell(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except (OSError, ValueError) as exc:
        raise UnderlyingIoError(f"tell failed: {exc}") from exc


def _seek(stream: BinaryIO, offset: int, whence: int = io.SEEK_SET) -> int:
    try:
        return stream.seek(offset, whence)
    except (OSError, ValueError) as exc:
        raise UnderlyingIoError(f"seek to {offset} (whence={whence}) failed: {exc}") from exc


def _read_exact(stream: BinaryIO, count: int, what: str) -> bytes:
    pos = _tell(stream)
    try:
        chunk = stream.read(count)
    except (OSError, ValueError) as exc:
        raise UnderlyingIoError(f"read of {what} at offset {pos} failed: {exc}", position=pos) from exc
    if chunk is None or len(chunk) < count:
        raise _premature(count, what, pos, 0 if chunk is None else len(chunk))
    return chunk


def _as_buffer(data: PayloadSource) -> Optional[memoryview]:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return memoryview(data).cast("B")
    return None


# --- Scan ---


def scan(
    data: PayloadSource,
    codec: CodecLike,
    *,
    scan_logging: Optional[ScanLogging] = None,
) -> List[NalUnitDescriptor]:
    """Scan one video tag payload into NAL unit descriptors.

    ``data`` is a byte buffer, walked in place, or a readable, seekable
    binary stream whose position is moved by the scan. Raises a
    ``NaluScanError`` subclass on any failure; a partial list is never
    returned.
    """
    codec = as_codec(codec)
    log_nals = bool(scan_logging.log_nals) if scan_logging is not None else False
    log_failures = bool(scan_logging.log_failures) if scan_logging is not None else False
    try:
        mv = _as_buffer(data)
        if mv is not None:
            return _scan_buffer(mv, codec, log_nals)
        return _scan_stream(data, codec, log_nals)
    except NaluScanError as exc:
        if log_failures:
            logger.debug("%s payload scan failed (%s): %s", codec.value, exc.kind.value, exc)
        raise


def _check_tag_header(end: int) -> None:
    if end < TAG_HEADER_SIZE:
        raise PrematureEndError(
            f"payload of {end} bytes is shorter than the {TAG_HEADER_SIZE}-byte tag header",
            position=0,
        )


def _premature(count: int, what: str, pos: int, got: int) -> PrematureEndError:
    return PrematureEndError(
        f"need {count} bytes for {what} at offset {pos}, only {got} available",
        position=pos,
    )


def _make_unit(pos: int, size: int, header: int, codec: Codec, end: int) -> NalUnitDescriptor:
    start = pos + NAL_LENGTH_SIZE
    nal_type = classify(header, codec, position=start)
    if size < codec.header_size:
        raise MalformedLengthError(
            f"NAL length {size} at offset {pos} is smaller than the {codec.header_size}-byte header",
            position=pos,
        )
    target = start + size
    if target > end:
        raise MalformedLengthError(
            f"NAL length {size} at offset {pos} runs {target - end} bytes past the payload end",
            position=pos,
        )
    return NalUnitDescriptor(start, size, nal_type)


def _log_unit(index: int, nalu: NalUnitDescriptor) -> None:
    logger.debug(
        "NAL #%d pos=%d size=%d type=%s(%d)",
        index,
        nalu.start_position,
        nalu.full_size,
        nalu.type.name,
        nalu.type.value,
    )


def _scan_buffer(mv: memoryview, codec: Codec, log_nals: bool) -> List[NalUnitDescriptor]:
    header_size = codec.header_size
    end = len(mv)
    _check_tag_header(end)
    pos = TAG_HEADER_SIZE

    result: List[NalUnitDescriptor] = []
    while pos < end:
        if pos + NAL_LENGTH_SIZE > end:
            raise _premature(NAL_LENGTH_SIZE, "NAL length", pos, end - pos)
        size = int.from_bytes(mv[pos : pos + NAL_LENGTH_SIZE], "big", signed=False)
        hdr = pos + NAL_LENGTH_SIZE
        if hdr + header_size > end:
            raise _premature(header_size, "NAL header", hdr, end - hdr)
        header = int.from_bytes(mv[hdr : hdr + header_size], "big", signed=False)
        nalu = _make_unit(pos, size, header, codec, end)
        result.append(nalu)
        if log_nals:
            _log_unit(len(result) - 1, nalu)
        pos = nalu.end_position
    return result


def _scan_stream(stream: BinaryIO, codec: Codec, log_nals: bool) -> List[NalUnitDescriptor]:
    header_size = codec.header_size
    end = _seek(stream, 0, io.SEEK_END)
    _check_tag_header(end)
    pos = _seek(stream, TAG_HEADER_SIZE)

    result: List[NalUnitDescriptor] = []
    while pos < end:
        size = int.from_bytes(_read_exact(stream, NAL_LENGTH_SIZE, "NAL length"), "big", signed=False)
        header = int.from_bytes(_read_exact(stream, header_size, "NAL header"), "big", signed=False)
        nalu = _make_unit(pos, size, header, codec, end)
        result.append(nalu)
        if log_nals:
            _log_unit(len(result) - 1, nalu)
        pos = _seek(stream, nalu.end_position)
    return result


def try_scan(
    data: PayloadSource,
    codec: CodecLike,
    *,
    scan_logging: Optional[ScanLogging] = None,
) -> Optional[List[NalUnitDescriptor]]:
    """Like ``scan`` but returns None when the payload cannot be scanned."""
    try:
        return scan(data, codec, scan_logging=scan_logging)
    except NaluScanError:
        logger.debug("try_scan: payload rejected", exc_info=True)
        return None


def drop_filler(nalus: Iterable[NalUnitDescriptor]) -> List[NalUnitDescriptor]:
    return [n for n in nalus if not n.type.is_filler_data()]


__all__ = [
    "NAL_LENGTH_SIZE",
    "TAG_HEADER_SIZE",
    "NalUnitDescriptor",
    "drop_filler",
    "scan",
    "try_scan",
]
