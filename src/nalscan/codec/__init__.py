"""NAL unit scanning for length-prefixed H.264 / HEVC video tag payloads."""

from .errors import (
    InvalidHeaderBitError,
    MalformedLengthError,
    NaluScanError,
    PrematureEndError,
    ScanErrorKind,
    UnderlyingIoError,
)
from .nal_types import (
    Codec,
    H264NaluType,
    HevcNaluType,
    NalType,
    check_zero_bit,
    classify,
    nal_type_name,
    try_classify,
)
from .scanner import (
    NAL_LENGTH_SIZE,
    TAG_HEADER_SIZE,
    NalUnitDescriptor,
    drop_filler,
    scan,
    try_scan,
)
from .records import (
    descriptor_from_record,
    descriptor_to_record,
    descriptors_from_payload,
    descriptors_to_payload,
    dumps_descriptors,
    loads_descriptors,
)
from .digest import fill_hashes, nalu_digest

__all__ = [
    "Codec",
    "H264NaluType",
    "HevcNaluType",
    "InvalidHeaderBitError",
    "MalformedLengthError",
    "NAL_LENGTH_SIZE",
    "NalType",
    "NalUnitDescriptor",
    "NaluScanError",
    "PrematureEndError",
    "ScanErrorKind",
    "TAG_HEADER_SIZE",
    "UnderlyingIoError",
    "check_zero_bit",
    "classify",
    "descriptor_from_record",
    "descriptor_to_record",
    "descriptors_from_payload",
    "descriptors_to_payload",
    "drop_filler",
    "dumps_descriptors",
    "fill_hashes",
    "loads_descriptors",
    "nal_type_name",
    "nalu_digest",
    "scan",
    "try_classify",
    "try_scan",
]
