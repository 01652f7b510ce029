"""
nalscan: NAL unit scanning for FLV video tag payloads.

Walks the AVCC (length-prefixed) H.264 / HEVC units of a single video tag
body and reports each unit's offset, size and nal_unit_type.
"""

from nalscan.codec import (
    Codec,
    NalType,
    NalUnitDescriptor,
    NaluScanError,
    ScanErrorKind,
    classify,
    scan,
    try_scan,
)

__version__ = "0.1.0"
__all__ = [
    "Codec",
    "NalType",
    "NalUnitDescriptor",
    "NaluScanError",
    "ScanErrorKind",
    "__version__",
    "classify",
    "scan",
    "try_scan",
]
