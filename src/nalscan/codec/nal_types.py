from __future__ import annotations

"""
NAL unit header classification for H.264 and HEVC.

Includes:
- Codec tag threaded through classification and scanning
- forbidden_zero_bit check and nal_unit_type extraction per codec
- nal_unit_type taxonomies (ITU-T H.264 table 7-1, H.265 table 7-1)
- Filler / parameter-set / keyframe predicates
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

from .errors import InvalidHeaderBitError


class Codec(str, Enum):
    H264 = "h264"
    HEVC = "hevc"

    @classmethod
    def from_flag(cls, is_hevc: bool) -> "Codec":
        return cls.HEVC if is_hevc else cls.H264

    @classmethod
    def parse(cls, text: str) -> "Codec":
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower().replace(".", "")
        codec = _CODEC_ALIASES.get(key)
        if codec is None:
            raise ValueError(f"unknown codec {text!r}; expected h264 or hevc")
        return codec

    @property
    def is_hevc(self) -> bool:
        return self is Codec.HEVC

    @property
    def header_size(self) -> int:
        # nal_unit_header(): 8 bits for H.264, 16 bits for HEVC
        return 2 if self is Codec.HEVC else 1


_CODEC_ALIASES = {
    "h264": Codec.H264,
    "avc": Codec.H264,
    "avc1": Codec.H264,
    "hevc": Codec.HEVC,
    "h265": Codec.HEVC,
    "hvc1": Codec.HEVC,
    "hev1": Codec.HEVC,
}

CodecLike = Union[Codec, bool]


def as_codec(codec: CodecLike) -> Codec:
    """Accept a ``Codec`` or the legacy ``is_hevc`` flag."""
    if isinstance(codec, Codec):
        return codec
    if isinstance(codec, bool):
        return Codec.from_flag(codec)
    raise TypeError(f"expected Codec or bool, got {type(codec).__name__}")


class H264NaluType(IntEnum):
    UNSPECIFIED_0 = 0
    CODED_SLICE_NON_IDR = 1
    CODED_SLICE_DATA_PARTITION_A = 2
    CODED_SLICE_DATA_PARTITION_B = 3
    CODED_SLICE_DATA_PARTITION_C = 4
    CODED_SLICE_IDR = 5
    SEI = 6
    SPS = 7
    PPS = 8
    ACCESS_UNIT_DELIMITER = 9
    END_OF_SEQUENCE = 10
    END_OF_STREAM = 11
    FILLER_DATA = 12
    SPS_EXTENSION = 13
    PREFIX_NAL_UNIT = 14
    SUBSET_SPS = 15
    DEPTH_PARAMETER_SET = 16
    RESERVED_17 = 17
    RESERVED_18 = 18
    SLICE_LAYER_WITHOUT_PARTITIONING = 19
    SLICE_LAYER_EXTENSION = 20
    SLICE_LAYER_EXTENSION_DEPTH = 21
    RESERVED_22 = 22
    RESERVED_23 = 23
    UNSPECIFIED_24 = 24
    UNSPECIFIED_25 = 25
    UNSPECIFIED_26 = 26
    UNSPECIFIED_27 = 27
    UNSPECIFIED_28 = 28
    UNSPECIFIED_29 = 29
    UNSPECIFIED_30 = 30
    UNSPECIFIED_31 = 31


class HevcNaluType(IntEnum):
    TRAIL_N = 0
    TRAIL_R = 1
    TSA_N = 2
    TSA_R = 3
    STSA_N = 4
    STSA_R = 5
    RADL_N = 6
    RADL_R = 7
    RASL_N = 8
    RASL_R = 9
    RSV_VCL_N10 = 10
    RSV_VCL_R11 = 11
    RSV_VCL_N12 = 12
    RSV_VCL_R13 = 13
    RSV_VCL_N14 = 14
    RSV_VCL_R15 = 15
    BLA_W_LP = 16
    BLA_W_RADL = 17
    BLA_N_LP = 18
    IDR_W_RADL = 19
    IDR_N_LP = 20
    CRA_NUT = 21
    RSV_IRAP_VCL22 = 22
    RSV_IRAP_VCL23 = 23
    RSV_VCL24 = 24
    RSV_VCL25 = 25
    RSV_VCL26 = 26
    RSV_VCL27 = 27
    RSV_VCL28 = 28
    RSV_VCL29 = 29
    RSV_VCL30 = 30
    RSV_VCL31 = 31
    VPS_NUT = 32
    SPS_NUT = 33
    PPS_NUT = 34
    AUD_NUT = 35
    EOS_NUT = 36
    EOB_NUT = 37
    FD_NUT = 38
    PREFIX_SEI_NUT = 39
    SUFFIX_SEI_NUT = 40
    RSV_NVCL41 = 41
    RSV_NVCL42 = 42
    RSV_NVCL43 = 43
    RSV_NVCL44 = 44
    RSV_NVCL45 = 45
    RSV_NVCL46 = 46
    RSV_NVCL47 = 47
    UNSPEC48 = 48
    UNSPEC49 = 49
    UNSPEC50 = 50
    UNSPEC51 = 51
    UNSPEC52 = 52
    UNSPEC53 = 53
    UNSPEC54 = 54
    UNSPEC55 = 55
    UNSPEC56 = 56
    UNSPEC57 = 57
    UNSPEC58 = 58
    UNSPEC59 = 59
    UNSPEC60 = 60
    UNSPEC61 = 61
    UNSPEC62 = 62
    UNSPEC63 = 63


_TAXONOMY = {
    Codec.H264: H264NaluType,
    Codec.HEVC: HevcNaluType,
}

_FILLER = {
    Codec.H264: H264NaluType.FILLER_DATA,
    Codec.HEVC: HevcNaluType.FD_NUT,
}

_PARAMETER_SETS = {
    Codec.H264: frozenset(
        (
            H264NaluType.SPS,
            H264NaluType.PPS,
            H264NaluType.SPS_EXTENSION,
            H264NaluType.SUBSET_SPS,
        )
    ),
    Codec.HEVC: frozenset((HevcNaluType.VPS_NUT, HevcNaluType.SPS_NUT, HevcNaluType.PPS_NUT)),
}


def nal_type_name(codec: CodecLike, value: int) -> str:
    table = _TAXONOMY[as_codec(codec)]
    try:
        return table(int(value)).name
    except ValueError:
        return f"UNKNOWN_{int(value)}"


@dataclass(frozen=True, order=True)
class NalType:
    """A (codec, nal_unit_type) pair."""

    codec: Codec
    value: int

    @property
    def is_hevc(self) -> bool:
        return self.codec.is_hevc

    @property
    def name(self) -> str:
        return nal_type_name(self.codec, self.value)

    def is_filler_data(self) -> bool:
        return self.value == _FILLER[self.codec]

    def is_parameter_set(self) -> bool:
        return self.value in _PARAMETER_SETS[self.codec]

    def is_keyframe(self) -> bool:
        if self.codec is Codec.HEVC:
            return HevcNaluType.BLA_W_LP <= self.value <= HevcNaluType.CRA_NUT  # IRAP
        return self.value == H264NaluType.CODED_SLICE_IDR


# --- Header bit layout ---


def check_zero_bit(header: int, codec: CodecLike) -> bool:
    """Return True when forbidden_zero_bit is clear."""
    if as_codec(codec) is Codec.HEVC:
        return (header & 0x8000) == 0
    return (header & 0x80) == 0


def nal_type_h264(header: int) -> int:
    # forbidden_zero_bit(1) nal_ref_idc(2) nal_unit_type(5)
    return header & 0x1F


def nal_type_hevc(header: int) -> int:
    # forbidden_zero_bit(1) nal_unit_type(6) nuh_layer_id(6) nuh_temporal_id_plus1(3)
    return (header >> 9) & 0x3F


def classify(header: int, codec: CodecLike, *, position: Optional[int] = None) -> NalType:
    """Interpret one NAL unit header.

    ``header`` is the single header byte for H.264 or the big-endian 16-bit
    header for HEVC. Raises ``InvalidHeaderBitError`` if forbidden_zero_bit
    is set.
    """
    codec = as_codec(codec)
    if not check_zero_bit(header, codec):
        raise InvalidHeaderBitError(header, codec, position=position)
    if codec is Codec.HEVC:
        return NalType(codec, nal_type_hevc(header))
    return NalType(codec, nal_type_h264(header))


def try_classify(header: int, codec: CodecLike) -> Optional[NalType]:
    try:
        return classify(header, codec)
    except InvalidHeaderBitError:
        return None


__all__ = [
    "Codec",
    "CodecLike",
    "H264NaluType",
    "HevcNaluType",
    "NalType",
    "as_codec",
    "check_zero_bit",
    "classify",
    "nal_type_h264",
    "nal_type_hevc",
    "nal_type_name",
    "try_classify",
]
