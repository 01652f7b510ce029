from __future__ import annotations

import hashlib

from nalscan.codec import Codec, fill_hashes, nalu_digest, scan
from nalscan.codec.stats import type_bytes, type_histogram

TAG = b"\x17\x01\x00\x00\x00"


def h264_nal(nal_type: int, payload: bytes = b"\x11\x22\x33") -> bytes:
    b0 = ((3 & 0x3) << 5) | (nal_type & 0x1F)
    return bytes([b0]) + payload


def avcc_pack(nals: list[bytes]) -> bytes:
    out = bytearray()
    for n in nals:
        out.extend(len(n).to_bytes(4, "big"))
        out.extend(n)
    return bytes(out)


def test_nalu_digest_covers_unit_bytes() -> None:
    nal = h264_nal(5, b"\x10" * 32)
    data = TAG + avcc_pack([h264_nal(7), nal])
    nalu = scan(data, Codec.H264)[1]
    assert nalu_digest(data, nalu) == hashlib.sha256(nal).hexdigest()


def test_fill_hashes_keeps_existing() -> None:
    data = TAG + avcc_pack([h264_nal(7), h264_nal(8), h264_nal(7)])
    nalus = scan(data, Codec.H264)
    nalus[1].hash = "preset"
    filled = fill_hashes(data, nalus)
    assert filled[1].hash == "preset"
    # identical units hash identically
    assert filled[0].hash == filled[2].hash
    assert filled[0].hash is not None and len(filled[0].hash) == 64


def test_scan_leaves_hash_empty() -> None:
    data = TAG + avcc_pack([h264_nal(7)])
    assert scan(data, Codec.H264)[0].hash is None


def test_type_histogram() -> None:
    data = TAG + avcc_pack([h264_nal(7), h264_nal(8), h264_nal(1), h264_nal(1, b"\x00" * 10), h264_nal(12)])
    nalus = scan(data, Codec.H264)
    assert type_histogram(nalus) == {1: 2, 7: 1, 8: 1, 12: 1}
    assert type_bytes(nalus) == {1: 4 + 11, 7: 4, 8: 4, 12: 4}


def test_empty_histogram() -> None:
    assert type_histogram([]) == {}
    assert type_bytes([]) == {}
