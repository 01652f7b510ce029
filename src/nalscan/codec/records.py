"""Flat diagnostic records for NAL unit descriptors.

Each descriptor maps to::

    {"startPosition": int, "fullSize": int, "isHevc": bool, "typeValue": int, "hash": str | None}

and lists keep scan order.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Sequence

from .nal_types import Codec, NalType
from .scanner import NalUnitDescriptor

_U32_MAX = 0xFFFFFFFF


def descriptor_to_record(nalu: NalUnitDescriptor) -> dict[str, Any]:
    return {
        "startPosition": nalu.start_position,
        "fullSize": nalu.full_size,
        "isHevc": nalu.type.is_hevc,
        "typeValue": nalu.type.value,
        "hash": nalu.hash,
    }


def _require_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"record field {key!r} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"record field {key!r} must be non-negative, got {value}")
    return value


def descriptor_from_record(data: Mapping[str, Any]) -> NalUnitDescriptor:
    if not isinstance(data, Mapping):
        raise ValueError(f"descriptor record must be a mapping, got {type(data).__name__}")
    start = _require_int(data, "startPosition")
    full_size = _require_int(data, "fullSize")
    if full_size > _U32_MAX:
        raise ValueError(f"record field 'fullSize' exceeds 32 bits: {full_size}")
    is_hevc = data.get("isHevc")
    if not isinstance(is_hevc, bool):
        raise ValueError(f"record field 'isHevc' must be a boolean, got {is_hevc!r}")
    codec = Codec.from_flag(is_hevc)
    type_value = _require_int(data, "typeValue")
    limit = 63 if codec is Codec.HEVC else 31
    if type_value > limit:
        raise ValueError(f"typeValue {type_value} out of range for {codec.value}")
    digest = data.get("hash")
    if digest is not None and not isinstance(digest, str):
        raise ValueError(f"record field 'hash' must be a string or null, got {digest!r}")
    nalu = NalUnitDescriptor(start, full_size, NalType(codec, type_value))
    if digest is not None:
        nalu.hash = digest
    return nalu


def descriptors_to_payload(nalus: Iterable[NalUnitDescriptor]) -> list[dict[str, Any]]:
    return [descriptor_to_record(n) for n in nalus]


def descriptors_from_payload(data: Sequence[Mapping[str, Any]] | None) -> list[NalUnitDescriptor]:
    if data is None:
        return []
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise ValueError("descriptor payload must be a list of records")
    return [descriptor_from_record(item) for item in data]


def dumps_descriptors(nalus: Iterable[NalUnitDescriptor], *, indent: int | None = None) -> str:
    return json.dumps(descriptors_to_payload(nalus), indent=indent)


def loads_descriptors(text: str) -> list[NalUnitDescriptor]:
    return descriptors_from_payload(json.loads(text))


__all__ = [
    "descriptor_from_record",
    "descriptor_to_record",
    "descriptors_from_payload",
    "descriptors_to_payload",
    "dumps_descriptors",
    "loads_descriptors",
]
