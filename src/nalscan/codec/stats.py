"""Per-type summaries over scanned NAL units."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .scanner import NalUnitDescriptor


def type_histogram(nalus: Sequence[NalUnitDescriptor]) -> dict[int, int]:
    """Return {nal_unit_type: count} for the types that occur, ascending."""
    if not nalus:
        return {}
    values = np.fromiter((n.type.value for n in nalus), dtype=np.int64, count=len(nalus))
    counts = np.bincount(values, minlength=64)
    return {int(t): int(counts[t]) for t in np.flatnonzero(counts)}


def type_bytes(nalus: Sequence[NalUnitDescriptor]) -> dict[int, int]:
    """Return {nal_unit_type: total full_size} for the types that occur."""
    if not nalus:
        return {}
    values = np.fromiter((n.type.value for n in nalus), dtype=np.int64, count=len(nalus))
    sizes = np.fromiter((n.full_size for n in nalus), dtype=np.int64, count=len(nalus))
    totals = np.bincount(values, weights=sizes, minlength=64)
    present = np.flatnonzero(np.bincount(values, minlength=64))
    return {int(t): int(totals[t]) for t in present}

