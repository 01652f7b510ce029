"""Content digests for the ``NalUnitDescriptor.hash`` slot.

The scanner leaves ``hash`` empty. Deduplication layers that need to compare
units across tags fill it here, from the same buffer the scan ran over.
"""

from __future__ import annotations

import hashlib
from typing import Iterable, List

from .scanner import BytesLike, NalUnitDescriptor


def nalu_digest(buffer: BytesLike, nalu: NalUnitDescriptor) -> str:
    h = hashlib.sha256()
    h.update(nalu.payload(buffer))
    return h.hexdigest()


def fill_hashes(buffer: BytesLike, nalus: Iterable[NalUnitDescriptor]) -> List[NalUnitDescriptor]:
    """Set ``hash`` on every descriptor that does not have one yet."""
    out = list(nalus)
    for nalu in out:
        if nalu.hash is None:
            nalu.hash = nalu_digest(buffer, nalu)
    return out
