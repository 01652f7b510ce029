#!/usr/bin/env python3
"""
List the NAL units of one FLV video tag payload.

The input file must hold exactly one video tag body (the bytes after the
11-byte FLV tag header, starting with the frame type / codec id byte), as
dumped by a demuxer. Prints one row per unit, or JSON records with --output json.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, TextIO

from nalscan.codec import Codec, NaluScanError, drop_filler, dumps_descriptors, scan
from nalscan.codec.digest import fill_hashes
from nalscan.codec.nal_types import nal_type_name
from nalscan.codec.scanner import NalUnitDescriptor
from nalscan.codec.stats import type_bytes, type_histogram
from nalscan.config import OUTPUT_FORMATS, InspectConfig, load_inspect_config

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Iterable[str]], defaults: InspectConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List NAL units in an FLV video tag payload")
    parser.add_argument("payload", type=Path, help="File holding one video tag body")
    parser.add_argument(
        "--codec",
        type=Codec.parse,
        default=defaults.codec,
        help="h264 or hevc (default from NALSCAN_CODEC, else h264)",
    )
    parser.add_argument(
        "--skip-filler",
        action="store_true",
        default=defaults.skip_filler,
        help="Omit filler data units from the listing",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default=defaults.output,
        help="Listing format (default from NALSCAN_OUTPUT, else table)",
    )
    parser.add_argument("--hash", action="store_true", help="Fill the sha256 hash of each unit")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging and per-unit scan lines")
    return parser.parse_args(list(argv) if argv is not None else None)


def _write_table(nalus: list[NalUnitDescriptor], codec: Codec, out: TextIO) -> None:
    out.write(f"{'#':>4} {'offset':>10} {'size':>10} {'type':>4}  name\n")
    for idx, nalu in enumerate(nalus):
        flags = []
        if nalu.type.is_keyframe():
            flags.append("key")
        if nalu.type.is_parameter_set():
            flags.append("ps")
        if nalu.type.is_filler_data():
            flags.append("filler")
        suffix = f" [{','.join(flags)}]" if flags else ""
        digest = f" {nalu.hash}" if nalu.hash else ""
        out.write(
            f"{idx:>4} {nalu.start_position:>10} {nalu.full_size:>10} {nalu.type.value:>4}  "
            f"{nalu.type.name}{suffix}{digest}\n"
        )
    sizes = type_bytes(nalus)
    summary = ", ".join(
        f"{nal_type_name(codec, t)}={count} ({sizes[t]} B)" for t, count in type_histogram(nalus).items()
    )
    out.write(f"{len(nalus)} NAL units ({codec.value}){': ' + summary if summary else ''}\n")


def main(argv: Optional[Iterable[str]] = None, out: Optional[TextIO] = None) -> int:
    out = sys.stdout if out is None else out
    cfg = load_inspect_config()
    args = _parse_args(argv, cfg)
    logging.basicConfig(
        level=logging.DEBUG if args.debug or cfg.debug_policy.enabled else logging.INFO,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    scan_logging = cfg.debug_policy.logging
    if args.debug:
        scan_logging = replace(scan_logging, log_nals=True)

    try:
        data = args.payload.read_bytes()
    except OSError:
        logger.exception("Failed to read %s", args.payload)
        return 2

    try:
        nalus = scan(data, args.codec, scan_logging=scan_logging)
    except NaluScanError as exc:
        logger.error("%s: could not parse %s payload (%s): %s", args.payload, args.codec.value, exc.kind.value, exc)
        return 1

    if args.skip_filler:
        nalus = drop_filler(nalus)
    if args.hash:
        nalus = fill_hashes(data, nalus)

    if args.output == "json":
        out.write(dumps_descriptors(nalus, indent=2))
        out.write("\n")
    else:
        _write_table(nalus, args.codec, out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
