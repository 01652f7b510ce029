from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from nalscan.tools.inspect_payload import main

H264_TAG = b"\x17\x01\x00\x00\x00"
HEVC_TAG = b"\x1c\x01\x00\x00\x00"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NALSCAN_CODEC", "NALSCAN_SKIP_FILLER", "NALSCAN_OUTPUT", "NALSCAN_DEBUG"):
        monkeypatch.delenv(name, raising=False)


def avcc_pack(nals: list[bytes]) -> bytes:
    out = bytearray()
    for n in nals:
        out.extend(len(n).to_bytes(4, "big"))
        out.extend(n)
    return bytes(out)


def _write(tmp_path: Path, data: bytes) -> Path:
    path = tmp_path / "tag.bin"
    path.write_bytes(data)
    return path


def test_table_output(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x67\x42", b"\x68\xce", b"\x65\x88\x84", b"\x0c\xff"]))
    out = io.StringIO()
    assert main([str(path)], out=out) == 0
    text = out.getvalue()
    assert "SPS [ps]" in text
    assert "CODED_SLICE_IDR [key]" in text
    assert "FILLER_DATA [filler]" in text
    assert "4 NAL units (h264)" in text


def test_json_skip_filler(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x67\x42", b"\x0c\xff", b"\x41\x9a"]))
    out = io.StringIO()
    assert main([str(path), "--output", "json", "--skip-filler"], out=out) == 0
    records = json.loads(out.getvalue())
    assert [r["typeValue"] for r in records] == [7, 1]
    assert records[0] == {"startPosition": 9, "fullSize": 2, "isHevc": False, "typeValue": 7, "hash": None}


def test_hevc_with_hash(tmp_path: Path) -> None:
    vps = (32 << 9 | 1).to_bytes(2, "big") + b"\x0c"
    path = _write(tmp_path, HEVC_TAG + avcc_pack([vps]))
    out = io.StringIO()
    assert main([str(path), "--codec", "hevc", "--output", "json", "--hash"], out=out) == 0
    records = json.loads(out.getvalue())
    assert records[0]["isHevc"] is True
    assert records[0]["typeValue"] == 32
    assert len(records[0]["hash"]) == 64


def test_codec_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NALSCAN_CODEC", "hevc")
    sps = (33 << 9 | 1).to_bytes(2, "big")
    path = _write(tmp_path, HEVC_TAG + avcc_pack([sps]))
    out = io.StringIO()
    assert main([str(path)], out=out) == 0
    assert "SPS_NUT" in out.getvalue()


def test_scan_failure_exit_code(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x85\x00"]))
    out = io.StringIO()
    assert main([str(path)], out=out) == 1
    assert out.getvalue() == ""


def test_missing_file(tmp_path: Path) -> None:
    assert main([str(tmp_path / "absent.bin")], out=io.StringIO()) == 2


def test_bad_codec_argument(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG)
    with pytest.raises(SystemExit):
        main([str(path), "--codec", "av1"], out=io.StringIO())


def test_output_flag_overrides_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NALSCAN_OUTPUT", "json")
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x67\x42"]))
    out = io.StringIO()
    assert main([str(path)], out=out) == 0
    assert json.loads(out.getvalue())[0]["typeValue"] == 7

    out = io.StringIO()
    assert main([str(path), "--output", "table"], out=out) == 0
    assert "1 NAL units (h264)" in out.getvalue()


def test_unknown_output_format_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG)
    with pytest.raises(SystemExit):
        main([str(path), "--output", "yaml"], out=io.StringIO())


def test_debug_flag_logs_each_unit(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="nalscan.codec.scanner")
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x67\x42", b"\x65\x88\x84"]))
    assert main([str(path)], out=io.StringIO()) == 0
    assert "NAL #0" not in caplog.text

    caplog.clear()
    assert main([str(path), "--debug"], out=io.StringIO()) == 0
    assert "NAL #0 pos=9 size=2 type=SPS(7)" in caplog.text
    assert "NAL #1 pos=15 size=3 type=CODED_SLICE_IDR(5)" in caplog.text


def test_table_summary_counts_bytes(tmp_path: Path) -> None:
    path = _write(tmp_path, H264_TAG + avcc_pack([b"\x67\x42", b"\x41\x9a\x00", b"\x41\x9a"]))
    out = io.StringIO()
    assert main([str(path)], out=out) == 0
    summary = out.getvalue().splitlines()[-1]
    assert "SPS=1 (2 B)" in summary
    assert "CODED_SLICE_NON_IDR=2 (5 B)" in summary
