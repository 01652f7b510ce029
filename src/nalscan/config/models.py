"""Configuration dataclasses for the nalscan tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from nalscan.codec.nal_types import Codec
from nalscan.config.logging_policy import DebugPolicy, load_debug_policy
from nalscan.utils.env import env_bool, env_choice

OUTPUT_FORMATS = ("table", "json")


@dataclass(frozen=True)
class InspectConfig:
    """Settings for the payload inspection CLI."""

    codec: Codec = Codec.H264
    skip_filler: bool = False
    output: str = "table"  # "table" | "json"
    debug_policy: DebugPolicy = field(default_factory=lambda: load_debug_policy({}))


def load_inspect_config(env: Optional[Mapping[str, str]] = None) -> InspectConfig:
    """Resolve ``InspectConfig`` defaults from NALSCAN_* environment variables."""
    codec = env_choice("NALSCAN_CODEC", [c.value for c in Codec], Codec.H264.value, env=env)
    return InspectConfig(
        codec=Codec(codec),
        skip_filler=env_bool("NALSCAN_SKIP_FILLER", False, env=env),
        output=env_choice("NALSCAN_OUTPUT", OUTPUT_FORMATS, "table", env=env),
        debug_policy=load_debug_policy(env),
    )
