"""Configuration dataclasses for nalscan."""

from .logging_policy import DebugPolicy, ScanLogging, load_debug_policy
from .models import OUTPUT_FORMATS, InspectConfig, load_inspect_config

__all__ = [
    "DebugPolicy",
    "InspectConfig",
    "OUTPUT_FORMATS",
    "ScanLogging",
    "load_debug_policy",
    "load_inspect_config",
]
