"""Input/output helpers for the genome viewer state."""

from .parameters import RegionParameter, StripParameter, format_regions, parse_regions
from .settings import ALIGNMENT_POLICIES, ViewerSettings, load_settings, save_settings

__all__ = [
    "ALIGNMENT_POLICIES",
    "ViewerSettings",
    "load_settings",
    "save_settings",
    "RegionParameter",
    "StripParameter",
    "format_regions",
    "parse_regions",
]
