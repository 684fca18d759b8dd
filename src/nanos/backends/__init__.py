"""Backends for NANOS output generation (SLID text)."""

from .slid import MAX_SAFE_INTEGER, RedactMode, generate_slid, save_slid_file

__all__ = ["MAX_SAFE_INTEGER", "RedactMode", "generate_slid", "save_slid_file"]
