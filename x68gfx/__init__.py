"""Palette, clipping, colour reduction, image buffer and graphic plane helpers for X68000-style graphics."""

__version__ = "0.1.0"
__all__ = ["clipping", "imagebuf", "palette", "quantize", "vram"]