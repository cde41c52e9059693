"""Macro encoding, decoding, playback, storage, switch debouncing and a command console for a programmable key paddle."""

__version__ = "1.0.0"
__all__ = ["tables", "encode", "decode", "engine", "storage", "switches", "console"]