"""Configured codec API for HTML entity encoding and decoding."""

from .codec import HTMLEntityCodec

__all__ = ["HTMLEntityCodec"]
