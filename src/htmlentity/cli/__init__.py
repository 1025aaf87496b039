"""Command-line interface module for htmlentity.

This module provides CLI tools for encoding and decoding files and for
inspecting the entity table.
"""

from .main import main

__all__ = ["main"]
