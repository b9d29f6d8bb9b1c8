"""
A media cataloguing module for scene-named containers.

This module extracts release metadata from scene-style filenames and keeps the
provenance packed into encoded container names in a sidecar document, so a
container can be renamed to a clean name and later renamed back.

The module is organized into several categories:
- Parsing scene filenames into release records (movies and TV episodes).
- Encoding and decoding sidecar documents and encoded container names.
- Batch cataloguing and reverting of a media directory.
- Utility functions for logging, escaping, probing and hashing.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
