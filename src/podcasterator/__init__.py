"""Podcasterator - Serve an ordered set of local audio files as a podcast feed."""

__version__ = "0.1.0"
