"""Crypto trading simulator backed by a live ticker feed."""

__version__ = "0.1.0"
