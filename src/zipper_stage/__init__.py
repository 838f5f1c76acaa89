"""Zipper Stage: response-chain ("zipper") traversal for short-form clips."""

__version__ = "0.1.0"
