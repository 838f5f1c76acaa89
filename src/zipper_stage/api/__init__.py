"""HTTP API for Zipper Stage."""
