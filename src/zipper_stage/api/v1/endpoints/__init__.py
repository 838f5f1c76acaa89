"""API endpoint modules for version 1."""

from .zippclips import router as zippclips_router

__all__ = ["zippclips_router"]
