"""Version 1 API endpoints."""

from .endpoints import zippclips_router

__all__ = ["zippclips_router"]
