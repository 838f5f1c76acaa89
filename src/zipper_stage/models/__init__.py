"""SQLAlchemy models for the Zipper Stage service."""

from .profile import Profile
from .zippclip import Zippclip

__all__ = ["Profile", "Zippclip"]
