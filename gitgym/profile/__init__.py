"""Persisted player progress."""

from .store import Profile, ProfileStore, SETTINGS

__all__ = [
    "Profile",
    "ProfileStore",
    "SETTINGS",
]
