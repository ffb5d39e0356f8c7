"""Collaborators at the edge of the system: files, profile storage, notifications."""

from .extractor import FileContentExtractor
from .notifier import LoggingNotifier, Notifier
from .profile_store import InMemoryProfileStore, JsonProfileStore, ProfileStore

__all__ = [
    "FileContentExtractor",
    "Notifier",
    "LoggingNotifier",
    "ProfileStore",
    "InMemoryProfileStore",
    "JsonProfileStore",
]
