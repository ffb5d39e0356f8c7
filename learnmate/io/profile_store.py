"""Persistence of the learner's learning style preference."""

import json
import logging
from pathlib import Path
from typing import Protocol

from learnmate.models.profile import LearningStyle

logger = logging.getLogger(__name__)

DEFAULT_STYLE = LearningStyle.VISUAL


class ProfileStore(Protocol):
    """Loads and saves the learning style between sessions."""

    def load(self) -> LearningStyle: ...

    def save(self, style: LearningStyle) -> None: ...


class InMemoryProfileStore:
    """Keeps the preference for the lifetime of the process only."""

    def __init__(self, style: LearningStyle | None = None):
        self.style = style
        self.saved: list[LearningStyle] = []

    def load(self) -> LearningStyle:
        return self.style or DEFAULT_STYLE

    def save(self, style: LearningStyle) -> None:
        self.style = LearningStyle(style)
        self.saved.append(self.style)


class JsonProfileStore:
    """Stores the preference as a small JSON document on disk."""

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: JSON file to read and write; `~` is expanded
        """
        self.path = Path(path).expanduser()

    def load(self) -> LearningStyle:
        """
        Read the stored style.

        Returns:
            The stored style, or visual if nothing usable is stored
        """
        if not self.path.exists():
            return DEFAULT_STYLE

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return LearningStyle(data["learning_style"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable profile at {self.path}: {e}")
            return DEFAULT_STYLE

    def save(self, style: LearningStyle) -> None:
        """Write the style to a sibling temp file, then swap it into place."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"learning_style": LearningStyle(style).value}
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Saved learning style {payload['learning_style']} to {self.path}")
