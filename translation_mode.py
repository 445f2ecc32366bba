import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class TranslationMode(str, Enum):
    SINGLE = "single"  # translate only the configured target language
    ALL = "all"        # translate every non-home language
    OFF = "off"


def parse_mode_command(text: str, prefix: str) -> Optional[str]:
    """Return the keyword token of a prefixed command, '' if there is none, None if not a command."""
    if not text.startswith(prefix):
        return None
    parts = text.split()
    if not parts or parts[0] != prefix:
        return None
    return parts[1] if len(parts) > 1 else ""


class ModeState:
    """Process-wide translation mode. Last write wins."""

    def __init__(self, initial: TranslationMode, admin_users):
        self._mode = initial
        self._admins = {user.lower() for user in admin_users}

    @property
    def mode(self) -> TranslationMode:
        return self._mode

    def is_admin(self, user: str) -> bool:
        return user.lower() in self._admins

    def set_mode(self, user: str, keyword: str) -> Optional[TranslationMode]:
        """Apply a mode keyword issued by `user`; returns the new mode, or None if nothing changed."""
        if not self.is_admin(user):
            logger.debug(f"Ignoring mode command from non-admin {user}")
            return None
        try:
            new_mode = TranslationMode(keyword)
        except ValueError:
            logger.debug(f"Ignoring unknown mode keyword '{keyword}' from {user}")
            return None
        self._mode = new_mode
        logger.info(f"Translation mode set to '{new_mode.value}' by {user}")
        return new_mode
