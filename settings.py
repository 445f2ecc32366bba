import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

import config  # user-editable settings
from translation_mode import TranslationMode

logger = logging.getLogger(__name__)

REQUIRED_ENV = ("TWITCH_CLIENT_ID", "TWITCH_ACCESS_TOKEN", "TWITCH_CHANNEL")


@dataclass(frozen=True)
class Settings:
    """Startup configuration. Read once, never mutated."""
    client_id: str
    access_token: str
    channel: str
    client_secret: Optional[str] = None
    admin_users: Tuple[str, ...] = ()
    default_mode: TranslationMode = TranslationMode.SINGLE
    target_language: str = "pl"
    language_name: str = "the configured language"
    home_language: str = "es"
    home_languages: Tuple[str, ...] = ("en", "es")
    deepl_api_key: Optional[str] = None
    deepl_formality: str = "prefer_less"
    deepl_detection_target: str = "EN-US"
    service_timeout: float = 10.0
    min_signal_length: int = 4
    min_guess_length: int = 10
    short_message_length: int = 3
    command_prefix: str = "!translate"
    ignore_users: Tuple[str, ...] = ()
    ack_single: str = "Translating {language_name}."
    ack_all: str = "Translating all languages."
    ack_off: str = "Translations disabled."
    log_level: str = "INFO"


def _split_users(raw: str) -> Tuple[str, ...]:
    return tuple(user.strip().lower() for user in raw.split(",") if user.strip())


def _parse_mode(raw: str) -> TranslationMode:
    try:
        return TranslationMode(raw.strip().lower())
    except ValueError:
        logger.warning(f"Unknown DEFAULT_TRANSLATION_MODE '{raw}', falling back to '{TranslationMode.SINGLE.value}'")
        return TranslationMode.SINGLE


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (.env included) and config.py."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [name for name in REQUIRED_ENV if not environ.get(name)]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        client_id=environ["TWITCH_CLIENT_ID"],
        access_token=environ["TWITCH_ACCESS_TOKEN"],
        channel=environ["TWITCH_CHANNEL"].lower(),
        client_secret=environ.get("TWITCH_CLIENT_SECRET") or None,
        admin_users=_split_users(environ.get("ADMIN_USERS", "")),
        default_mode=_parse_mode(environ.get("DEFAULT_TRANSLATION_MODE", TranslationMode.SINGLE.value)),
        target_language=environ.get("TARGET_LANGUAGE", "pl").strip().lower(),
        language_name=environ.get("LANGUAGE_NAME", "the configured language"),
        home_language=environ.get("HOME_LANGUAGE", "es").strip().lower(),
        home_languages=tuple(lang.lower() for lang in getattr(config, 'HOME_LANGUAGES', ["en", "es"])),
        deepl_api_key=environ.get("DEEPL_API_KEY") or None,
        deepl_formality=getattr(config, 'DEEPL_FORMALITY', "prefer_less"),
        deepl_detection_target=getattr(config, 'DEEPL_DETECTION_TARGET', "EN-US"),
        service_timeout=float(getattr(config, 'SERVICE_TIMEOUT', 10)),
        min_signal_length=getattr(config, 'MIN_SIGNAL_LENGTH', 4),
        min_guess_length=getattr(config, 'MIN_GUESS_LENGTH', 10),
        short_message_length=getattr(config, 'SHORT_MESSAGE_LENGTH', 3),
        command_prefix=getattr(config, 'COMMAND_PREFIX', "!translate"),
        ignore_users=tuple(user.lower() for user in getattr(config, 'IGNORE_USERS', [])),
        ack_single=getattr(config, 'ACK_SINGLE', "Translating {language_name}."),
        ack_all=getattr(config, 'ACK_ALL', "Translating all languages."),
        ack_off=getattr(config, 'ACK_OFF', "Translations disabled."),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
