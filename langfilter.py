import logging
import re
from typing import Iterable

import langdetect
from langdetect import DetectorFactory

logger = logging.getLogger(__name__)

# same text, same guess
DetectorFactory.seed = 0

UNDETERMINED = "und"

_WHITESPACE = re.compile(r'\s+')


def normalize(text: str) -> str:
    """Keep only letters and single spaces (digits, punctuation and emoji are dropped)."""
    letters = "".join(char for char in text if char.isalpha() or char.isspace())
    return _WHITESPACE.sub(" ", letters).strip()


def has_enough_signal(normalized: str, min_length: int = 4) -> bool:
    return len(normalized) >= min_length


def primary_subtag(code: str) -> str:
    """'pt-BR' -> 'pt', 'ZH-CN' -> 'zh'."""
    return code.strip().lower().replace("_", "-").split("-")[0]


def guess_language_family(normalized: str, min_length: int = 10) -> str:
    """Offline n-gram guess used only to reject obvious home-language chat early.

    Text shorter than `min_length` is undetermined: langdetect always names some
    language, even for a single short word.
    """
    if len(normalized) < min_length:
        logger.debug(f"Too short for a local guess: '{normalized}'")
        return UNDETERMINED
    try:
        langs = langdetect.detect_langs(normalized)
    except langdetect.LangDetectException:
        logger.debug(f"langdetect cannot guess a language for: '{normalized}'")
        return UNDETERMINED
    if not langs:
        return UNDETERMINED
    best = langs[0]
    logger.debug(f"langdetect guessed: {best.lang} (prob: {best.prob:.4f})")
    return best.lang


def is_home_guess(tag: str, home_languages: Iterable[str]) -> bool:
    if tag == UNDETERMINED:
        return True
    return primary_subtag(tag) in {primary_subtag(lang) for lang in home_languages}
