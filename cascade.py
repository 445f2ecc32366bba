import logging
import re
from typing import Awaitable, Callable, List, NamedTuple, Optional, Sequence

import aiohttp
from googletrans import Translator

logger = logging.getLogger(__name__)

DEEPL_FREE_URL = "https://api-free.deepl.com/v2/translate"
DEEPL_PRO_URL = "https://api.deepl.com/v2/translate"
DEEPL_QUOTA_STATUSES = (429, 456)  # 456: character quota exhausted


class QuotaExceeded(Exception):
    """The provider refuses further calls until its quota resets."""


class ServiceFailure(Exception):
    """The provider answered with an error status or an unreadable payload."""


class ServiceLeg(NamedTuple):
    name: str
    call: Callable[[str], Awaitable[Optional[str]]]


async def run_cascade(legs: Sequence[ServiceLeg], text: str, kind: str) -> Optional[str]:
    """Try each leg in order and return the first non-empty result, or None if every leg fails."""
    for leg in legs:
        try:
            result = await leg.call(text)
        except QuotaExceeded as e:
            logger.warning(f"{leg.name} {kind} quota exceeded, trying next service: {e}")
            continue
        except Exception as e:
            logger.error(f"{leg.name} {kind} failed: {e}", exc_info=True)
            continue
        if result:
            logger.debug(f"{leg.name} {kind} succeeded: '{text}' -> '{result}'")
            return result
        logger.debug(f"{leg.name} {kind} returned no result for: '{text}'")
    return None


class DeepLClient:
    """Minimal DeepL v2 client. Detection is a translate call whose detected source language is kept."""

    def __init__(self, api_key: str, formality: str = "prefer_less", detection_target: str = "EN-US",
                 timeout: float = 10, session: Optional[aiohttp.ClientSession] = None):
        self.api_key = api_key
        self.formality = formality
        self.detection_target = detection_target
        self.timeout = timeout
        self.url = DEEPL_FREE_URL if api_key.endswith(":fx") else DEEPL_PRO_URL
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def _translate(self, text: str, target_lang: str, **extra: str) -> dict:
        data = {"text": text, "target_lang": target_lang, **extra}
        headers = {"Authorization": f"DeepL-Auth-Key {self.api_key}"}
        async with self._get_session().post(self.url, data=data, headers=headers) as resp:
            if resp.status in DEEPL_QUOTA_STATUSES:
                raise QuotaExceeded(f"DeepL HTTP {resp.status}")
            if resp.status != 200:
                raise ServiceFailure(f"DeepL HTTP {resp.status}")
            payload = await resp.json()
        try:
            return payload["translations"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise ServiceFailure(f"Unexpected DeepL response: {payload!r}") from e

    async def detect(self, text: str) -> Optional[str]:
        translation = await self._translate(text, self.detection_target)
        lang = translation.get("detected_source_language")
        return lang.lower() if lang else None

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        translation = await self._translate(text, target_language.upper(), formality=self.formality)
        return translation.get("text")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()


# googletrans: 'Unexpected status code "429" from [...]'
_RATE_LIMITED = re.compile(r'status code "429"')


def _is_rate_limited(error: Exception) -> bool:
    return _RATE_LIMITED.search(str(error)) is not None


class GoogleClient:
    """googletrans wrapper raising the cascade's error types."""

    def __init__(self, translator: Optional[Translator] = None, timeout: float = 10):
        if translator is None:
            translator = Translator(raise_exception=True, timeout=timeout)
        self.translator = translator

    async def detect(self, text: str) -> Optional[str]:
        try:
            detection = await self.translator.detect(text)
        except Exception as e:
            if _is_rate_limited(e):
                raise QuotaExceeded(f"Google Translate rate limit: {e}") from e
            raise ServiceFailure(f"Google detection error: {e}") from e
        lang = detection.lang[0] if isinstance(detection.lang, list) else detection.lang
        return lang.lower() if lang else None

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        try:
            translation = await self.translator.translate(text, dest=target_language)
        except Exception as e:
            if _is_rate_limited(e):
                raise QuotaExceeded(f"Google Translate rate limit: {e}") from e
            raise ServiceFailure(f"Google translation error: {e}") from e
        return translation.text if translation else None

    async def close(self) -> None:
        client = getattr(self.translator, "client", None)
        if client is not None:
            await client.aclose()


def detection_legs(google: GoogleClient, deepl: Optional[DeepLClient] = None) -> List[ServiceLeg]:
    legs = []
    if deepl is not None:
        legs.append(ServiceLeg("DeepL", deepl.detect))
    legs.append(ServiceLeg("Google", google.detect))
    return legs


def translation_legs(home_language: str, google: GoogleClient,
                     deepl: Optional[DeepLClient] = None) -> List[ServiceLeg]:
    async def deepl_translate(text: str) -> Optional[str]:
        return await deepl.translate(text, home_language)

    async def google_translate(text: str) -> Optional[str]:
        return await google.translate(text, home_language)

    legs = []
    if deepl is not None:
        legs.append(ServiceLeg("DeepL", deepl_translate))
    legs.append(ServiceLeg("Google", google_translate))
    return legs
