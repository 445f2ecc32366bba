import asyncio
import logging
import re
from typing import Awaitable, Callable, Container, FrozenSet, Iterable, Optional

import aiohttp

logger = logging.getLogger(__name__)

SEVENTV_USER_URL = "https://7tv.io/v3/users/twitch/{twitch_user_id}"

# Shorthand reactions that carry no translatable text. Checked in order, first hit wins.
COMMON_EXPRESSIONS = [
    re.compile(r'[A-Z]+'),                           # SHOUTING / all-caps emote names
    re.compile(r'[xX][dD]+', re.IGNORECASE),         # xD, XDDD
    re.compile(r'[hH][aA]+'),                        # haaa
    re.compile(r'[jJ][aA]+'),                        # jaja
    re.compile(r'[lL][oO][lL]+', re.IGNORECASE),     # lol, LOLLL
    re.compile(r'[k]+[e]+[k]+', re.IGNORECASE),      # kek, KEKW without the W
    re.compile(r'[w]+', re.IGNORECASE),              # wwww
    re.compile(r'\s*[;:][\'"]*[-~]*[)(DO0PpxX]+\s*'),  # :) ;-D :'(
]


def is_emote(text: str, emote_names: Container[str] = frozenset(), short_length: int = 3) -> bool:
    """True if the (trimmed) text is an emote, a shorthand reaction, or too short to matter."""
    if text in emote_names:
        return True
    if any(pattern.fullmatch(text) for pattern in COMMON_EXPRESSIONS):
        return True
    return len(text) <= short_length


class EmoteRegistry:
    """Current emote-name snapshot. Readers take `snapshot`; `replace` swaps it whole."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: FrozenSet[str] = frozenset(names)

    @property
    def snapshot(self) -> FrozenSet[str]:
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def replace(self, names: Iterable[str]) -> None:
        self._names = frozenset(names)

    async def refresh(self, fetch: Callable[[str], Awaitable[FrozenSet[str]]], channel_id: str) -> int:
        """Re-fetch emote names; an empty fetch keeps the previous snapshot."""
        names = await fetch(channel_id)
        if not names:
            logger.warning(f"No emotes fetched for channel {channel_id}, keeping {len(self._names)} known emotes")
            return len(self._names)
        self.replace(names)
        logger.info(f"Loaded {len(names)} 7TV emotes for channel {channel_id}")
        return len(names)


async def fetch_7tv_emotes(twitch_user_id: str, session: Optional[aiohttp.ClientSession] = None,
                           timeout: float = 10) -> FrozenSet[str]:
    """Fetch the channel's active 7TV emote-set names. Returns an empty set on any failure."""
    url = SEVENTV_USER_URL.format(twitch_user_id=twitch_user_id)
    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout))
    try:
        async with session.get(url) as resp:
            if resp.status != 200:
                logger.warning(f"7TV returned HTTP {resp.status} for {twitch_user_id}")
                return frozenset()
            data = await resp.json()
        emotes = (data.get("emote_set") or {}).get("emotes") or []
        return frozenset(emote["name"] for emote in emotes if emote.get("name"))
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, AttributeError) as e:
        logger.error(f"Error fetching 7TV emotes: {e}", exc_info=True)
        return frozenset()
    finally:
        if owns_session:
            await session.close()
