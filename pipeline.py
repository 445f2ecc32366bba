import logging
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Optional, Sequence

from cascade import ServiceLeg, run_cascade
from emotes import EmoteRegistry, is_emote
from langfilter import guess_language_family, has_enough_signal, is_home_guess, normalize, primary_subtag
from settings import Settings
from translation_mode import ModeState, TranslationMode, parse_mode_command

logger = logging.getLogger(__name__)

SendFunc = Callable[[str, str], Awaitable[None]]


@dataclass(frozen=True)
class ChatMessage:
    author: str
    raw_text: str
    channel: str


class MessagePipeline:
    """Decides, per chat line, whether to translate it, and posts the translation back.

    Gates run cheapest first and stop at the first rejection:
    own message -> admin command -> mode off -> emote -> too little text ->
    local guess says home language -> remote detection -> mode language match ->
    remote translation -> send.
    """

    def __init__(self, settings: Settings, mode_state: ModeState, emotes: EmoteRegistry,
                 detectors: Sequence[ServiceLeg], translators: Sequence[ServiceLeg], send: SendFunc,
                 bot_name: Optional[str] = None,
                 guesser: Optional[Callable[[str], str]] = None):
        self.settings = settings
        self.mode_state = mode_state
        self.emotes = emotes
        self.detectors = list(detectors)
        self.translators = list(translators)
        self.send = send
        self.bot_name = bot_name
        self.guesser = guesser or partial(guess_language_family, min_length=settings.min_guess_length)
        self._home = {primary_subtag(lang) for lang in settings.home_languages}

    async def process(self, message: ChatMessage) -> Optional[str]:
        """Run the pipeline for one message. Returns the text sent to chat, if any. Never raises."""
        try:
            return await self._run(message)
        except Exception as e:
            logger.error(f"Error while processing message from {message.author} in {message.channel}: {e}",
                         exc_info=True)
            return None

    def is_own_message(self, author: str) -> bool:
        author = author.lower()
        if self.bot_name and author == self.bot_name.lower():
            return True
        return author in self.settings.ignore_users

    def accepts_language(self, code: Optional[str]) -> bool:
        """Policy gate on the authoritative detection result."""
        if not code:
            return False
        lang = primary_subtag(code)
        if lang in self._home:
            return False
        mode = self.mode_state.mode
        if mode is TranslationMode.SINGLE:
            return lang == primary_subtag(self.settings.target_language)
        return mode is TranslationMode.ALL

    async def _run(self, message: ChatMessage) -> Optional[str]:
        if self.is_own_message(message.author):
            logger.debug(f"Skipping own/ignored user: {message.author}")
            return None

        if await self._handle_command(message):
            return None

        if self.mode_state.mode is TranslationMode.OFF:
            logger.debug("Translation is off, skipping")
            return None

        text = message.raw_text.strip()
        if is_emote(text, self.emotes.snapshot, self.settings.short_message_length):
            logger.debug(f"Skipping emote/reaction: {text}")
            return None

        normalized = normalize(text)
        if not has_enough_signal(normalized, self.settings.min_signal_length):
            logger.debug(f"Skipping, not enough text to detect: {text}")
            return None

        guess = self.guesser(normalized)
        if is_home_guess(guess, self._home):
            logger.debug(f"Skipping, preliminary guess '{guess}': {text}")
            return None

        detected = await run_cascade(self.detectors, text, "detection")
        if not self.accepts_language(detected):
            logger.debug(f"Skipping, detected language '{detected}' not translated in mode "
                         f"'{self.mode_state.mode.value}': {text}")
            return None

        translated = await run_cascade(self.translators, text, "translation")
        if not translated:
            logger.warning(f"Translation failed on every service: {text}")
            return None

        output = f"@{message.author}: {translated}"
        await self.send(message.channel, output)
        logger.info(f"Translated [{message.channel}] {message.author} ({detected}) -> {translated}")
        return output

    async def _handle_command(self, message: ChatMessage) -> bool:
        """Apply an admin mode command. Returns True if the message was consumed."""
        keyword = parse_mode_command(message.raw_text.strip(), self.settings.command_prefix)
        if keyword is None or not self.mode_state.is_admin(message.author):
            return False

        new_mode = self.mode_state.set_mode(message.author, keyword)
        if new_mode is not None:
            await self.send(message.channel, self._acknowledgement(new_mode))
        return True

    def _acknowledgement(self, mode: TranslationMode) -> str:
        if mode is TranslationMode.SINGLE:
            return self.settings.ack_single.format(language_name=self.settings.language_name)
        if mode is TranslationMode.ALL:
            return self.settings.ack_all
        return self.settings.ack_off
