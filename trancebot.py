import logging
from typing import Optional

from twitchio.ext import commands

from cascade import DeepLClient, GoogleClient, detection_legs, translation_legs
from emotes import EmoteRegistry, fetch_7tv_emotes
from pipeline import ChatMessage, MessagePipeline
from settings import Settings, load_settings
from translation_mode import ModeState

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


# --- Bot class ---
class Bot(commands.Bot):
    """Twitch side of the relay: feeds chat lines into the pipeline and posts what it returns."""

    def __init__(self, settings: Settings, deepl: Optional[DeepLClient] = None):
        super().__init__(token=settings.access_token, client_id=settings.client_id,
                         client_secret=settings.client_secret, prefix='!',
                         initial_channels=[settings.channel])
        self.settings = settings
        self.deepl = deepl
        self.google = GoogleClient(timeout=settings.service_timeout)
        self.emotes = EmoteRegistry()
        self.pipeline = build_pipeline(settings, self.send_chat, self.emotes, deepl, self.google)
        logger.info("Bot initialized.")
        logger.info(f"Channel: {settings.channel}")
        logger.info(f"Admins: {list(settings.admin_users)}")
        logger.info(f"Mode: {self.pipeline.mode_state.mode.value} (target: {settings.target_language})")
        logger.info(f"Home languages: {list(settings.home_languages)} -> output {settings.home_language}")
        logger.info(f"DeepL enabled: {deepl is not None}")
        logger.info(f"Ignored users: {list(settings.ignore_users)}")

    async def event_ready(self):
        logger.info(f'Logged in as | {self.nick}')
        self.pipeline.bot_name = self.nick
        await self.load_emotes()
        logger.info("Translation bot connected successfully")

    async def load_emotes(self) -> int:
        try:
            users = await self.fetch_users(names=[self.settings.channel])
        except Exception as e:
            logger.error(f"Could not resolve channel id for {self.settings.channel}: {e}", exc_info=True)
            return len(self.emotes)
        if not users:
            logger.warning(f"Channel {self.settings.channel} not found, no 7TV emotes loaded")
            return len(self.emotes)
        return await self.emotes.refresh(self._fetch_emotes, str(users[0].id))

    async def _fetch_emotes(self, twitch_user_id: str):
        return await fetch_7tv_emotes(twitch_user_id, timeout=self.settings.service_timeout)

    async def event_message(self, message):
        if message.echo:
            return
        await self.pipeline.process(ChatMessage(
            author=message.author.name,
            raw_text=message.content,
            channel=message.channel.name,
        ))

    async def send_chat(self, channel_name: str, text: str) -> None:
        channel = self.get_channel(channel_name)
        if channel is None:
            logger.warning(f"Not connected to channel {channel_name}, dropping: {text}")
            return
        await channel.send(text)

    async def close(self):
        if self.deepl is not None:
            await self.deepl.close()
        await self.google.close()
        await super().close()


def build_pipeline(settings: Settings, send, emotes: EmoteRegistry,
                   deepl: Optional[DeepLClient] = None,
                   google: Optional[GoogleClient] = None) -> MessagePipeline:
    google = google or GoogleClient(timeout=settings.service_timeout)
    return MessagePipeline(
        settings=settings,
        mode_state=ModeState(settings.default_mode, settings.admin_users),
        emotes=emotes,
        detectors=detection_legs(google, deepl),
        translators=translation_legs(settings.home_language, google, deepl),
        send=send,
    )


def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    deepl = None
    if settings.deepl_api_key:
        deepl = DeepLClient(settings.deepl_api_key, formality=settings.deepl_formality,
                            detection_target=settings.deepl_detection_target,
                            timeout=settings.service_timeout)
    else:
        logger.warning("DEEPL_API_KEY not set, using Google Translate only.")

    bot = Bot(settings, deepl=deepl)
    bot.run()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.critical(f"Fatal error while running the bot: {e}", exc_info=True)
