"""
Shared fixtures: settings, fake services and a pipeline wired to them.
"""

from unittest.mock import AsyncMock

import pytest

from cascade import ServiceLeg
from emotes import EmoteRegistry
from pipeline import MessagePipeline
from settings import Settings
from translation_mode import ModeState, TranslationMode


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="client-id",
        access_token="token",
        channel="somechannel",
        admin_users=("admin",),
        target_language="pl",
        language_name="Polish",
        home_language="es",
        ignore_users=("nightbot",),
    )


@pytest.fixture
def primary_detect() -> AsyncMock:
    return AsyncMock(return_value="pl")


@pytest.fixture
def secondary_detect() -> AsyncMock:
    return AsyncMock(return_value="pl")


@pytest.fixture
def primary_translate() -> AsyncMock:
    return AsyncMock(return_value="buenos días a todos")


@pytest.fixture
def secondary_translate() -> AsyncMock:
    return AsyncMock(return_value="buenos días (google)")


@pytest.fixture
def send() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def make_pipeline(settings, primary_detect, secondary_detect, primary_translate, secondary_translate, send):
    """Build a pipeline with fake services; the local guess defaults to Polish, guess=None uses langdetect."""

    def _make(mode: TranslationMode = TranslationMode.SINGLE, guess: str = "pl", emotes=()) -> MessagePipeline:
        return MessagePipeline(
            settings=settings,
            mode_state=ModeState(mode, settings.admin_users),
            emotes=EmoteRegistry(emotes),
            detectors=[ServiceLeg("Primary", primary_detect), ServiceLeg("Secondary", secondary_detect)],
            translators=[ServiceLeg("Primary", primary_translate), ServiceLeg("Secondary", secondary_translate)],
            send=send,
            bot_name="RelayBot",
            guesser=(lambda text: guess) if guess is not None else None,
        )

    return _make
