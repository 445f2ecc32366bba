"""
Unit tests for load_settings.
"""

import pytest

from settings import load_settings
from translation_mode import TranslationMode

BASE_ENV = {
    "TWITCH_CLIENT_ID": "client-id",
    "TWITCH_ACCESS_TOKEN": "token",
    "TWITCH_CHANNEL": "SomeChannel",
}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self) -> None:
        settings = load_settings(dict(BASE_ENV))

        assert settings.channel == "somechannel"
        assert settings.default_mode is TranslationMode.SINGLE
        assert settings.target_language == "pl"
        assert settings.home_language == "es"
        assert settings.home_languages == ("en", "es")
        assert settings.admin_users == ()
        assert settings.deepl_api_key is None
        assert settings.min_signal_length == 4
        assert settings.min_guess_length == 10
        assert settings.short_message_length == 3
        assert settings.command_prefix == "!translate"

    def test_environment_values(self) -> None:
        env = dict(BASE_ENV, ADMIN_USERS=" Alice, bob ,", DEFAULT_TRANSLATION_MODE="ALL",
                   TARGET_LANGUAGE="DE", LANGUAGE_NAME="German", DEEPL_API_KEY="key:fx")

        settings = load_settings(env)

        assert settings.admin_users == ("alice", "bob")
        assert settings.default_mode is TranslationMode.ALL
        assert settings.target_language == "de"
        assert settings.language_name == "German"
        assert settings.deepl_api_key == "key:fx"

    def test_unknown_mode_falls_back_to_single(self) -> None:
        settings = load_settings(dict(BASE_ENV, DEFAULT_TRANSLATION_MODE="polish"))

        assert settings.default_mode is TranslationMode.SINGLE

    def test_ignore_users_from_config_are_lowercased(self) -> None:
        settings = load_settings(dict(BASE_ENV))

        assert "nightbot" in settings.ignore_users

    def test_missing_required(self) -> None:
        with pytest.raises(ValueError, match="TWITCH_ACCESS_TOKEN"):
            load_settings({"TWITCH_CLIENT_ID": "id", "TWITCH_CHANNEL": "chan"})
