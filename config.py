# config.py

# --- Basic settings ---
IGNORE_USERS = ["Nightbot", "StreamElements"] # other bots, treated like our own messages
COMMAND_PREFIX = "!translate"                 # admin command prefix

# --- Filter settings ---
HOME_LANGUAGES = ["en", "es"]  # languages the audience already reads, never translated
MIN_SIGNAL_LENGTH = 4          # normalized text shorter than this is not worth detecting
MIN_GUESS_LENGTH = 10          # shorter text is left undetermined by the local guess
SHORT_MESSAGE_LENGTH = 3       # messages this short are treated as reactions

# --- DeepL settings ---
DEEPL_FORMALITY = "prefer_less"
DEEPL_DETECTION_TARGET = "EN-US"
SERVICE_TIMEOUT = 10           # seconds

# --- Chat acknowledgements for admin commands ---
ACK_SINGLE = "Translating {language_name}."
ACK_ALL = "Translating all languages."
ACK_OFF = "Translations disabled."

# --- Twitch / DeepL (set these in the environment or .env) ---
# TWITCH_CLIENT_ID = "your_client_id"
# TWITCH_ACCESS_TOKEN = "your_access_token"
# TWITCH_CHANNEL = "your_channel_name"
# ADMIN_USERS = "alice,bob"
# DEFAULT_TRANSLATION_MODE = "single"
# TARGET_LANGUAGE = "pl"
# LANGUAGE_NAME = "Polish"
# HOME_LANGUAGE = "es"
# DEEPL_API_KEY = "your_deepl_key"
