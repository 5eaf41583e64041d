"""
Configuration - Environment-driven settings.

All settings are read once at import time from environment variables:
    PASSGAME_ENV                  development | production
    ALLOWED_ORIGINS               Comma-separated CORS origins
    PASSGAME_LOG_LEVEL            Root log level (INFO)
    PASSGAME_HTTP_TIMEOUT         Seconds per outbound HTTP call
    PASSGAME_WEATHER_ENDPOINTS    Whitespace-separated weather URLs, tried in order
    PASSGAME_FALLBACK_TEMPERATURE Temperature used when no endpoint answers
    PASSGAME_DICTIONARY_URL       Word lookup endpoint (expects ?q=<word>)
    PASSGAME_TIME_OFFSET_HOURS    UTC offset of the game clock (rule 15)
    PASSGAME_SESSION_MAX_AGE      Seconds before an idle session is stale
"""

import logging
import os


PASSGAME_ENV = os.getenv("PASSGAME_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("PASSGAME_LOG_LEVEL", "INFO").upper()

HTTP_TIMEOUT = float(os.getenv("PASSGAME_HTTP_TIMEOUT", "8.0"))

# Whitespace-separated: the location parameter itself may contain commas
WEATHER_ENDPOINTS = os.getenv(
    "PASSGAME_WEATHER_ENDPOINTS",
    "https://weerlive.nl/api/json-data-10min.php?key=demo&locatie=Dongen,Noord-Brabant "
    "https://weerlive.nl/api/json-data-10min.php?key=demo&locatie=Dongen "
    "https://weerlive.nl/api/json-data-10min.php?key=demo&locatie=5104",
).split()
FALLBACK_TEMPERATURE = int(os.getenv("PASSGAME_FALLBACK_TEMPERATURE", "20"))

DICTIONARY_URL = os.getenv("PASSGAME_DICTIONARY_URL", "https://woordenlijst.org/api/search/")

TIME_OFFSET_HOURS = int(os.getenv("PASSGAME_TIME_OFFSET_HOURS", "2"))

SESSION_MAX_AGE = int(os.getenv("PASSGAME_SESSION_MAX_AGE", "3600"))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None):
    """Configure root logging once for the CLI and the API server."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
