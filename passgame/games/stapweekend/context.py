"""
Session Context Provider - Generates the facts context-dependent rules read.

Per call:
- Date facts (day of year, ISO weekday, zodiac glyph, lunar phase glyph)
- Current temperature from the weather service, best effort
- A random target word, arithmetic puzzle and geography target
- The chess puzzle's best move

Nothing is deterministic across calls; inject `rng`, `clock` and the
weather client to pin it down in tests.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable
import logging
import math
import random

import httpx

from ...config import FALLBACK_TEMPERATURE, HTTP_TIMEOUT, WEATHER_ENDPOINTS
from ...engine_core.state import SessionContext
from . import vocab


logger = logging.getLogger(__name__)

KNOWN_NEW_MOON = datetime(2024, 1, 11, tzinfo=timezone.utc)


# =============================================================================
# Date facts
# =============================================================================

def zodiac_for(day: date) -> str:
    """Zodiac glyph for a calendar day."""
    for start_month, start_day, end_month, end_day, glyph in vocab.ZODIAC_SIGNS:
        if (day.month == start_month and day.day >= start_day) or (
            day.month == end_month and day.day <= end_day
        ):
            return glyph
    return vocab.DEFAULT_ZODIAC


def lunar_phase_for(moment: datetime) -> str:
    """
    Estimate the lunar phase glyph.

    Whole days since a known new moon, modulo the synodic month, split
    into eight 3.7-day buckets.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    days_since = (moment - KNOWN_NEW_MOON).days
    cycle_day = days_since % vocab.LUNAR_CYCLE_DAYS
    index = min(int(cycle_day // vocab.LUNAR_BUCKET_DAYS), len(vocab.LUNAR_PHASES) - 1)
    return vocab.LUNAR_PHASES[index]


# =============================================================================
# Weather
# =============================================================================

class WeatherClient:
    """
    Reads the current temperature from weerlive-style JSON endpoints.

    Endpoints are tried in order; the first one with a numeric
    `liveweer[0].temp` wins. When none answers, the fallback is returned.
    """

    def __init__(
        self,
        endpoints: list[str] | None = None,
        client: httpx.Client | None = None,
        fallback: int = FALLBACK_TEMPERATURE,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.endpoints = WEATHER_ENDPOINTS if endpoints is None else endpoints
        self.client = client
        self.fallback = fallback
        self.timeout = timeout

    def current_temperature(self) -> int:
        """Current temperature in whole degrees Celsius (floored)."""
        if not self.endpoints:
            return self.fallback

        if self.client is not None:
            return self._query_endpoints(self.client)

        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            return self._query_endpoints(client)

    def _query_endpoints(self, client: httpx.Client) -> int:
        for endpoint in self.endpoints:
            temperature = self._query(client, endpoint)
            if temperature is not None:
                return temperature

        logger.warning(
            "No weather endpoint answered, using fallback temperature %s", self.fallback
        )
        return self.fallback

    def _query(self, client: httpx.Client, endpoint: str) -> int | None:
        try:
            response = client.get(endpoint)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.info("Weather endpoint %s failed: %s", endpoint, e)
            return None

        try:
            raw = data["liveweer"][0]["temp"]
            temperature = float(raw)
        except (KeyError, IndexError, TypeError, ValueError):
            logger.info("Weather endpoint %s returned no usable temperature", endpoint)
            return None

        if math.isnan(temperature) or math.isinf(temperature):
            return None
        return math.floor(temperature)


# =============================================================================
# Provider
# =============================================================================

def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class SessionContextProvider:
    """
    Builds a SessionContext.

    Usage:
        provider = SessionContextProvider()
        context = provider.generate()
    """
    weather: WeatherClient = field(default_factory=WeatherClient)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = _local_now

    def generate(self, now: datetime | None = None) -> SessionContext:
        """Generate a fresh context; every call may pick different puzzles."""
        now = now or self.clock()
        today = now.date()

        return SessionContext(
            day_of_year=today.timetuple().tm_yday,
            iso_weekday=today.isoweekday(),
            zodiac_glyph=zodiac_for(today),
            lunar_phase_glyph=lunar_phase_for(now),
            temperature_c=self.weather.current_temperature(),
            target_word=self.rng.choice(vocab.TARGET_WORDS),
            arithmetic_puzzle=self.rng.choice(vocab.ARITHMETIC_PUZZLES),
            chess_best_move=vocab.CHESS_BEST_MOVE,
            geo_target=self.rng.choice(vocab.GEO_TARGETS),
            generated_at=now,
        )


def offline_provider(seed: int | None = None) -> SessionContextProvider:
    """A provider that never touches the network (fallback temperature)."""
    return SessionContextProvider(
        weather=WeatherClient(endpoints=[]),
        rng=random.Random(seed),
    )
