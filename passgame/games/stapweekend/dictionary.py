"""
Dictionary Validator - Checks guesses against the woordenlijst.org word list.

Fail-closed: any transport, HTTP or decoding error counts as "not a word".
"""

from __future__ import annotations
import logging

import httpx

from ...config import DICTIONARY_URL, HTTP_TIMEOUT


logger = logging.getLogger(__name__)


class DictionaryValidator:
    """
    Word lookup against a search endpoint returning a JSON list of
    entries shaped like {"woord": "..."}.

    Usage:
        validator = DictionaryValidator()
        validator.is_valid_word("WATER")  # True
    """

    def __init__(
        self,
        url: str = DICTIONARY_URL,
        client: httpx.Client | None = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.url = url
        self.client = client
        self.timeout = timeout

    def is_valid_word(self, word: str) -> bool:
        """True only when the lookup lists the word itself."""
        query = word.strip().lower()
        if not query:
            return False

        try:
            if self.client is not None:
                data = self._lookup(self.client, query)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    data = self._lookup(client, query)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Dictionary lookup for %r failed: %s", query, e)
            return False

        if not isinstance(data, list):
            return False
        return any(
            isinstance(entry, dict)
            and isinstance(entry.get("woord"), str)
            and entry["woord"].lower() == query
            for entry in data
        )

    def _lookup(self, client: httpx.Client, query: str):
        response = client.get(self.url, params={"q": query})
        response.raise_for_status()
        return response.json()


class StaticDictionary:
    """In-memory word list, for offline play and tests."""

    def __init__(self, words):
        self.words = {w.strip().lower() for w in words}

    def is_valid_word(self, word: str) -> bool:
        return word.strip().lower() in self.words
