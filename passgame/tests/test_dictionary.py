"""
Tests for dictionary validation (fail-closed).
"""

import httpx

from ..games.stapweekend.dictionary import DictionaryValidator, StaticDictionary


def validator_for(handler) -> DictionaryValidator:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return DictionaryValidator(url="https://dictionary.test/api/search/", client=client)


class TestDictionaryValidator:
    """Tests for the woordenlijst lookup."""

    def test_exact_entry_is_valid(self):
        queries = []

        def handler(request):
            queries.append(request.url.params["q"])
            return httpx.Response(200, json=[{"woord": "Water"}, {"woord": "waterval"}])

        assert validator_for(handler).is_valid_word("WATER")
        assert queries == ["water"]

    def test_only_related_entries(self):
        validator = validator_for(lambda request: httpx.Response(200, json=[{"woord": "waterval"}]))
        assert not validator.is_valid_word("water")

    def test_empty_result(self):
        validator = validator_for(lambda request: httpx.Response(200, json=[]))
        assert not validator.is_valid_word("qqqqq")

    def test_http_error_is_invalid(self):
        validator = validator_for(lambda request: httpx.Response(503))
        assert not validator.is_valid_word("water")

    def test_bad_json_is_invalid(self):
        validator = validator_for(lambda request: httpx.Response(200, text="<html>"))
        assert not validator.is_valid_word("water")

    def test_unexpected_shape_is_invalid(self):
        validator = validator_for(lambda request: httpx.Response(200, json={"woord": "water"}))
        assert not validator.is_valid_word("water")

    def test_transport_error_is_invalid(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        assert not validator_for(handler).is_valid_word("water")

    def test_blank_word_skips_lookup(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert not validator_for(handler).is_valid_word("  ")


class TestStaticDictionary:
    """Tests for the offline word list."""

    def test_case_insensitive(self):
        words = StaticDictionary(["Water"])
        assert words.is_valid_word("WATER")
        assert not words.is_valid_word("tafel")
