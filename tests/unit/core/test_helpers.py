"""
Unit Tests for shared helpers: tags, timestamps, pagination, AI JSON parsing
"""
import pytest
from datetime import datetime, timezone, timedelta

from ministry_hub.core.exceptions import AIResponseParseError
from ministry_hub.utils.ai_client import parse_json_object
from ministry_hub.utils.helpers import split_tags, to_naive_utc
from ministry_hub.utils.pagination import create_paginated_response


class TestSplitTags:

    def test_comma_string(self):
        assert split_tags(" hope, healing ,, provision ") == ["hope", "healing", "provision"]

    def test_list_trimmed(self):
        assert split_tags(["  faith", "", "love "]) == ["faith", "love"]

    def test_none(self):
        assert split_tags(None) == []


class TestToNaiveUtc:

    def test_converts_aware(self):
        aware = datetime(2024, 6, 1, 10, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert to_naive_utc(aware) == datetime(2024, 6, 1, 15, 0)

    def test_naive_untouched(self):
        naive = datetime(2024, 6, 1, 10, 0)

        assert to_naive_utc(naive) is naive

    def test_none(self):
        assert to_naive_utc(None) is None


class TestPaginatedResponse:

    def test_middle_page(self):
        result = create_paginated_response(["a", "b"], total=45, page=2, page_size=20)

        assert result["total_pages"] == 3
        assert result["has_next"] is True
        assert result["has_previous"] is True

    def test_empty(self):
        result = create_paginated_response([], total=0, page=1, page_size=20)

        assert result["items"] == []
        assert result["total_pages"] == 1
        assert result["has_next"] is False
        assert result["has_previous"] is False


class TestParseJsonObject:

    def test_extracts_embedded_object(self):
        text = 'Here you go:\n```json\n{"summary": "Trust", "themes": ["hope"]}\n```'

        assert parse_json_object(text) == {"summary": "Trust", "themes": ["hope"]}

    @pytest.mark.parametrize("text", ["no json here", "{not valid}", "} backwards {"])
    def test_rejects_bad_output(self, text):
        with pytest.raises(AIResponseParseError):
            parse_json_object(text)
