"""Place Field Rules — tag (de)serialization, required text, ids, client identity."""

import pytest

from placeboard.core.errors import InvalidPlaceIdError, MissingFieldError
from placeboard.core.place_fields import (
    FALLBACK_CLIENT_IP,
    normalize_tags,
    parse_place_id,
    require_text,
    resolve_client_ip,
    split_tags,
)


class TestNormalizeTags:

    def test_list_is_trimmed_filtered_and_joined(self):
        assert normalize_tags(["cozy", " quiet ", ""]) == "cozy,quiet"

    def test_order_is_preserved(self):
        assert normalize_tags(["b", "a", "c"]) == "b,a,c"

    def test_string_is_trimmed_only(self):
        assert normalize_tags("  a, b  ") == "a, b"

    @pytest.mark.parametrize("tags", [None, [], ["", "  "], "", "   "])
    def test_empty_inputs_become_none(self, tags):
        assert normalize_tags(tags) is None

    def test_non_string_entries_are_stringified(self):
        assert normalize_tags(["x", 3, None]) == "x,3"


class TestSplitTags:

    @pytest.mark.parametrize("stored", [None, "", ",", " , "])
    def test_empty_stored_value(self, stored):
        assert split_tags(stored) == []

    def test_entries_trimmed_and_empties_dropped(self):
        assert split_tags(" green, quiet ,, dogs ") == ["green", "quiet", "dogs"]

    def test_round_trip_keeps_non_empty_trimmed_tags_in_order(self):
        tags = ["  sea", "", "night view ", "sea"]
        assert split_tags(normalize_tags(tags)) == ["sea", "night view", "sea"]


class TestRequireText:

    def test_returns_stripped_value(self):
        assert require_text("  Cafe X ", "title") == "Cafe X"

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["a"]])
    def test_rejects_blank_or_non_string(self, value):
        with pytest.raises(MissingFieldError) as exc:
            require_text(value, "title")
        assert exc.value.message == "title is required"
        assert exc.value.http_status == 400


class TestParsePlaceId:

    @pytest.mark.parametrize("raw, expected", [("7", 7), (" 12 ", 12), ("007", 7)])
    def test_positive_integers(self, raw, expected):
        assert parse_place_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", "0", "-1", "abc", "1.5", "7abc", "١٢"])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidPlaceIdError):
            parse_place_id(raw)


class TestResolveClientIp:

    def test_first_forwarded_hop_wins(self):
        assert resolve_client_ip("203.0.113.9, 10.0.0.1", "127.0.0.1") == "203.0.113.9"

    def test_peer_address_without_header(self):
        assert resolve_client_ip(None, "198.51.100.4") == "198.51.100.4"

    def test_blank_first_hop_falls_back_to_peer(self):
        assert resolve_client_ip(" , 10.0.0.1", "198.51.100.4") == "198.51.100.4"

    def test_sentinel_when_nothing_known(self):
        assert resolve_client_ip("", None) == FALLBACK_CLIENT_IP == "0.0.0.0"
