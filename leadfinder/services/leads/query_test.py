"""Unit tests for query construction."""

import pytest

from leadfinder.services.leads.models import SearchMode
from leadfinder.services.leads.patterns import CHANNEL_TEMPLATES
from leadfinder.services.leads.query import build_queries


@pytest.mark.unit
class TestBuildQueries:
    def test_dealer_mode_spanish(self):
        queries = build_queries("forklift", "Spain", "es", SearchMode.DEALER)

        assert len(queries) == 1
        query = queries[0]
        assert query.startswith('("distribuidor de montacargas" OR ')
        assert query.endswith(") forklift Spain")
        for phrase in CHANNEL_TEMPLATES["es"]:
            assert f'"{phrase}"' in query

    def test_dealer_mode_without_country(self):
        query = build_queries("forklift", "", "en", SearchMode.DEALER)[0]
        assert query.endswith(") forklift")
        assert not query.endswith(" ")

    def test_unknown_locale_falls_back_to_english(self):
        query = build_queries("forklift", "Italy", "it", SearchMode.DEALER)[0]
        assert '"forklift dealer"' in query
        assert query.endswith("forklift Italy")

    def test_broad_mode(self):
        assert build_queries("reach truck", "Chile", "es", SearchMode.BROAD) == [
            "reach truck Chile"
        ]

    def test_broad_mode_without_country(self):
        assert build_queries("reach truck", "", "en", SearchMode.BROAD) == ["reach truck"]

    def test_or_group_shape(self):
        query = build_queries("x", "", "de", SearchMode.DEALER)[0]
        inner = query[query.index("(") + 1 : query.index(")")]
        assert inner.split(" OR ") == [f'"{p}"' for p in CHANNEL_TEMPLATES["de"]]
