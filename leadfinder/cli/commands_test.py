"""Tests for the command line interface."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from typer.testing import CliRunner

from leadfinder.cli.commands import app
from leadfinder.services.enrichment.models import EnrichmentResult
from leadfinder.services.leads.exceptions import ConfigurationError
from leadfinder.services.leads.models import Lead, LeadSearchResult, SearchMeta, SearchMode

runner = CliRunner()


@pytest.fixture
def mock_service():
    svc = MagicMock()
    svc.find_leads = AsyncMock(
        return_value=LeadSearchResult(
            results=[
                Lead(
                    country="Germany",
                    company="Stapler Nord",
                    website="stapler-nord.de",
                    source_url="https://stapler-nord.de/",
                    score=61,
                    tags=["dealer"],
                )
            ],
            meta=SearchMeta(total_items=1, unique_domains=1, kept=1),
        )
    )
    svc.enrich_website = AsyncMock(return_value=EnrichmentResult(phone="040 123 4567", phone_score=50))
    return svc


@pytest.mark.unit
class TestFindCommand:
    def test_prints_leads(self, mock_service):
        with patch("leadfinder.cli.commands._get_service", return_value=mock_service):
            result = runner.invoke(
                app, ["find", "Gabelstapler", "--country", "Germany", "--limit", "5", "--enrich"]
            )

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["results"][0]["sourceUrl"] == "https://stapler-nord.de/"

        request = mock_service.find_leads.call_args[0][0]
        assert request.keyword == "Gabelstapler"
        assert request.limit == 5
        assert request.enrich is True
        assert request.mode == SearchMode.DEALER

    def test_error_exits_non_zero(self, mock_service):
        mock_service.find_leads = AsyncMock(
            side_effect=ConfigurationError("Missing Google API configuration")
        )
        with patch("leadfinder.cli.commands._get_service", return_value=mock_service):
            result = runner.invoke(app, ["find", "forklift"])

        assert result.exit_code == 1


@pytest.mark.unit
class TestEnrichCommand:
    def test_prints_result(self, mock_service):
        with patch("leadfinder.cli.commands._get_service", return_value=mock_service):
            result = runner.invoke(app, ["enrich", "stapler-nord.de", "--lang", "de"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["phone"] == "040 123 4567"
        assert payload["result"]["phoneScore"] == 50
        mock_service.enrich_website.assert_awaited_once_with(
            "stapler-nord.de", language="de", country=""
        )
