import asyncio
import json
from typing import Optional

import typer

from leadfinder.api.models.leads import EnrichResponse, LeadsResponse
from leadfinder.config import settings
from leadfinder.services.leads.exceptions import LeadFinderError
from leadfinder.services.leads.models import SearchRequest
from leadfinder.services.leads.service import Service

app = typer.Typer(help="Find forklift and material handling dealer leads.")


def _get_service() -> Service:
    return Service(
        credentials=settings.search_credentials,
        search_timeout=settings.search_timeout_seconds,
        fetch_timeout=settings.fetch_timeout_seconds,
        enrich_concurrency=settings.enrich_concurrency,
        enrich_max_pages=settings.enrich_max_pages,
    )


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except LeadFinderError as e:
        typer.echo(f"❌ Error: {e.message}", err=True)
        raise typer.Exit(code=1)


@app.command()
def find(
    keyword: str = typer.Argument(..., help="Product or keyword to search for"),
    country: str = typer.Option("", "--country", "-c", help="Country name, e.g. Spain"),
    limit: int = typer.Option(10, "--limit", "-l", help="Maximum leads to return (1-20)"),
    start: Optional[int] = typer.Option(None, "--start", "-s", help="Search result offset (1-based)"),
    mode: str = typer.Option("dealer", "--mode", "-m", help="dealer or broad"),
    lang: str = typer.Option("auto", "--lang", help="auto, en, es, pt, de or fr"),
    enrich: bool = typer.Option(False, "--enrich", "-e", help="Crawl lead sites for email/phone"),
):
    """
    Search for dealer leads and print them as JSON.

    Examples:
        # Spanish-language dealer search
        leadfinder find forklift --country Spain --limit 5

        # Broad search with contact enrichment
        leadfinder find "reach truck" --mode broad --enrich
    """

    async def run():
        request = SearchRequest.from_query(
            keyword=keyword,
            country=country,
            limit=limit,
            start=start,
            mode=mode,
            language=lang,
            enrich="1" if enrich else "0",
        )
        result = await _get_service().find_leads(request)
        payload = LeadsResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    _run(run())


@app.command()
def enrich(
    website: str = typer.Argument(..., help="Website hostname or URL"),
    lang: str = typer.Option("en", "--lang", help="Locale for localized contact pages"),
    country: str = typer.Option("", "--country", "-c", help="Country name for phone scoring"),
):
    """Find a contact email and phone number on one website."""

    async def run():
        result = await _get_service().enrich_website(website, language=lang, country=country)
        payload = EnrichResponse.from_result(result).model_dump(by_alias=True)
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    _run(run())


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("leadfinder.app:app", host=host, port=port)
