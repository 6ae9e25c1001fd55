"""Command-line interface for pubmed-retriever."""

import asyncio
import json
import logging

import aiohttp
import click

from pubmed_retriever.config import get_settings
from pubmed_retriever.data_sources.base_client import DataSourceError, describe_error
from pubmed_retriever.data_sources.pubmed import PubMedClient


@click.group()
@click.version_option(package_name="pubmed-retriever")
def main():
    """pubmed-retriever: search PubMed and print article metadata."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _search(query: str, top_k: int | None, output_format: str) -> None:
    async with PubMedClient(top_k_results=top_k) as client:
        if output_format == "text":
            click.echo(await client.run(query))
        elif output_format == "json":
            articles = await client.load(query)
            click.echo(json.dumps([a.model_dump() for a in articles], indent=2))
        else:
            count = 0
            async for article in client.lazy_load(query):
                count += 1
                click.echo(f"{count}. [{article.published}] {article.title}")
            click.echo(f"{count} article(s)")


@main.command()
@click.argument("query")
@click.option(
    "-k",
    "--top-k",
    type=int,
    default=None,
    help="Number of articles to retrieve (defaults to PUBMED_TOP_K_RESULTS)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "stream"]),
    default="text",
    show_default=True,
    help="text: formatted summaries, json: metadata records, stream: titles as fetched",
)
def search(query: str, top_k: int | None, output_format: str):
    """Search PubMed for QUERY."""
    try:
        asyncio.run(_search(query, top_k, output_format))
    except (DataSourceError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise click.ClickException(describe_error(e)) from e


if __name__ == "__main__":
    main()
