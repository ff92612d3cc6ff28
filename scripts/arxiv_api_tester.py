"""Standalone script to hit the arXiv API and inspect parsed responses."""

import argparse
import asyncio
import logging

from arxiv_scout.config import get_settings
from arxiv_scout.data_sources.arxiv import ArxivClient
from arxiv_scout.models.model_query import ArxivQuery, SortBy

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


async def main(category: str, author: str | None, limit: int) -> None:
    query = ArxivQuery.by_category(category).set_max_results(limit).set_sort(SortBy.SUBMITTED)
    if author:
        query = query.add_search(author)

    logger.info("URL: %s", query.build())
    async with ArxivClient() as client:
        page = await client.get_page(query)

    logger.info(
        "total_results=%s start_index=%s items_per_page=%s",
        page.total_results,
        page.start_index,
        page.items_per_page,
    )
    for entry in page.entries:
        print(f"{entry.id}  [{entry.primary_category_term}]  {entry.title}")
        print(f"    {entry.formatted_authors}")
        print(f"    published={entry.published.isoformat()} pdf={entry.pdf_url}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("category", nargs="?", default="cs.AI")
    parser.add_argument("--author", default=None)
    parser.add_argument("--limit", type=int, default=5)
    args = parser.parse_args()
    asyncio.run(main(args.category, args.author, args.limit))
