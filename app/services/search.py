"""Exact and substring search over the upstream feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from app.config import FeedSettings
from app.domain.models import SEARCH_PARAMS, SearchCriteria
from app.logging import logger
from app.services.exceptions import ValidationError
from app.services.feed_parser import FeedRecord, parse_feed


class FeedSource(Protocol):
    async def fetch(self) -> str: ...


@dataclass(slots=True)
class SearchResult:
    data: list[FeedRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.data)


def filter_exact(records: Iterable[FeedRecord], field_name: str, value: str) -> list[FeedRecord]:
    return [record for record in records if record.get(field_name) == value]


def filter_contains(records: Iterable[FeedRecord], field_name: str, value: str | None) -> list[FeedRecord]:
    if not value:
        return list(records)
    matches = []
    for record in records:
        candidate = record.get(field_name)
        if candidate is not None and value in candidate:
            matches.append(record)
    return matches


class FeedSearchService:
    """Fetch, parse and filter the feed; one upstream call per search."""

    def __init__(self, source: FeedSource, settings: FeedSettings | None = None) -> None:
        self._source = source
        self._settings = settings or FeedSettings()

    async def load_records(self) -> list[FeedRecord]:
        raw = await self._source.fetch()
        records = parse_feed(raw)
        logger.debug("feed_parsed", records=len(records))
        return records

    async def exact_search(self, field_name: str, value: str) -> SearchResult:
        records = await self.load_records()
        result = SearchResult(filter_exact(records, field_name, value))
        logger.info("search_completed", mode="exact", field=field_name, count=result.count)
        return result

    async def search_by_param(self, param: str, value: str | None) -> SearchResult:
        if param not in SEARCH_PARAMS:
            raise ValidationError(f"Unknown search parameter: {param}")
        if not value:
            raise ValidationError(f"The {param} parameter is required")
        return await self.exact_search(self._settings.field_for(param), value)

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        """Multi-criteria substring search.

        Every provided criterion must be contained in its field (logical AND);
        each one narrows the result of the previous.
        """

        provided = criteria.provided()
        if not provided:
            raise ValidationError("At least one search parameter (nama, nim, or ymd) is required")

        records = await self.load_records()
        for param, value in provided.items():
            records = filter_contains(records, self._settings.field_for(param), value)

        result = SearchResult(records)
        logger.info("search_completed", mode="contains", criteria=sorted(provided), count=result.count)
        return result


__all__ = [
    "FeedSearchService",
    "FeedSource",
    "SearchResult",
    "filter_contains",
    "filter_exact",
]
