"""Search endpoints over the upstream feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_user, get_feed_search
from app.api.responses import success
from app.domain.models import SearchCriteria
from app.services.search import FeedSearchService, SearchResult

router = APIRouter(prefix="/search", tags=["search"], dependencies=[Depends(get_current_user)])


def _render(result: SearchResult) -> dict:
    return success(count=result.count, data=result.data)


@router.get("")
@router.get("/", include_in_schema=False)
async def search(
    nama: str | None = Query(default=None, description="Substring of NAMA"),
    nim: str | None = Query(default=None, description="Substring of NIM"),
    ymd: str | None = Query(default=None, description="Substring of YMD"),
    service: FeedSearchService = Depends(get_feed_search),
):
    """Records matching every provided parameter by substring."""

    result = await service.search(SearchCriteria(nama=nama, nim=nim, ymd=ymd))
    return _render(result)


@router.get("/name")
async def search_by_name(
    nama: str | None = Query(default=None, description="Exact NAMA value"),
    service: FeedSearchService = Depends(get_feed_search),
):
    return _render(await service.search_by_param("nama", nama))


@router.get("/nim")
async def search_by_nim(
    nim: str | None = Query(default=None, description="Exact NIM value"),
    service: FeedSearchService = Depends(get_feed_search),
):
    return _render(await service.search_by_param("nim", nim))


@router.get("/ymd")
async def search_by_ymd(
    ymd: str | None = Query(default=None, description="Exact YMD value"),
    service: FeedSearchService = Depends(get_feed_search),
):
    return _render(await service.search_by_param("ymd", ymd))


__all__ = ["router"]
