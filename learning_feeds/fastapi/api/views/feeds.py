from fastapi import APIRouter, Depends, Query, status

from learning_feeds.application.di import Container
from learning_feeds.core.usecase.get_feeds import GetFeedsInput
from learning_feeds.fastapi.api.schemas import (
    ApiCategorizedSourceResult,
    ApiFeedCategories,
    ApiFeeds,
    ApiSourceFetchResult,
)
from learning_feeds.fastapi.depends.app_state import get_container

router = APIRouter(tags=["feeds"])


@router.get(
    "/feeds",
    summary="Get the aggregated items of all feed sources",
    response_model=ApiFeeds,
    status_code=status.HTTP_200_OK,
)
async def get_feeds(
    container: Container = Depends(get_container),
    refresh: bool = Query(False, description="Ignore the cached feeds and fetch them again"),
) -> ApiFeeds:
    uc = container.use_cases.get_feeds()

    uc_input = GetFeedsInput(force_refresh=refresh)
    uc_result = await uc.execute(uc_input)

    feeds = uc_result.feeds
    return ApiFeeds(
        results=[ApiSourceFetchResult.model_validate(result) for result in feeds.results],
        timestamp=feeds.timestamp,
        success_count=feeds.success_count,
        total_count=feeds.total_count,
        from_cache=uc_result.from_cache,
        cache_age_s=uc_result.cache_age_s,
    )


@router.get(
    "/feeds/categories",
    summary="Get the feeds grouped by their category",
    response_model=ApiFeedCategories,
    status_code=status.HTTP_200_OK,
)
async def get_feed_categories(
    container: Container = Depends(get_container),
    refresh: bool = Query(False, description="Ignore the cached feeds and fetch them again"),
) -> ApiFeedCategories:
    uc = container.use_cases.get_grouped_feeds()

    uc_input = GetFeedsInput(force_refresh=refresh)
    uc_result = await uc.execute(uc_input)

    # fmt: off
    categories = {
        category.value: [ApiCategorizedSourceResult.model_validate(r) for r in results]
        for category, results in uc_result.groups.items()
    }
    # fmt: on
    return ApiFeedCategories(
        categories=categories,
        from_cache=uc_result.from_cache,
        cache_age_s=uc_result.cache_age_s,
    )
