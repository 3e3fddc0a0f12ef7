from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from structlog.stdlib import BoundLogger

from learning_feeds.application.di import Container
from learning_feeds.core.usecase import fetch_feed_source
from learning_feeds.core.usecase.list_feed_sources import ListFeedSourcesInput
from learning_feeds.fastapi.api.schemas import ApiFeedSources, ApiSourceItems
from learning_feeds.fastapi.depends.app_state import get_container, get_logger

router = APIRouter(tags=["sources"])


@router.get(
    "/sources",
    summary="List registered feed sources",
    response_model=ApiFeedSources,
    status_code=status.HTTP_200_OK,
)
async def list_sources(
    container: Container = Depends(get_container),
    enabled_only: bool = Query(False, description="List only the enabled sources"),
) -> ApiFeedSources:
    uc = container.use_cases.list_feed_sources()

    uc_input = ListFeedSourcesInput(enabled_only=enabled_only)
    uc_result = await uc.execute(uc_input)

    return ApiFeedSources.model_validate(uc_result)


@router.get(
    "/sources/{source_key:path}/items",
    summary="Fetch the items of a single feed source",
    response_model=ApiSourceItems,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_404_NOT_FOUND: {
            "description": "Feed source not found",
        },
        status.HTTP_502_BAD_GATEWAY: {
            "description": "Every fetch strategy failed for the feed source",
        },
    },
)
async def fetch_source_items(
    container: Container = Depends(get_container),
    logger: BoundLogger = Depends(get_logger),
    source_key: str = Path(title="Key of the feed source to fetch"),
) -> ApiSourceItems:
    uc = container.use_cases.fetch_feed_source()
    uc_input = fetch_feed_source.FetchFeedSourceInput(source_key=source_key)

    try:
        uc_result = await uc.execute(uc_input)
    except fetch_feed_source.FeedSourceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feed source not found",
        )
    except fetch_feed_source.AllStrategiesFailedError as exc:
        logger.warning("Feed source could not be fetched", source_key=source_key)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": "All fetch strategies failed", "reasons": exc.reasons},
        )

    return ApiSourceItems.model_validate(uc_result)
