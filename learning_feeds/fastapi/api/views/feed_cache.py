from fastapi import APIRouter, Depends, HTTPException, status
from structlog.stdlib import BoundLogger

from learning_feeds.application.di import Container
from learning_feeds.core.usecase.clear_feed_cache import FeedCacheClearError
from learning_feeds.fastapi.api.schemas import ApiFeedCacheStatus
from learning_feeds.fastapi.depends.app_state import get_container, get_logger

router = APIRouter(tags=["feed cache"])


@router.get(
    "/feeds/cache",
    summary="Get the age of the cached feeds",
    response_model=ApiFeedCacheStatus,
    status_code=status.HTTP_200_OK,
)
async def get_feed_cache_status(
    container: Container = Depends(get_container),
) -> ApiFeedCacheStatus:
    uc = container.use_cases.get_feed_cache_status()
    uc_result = await uc.execute()
    return ApiFeedCacheStatus.model_validate(uc_result)


@router.delete(
    "/feeds/cache",
    summary="Drop the cached feeds",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "description": "Feed cache could not be cleared",
        },
    },
)
async def clear_feed_cache(
    container: Container = Depends(get_container),
    logger: BoundLogger = Depends(get_logger),
) -> None:
    uc = container.use_cases.clear_feed_cache()

    try:
        await uc.execute()
    except FeedCacheClearError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Feed cache could not be cleared",
        )

    logger.info("Feed cache cleared by request")
