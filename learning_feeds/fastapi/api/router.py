from fastapi import APIRouter

from .views import feed_cache, feeds, sources

router = APIRouter()

router.include_router(feed_cache.router)
router.include_router(feeds.router)
router.include_router(sources.router)
