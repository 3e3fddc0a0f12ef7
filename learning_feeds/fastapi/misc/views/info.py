from fastapi import APIRouter, Depends
from starlette.responses import RedirectResponse

from learning_feeds.application.di import Container
from learning_feeds.fastapi.depends.app_state import get_container
from learning_feeds.fastapi.misc.schemas import ApiReleaseStats

router = APIRouter()


@router.get("/", include_in_schema=False)
async def redirect_to_docs() -> RedirectResponse:
    return RedirectResponse("/docs")


@router.get(
    "/info",
    summary="Get release info",
    response_model=ApiReleaseStats,
)
async def get_info(
    container: Container = Depends(get_container),
) -> ApiReleaseStats:
    app_settings = container.settings.app()
    return ApiReleaseStats(
        name=app_settings.name,
        version=app_settings.release_ver,
        commit=app_settings.release_commit,
    )
