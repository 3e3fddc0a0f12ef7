from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class FeedItem(BaseModel):
    title: str = Field(..., min_length=1)
    link: str
    description: str
    published_at: AwareDatetime
    unique_id: str = Field(..., min_length=1)
    author: str | None = None

    model_config = ConfigDict(frozen=True)
