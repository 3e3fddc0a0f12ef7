from pydantic import BaseModel


class ApiReleaseStats(BaseModel):
    name: str
    version: str
    commit: str
