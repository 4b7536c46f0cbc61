# schemas/tweet_schema.py
from typing import Optional

from pydantic import BaseModel, Field


class TweetBody(BaseModel):
    """Body of POST /tweets and PUT /tweets/{id}."""

    username: str = Field(..., min_length=1, description="Author username")
    tweet: str = Field(..., min_length=1, description="Tweet text")

    model_config = {"extra": "forbid"}


class TweetOut(BaseModel):
    id: str = Field(..., alias="_id")
    username: str
    tweet: str
    avatar: Optional[str] = None

    model_config = {"populate_by_name": True}
