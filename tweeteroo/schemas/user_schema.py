# schemas/user_schema.py
import re

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError

_uri = TypeAdapter(AnyUrl)

# RFC 3986 characters; AnyUrl would quietly percent-encode anything else
_URI_CHARS = re.compile(r"^(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+$")


class SignUpRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Unique username")
    avatar: str = Field(..., min_length=1, description="Avatar image URL")

    model_config = {"extra": "forbid"}

    @field_validator("avatar")
    @classmethod
    def avatar_must_be_uri(cls, value: str) -> str:
        # validate only; the avatar is stored exactly as sent
        if not _URI_CHARS.match(value):
            raise PydanticCustomError("uri", "must be a valid uri")
        try:
            _uri.validate_python(value)
        except ValueError:
            raise PydanticCustomError("uri", "must be a valid uri")
        return value
