from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Dict, Optional


class PushMessage(BaseModel):
    data: str = ""
    attributes: Optional[Dict[str, str]] = None
    message_id: str = Field(default="", validation_alias=AliasChoices("messageId", "message_id"))
    publish_time: str = Field(default="", validation_alias=AliasChoices("publishTime", "publish_time"))


class PushEnvelope(BaseModel):
    message: PushMessage = Field(default_factory=PushMessage)
    subscription: str = ""


class FetchRequest(BaseModel):
    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def _null_url_is_empty(cls, v):
        # null url reaches the URL check as "", not a parse failure
        return "" if v is None else v
