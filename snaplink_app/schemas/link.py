from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from snaplink_app.config import settings
from snaplink_app.services.validation import CODE_PATTERN, is_valid_url


class LinkCreate(BaseModel):
    """Request body for creating a link (camelCase, as sent by the dashboard)"""

    long_url: str = Field(..., alias="longUrl", description="The URL to redirect to")
    custom_code: Optional[str] = Field(
        None,
        alias="customCode",
        pattern=CODE_PATTERN,
        description="Optional 6-8 character alphanumeric code",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("long_url")
    @classmethod
    def check_long_url(cls, value: str) -> str:
        if not is_valid_url(value):
            raise ValueError("Invalid URL format")
        return value


class LinkResponse(BaseModel):
    """Response schema that serializes the SQLAlchemy Link model

    - from_attributes=True reads straight from model attributes
    - short_url is derived from the configured base URL
    """
    id: int
    code: str
    long_url: str
    created_at: datetime
    total_clicks: int
    last_clicked: Optional[datetime] = None

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url.rstrip('/')}/{self.code}"

    model_config = ConfigDict(from_attributes=True)


class DeleteResponse(BaseModel):
    success: bool = True
