from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Promotion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    class_id: int
    previous_belt: str
    previous_stripes: int
    new_belt: str
    new_stripes: int
    comments: str | None = None
    promotion_date: date
    occurred_at: datetime
    graded_by: int


class PromotionCreate(BaseModel):
    user_id: int
    class_id: int
    new_belt: str = Field(..., min_length=1, max_length=32)
    new_stripes: int = Field(..., ge=0, description="Upper bound depends on the member's program")
    comments: str | None = Field(None, max_length=2000)

    @field_validator("comments", mode="before")
    @classmethod
    def blank_comments_to_none(cls, v: str | None) -> str | None:
        """Store whitespace-only comments as no comment."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class PromotionResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    promotion: Promotion
    is_advancement: bool
