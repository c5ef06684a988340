"""Error body returned for every domain failure."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of 4xx/503 responses raised from ``dojo.errors``.

    ``code`` is stable across releases; clients branch on it (for example to show
    "already checked in" instead of a failure) and display ``detail``.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "User 42 is already checked in to class 7 on 2026-10-19",
                "code": "ALREADY_CHECKED_IN",
            }
        }
    )

    detail: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code, e.g. NOT_SCHEDULED")
