from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field


class GymClass(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    name: str
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: time
    end_time: time
    membership_type_id: int | None = None
    is_active: bool


class ScheduleCheck(BaseModel):
    class_id: int
    class_date: date
    weekday: int = Field(..., ge=0, le=6)
    is_scheduled: bool
