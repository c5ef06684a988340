from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class Attendance(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    class_id: int
    user_id: int
    class_date: date
    check_in_time: datetime
    checked_in_by: int | None = None


class CheckInCreate(BaseModel):
    user_id: int
    class_date: date
    force_backfill: bool = False


class SelfCheckInCreate(BaseModel):
    class_id: int


class SelfCheckInResult(BaseModel):
    already_checked_in: bool
    message: str
    attendance: Attendance
