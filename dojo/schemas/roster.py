from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from dojo.schemas.gym_class import GymClass
from dojo.schemas.profile import MemberProfile


class RosterEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    member: MemberProfile
    eligible: bool
    checked_in: bool
    check_in_time: datetime | None = None
    attendance_id: int | None = None


class Roster(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    gym_class: GymClass
    class_date: date
    is_scheduled: bool
    checked_in_count: int
    entries: list[RosterEntry]
