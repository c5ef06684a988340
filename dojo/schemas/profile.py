from datetime import date

from pydantic import BaseModel, ConfigDict, computed_field

from dojo.domain.ranks import Program


class MemberProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    first_name: str
    last_name: str
    email: str | None = None
    is_child: bool
    is_kids_program: bool
    belt_rank: str
    stripes: int
    last_promotion_id: int | None = None

    @computed_field
    @property
    def program(self) -> Program:
        return Program.for_profile(self.is_kids_program)


class GradingCandidate(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile: MemberProfile
    last_promotion_date: date | None = None
