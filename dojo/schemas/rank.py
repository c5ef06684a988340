from pydantic import BaseModel

from dojo.domain.ranks import Program


class Taxonomy(BaseModel):
    program: Program
    belts: list[str]
    max_stripes: int
