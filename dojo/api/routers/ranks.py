from fastapi import APIRouter

from dojo.domain import ranks
from dojo.domain.ranks import Program
from dojo.schemas.rank import Taxonomy

router = APIRouter(prefix="/ranks", tags=["ranks"])


def _taxonomy(program: Program) -> Taxonomy:
    return Taxonomy(
        program=program,
        belts=list(ranks.belts_for(program)),
        max_stripes=ranks.max_stripes(program),
    )


@router.get("", response_model=list[Taxonomy])
def get_taxonomies():
    return [_taxonomy(program) for program in Program]


@router.get("/{program}", response_model=Taxonomy)
def get_taxonomy(program: Program):
    return _taxonomy(program)
