"""Belt and stripe taxonomy for the adult and kids programs.

The two programs use disjoint, ordered belt sequences. A rank only ever
compares against another rank of the same program; there is no meaningful
ordering between an adult blue belt and a kids yellow belt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dojo.errors import IncomparableRankError, InvalidRankError, UnknownBeltError


class Program(str, Enum):
    ADULT = "adult"
    KIDS = "kids"

    @classmethod
    def for_profile(cls, is_kids_program: bool) -> Program:
        return cls.KIDS if is_kids_program else cls.ADULT


ADULT_BELTS: tuple[str, ...] = ("white", "blue", "purple", "brown", "black")

KIDS_BELTS: tuple[str, ...] = (
    "white",
    "grey-white",
    "grey",
    "grey-black",
    "yellow-white",
    "yellow",
    "yellow-black",
    "orange-white",
    "orange",
    "orange-black",
    "green-white",
    "green",
    "green-black",
)

_BELTS = {Program.ADULT: ADULT_BELTS, Program.KIDS: KIDS_BELTS}
_MAX_STRIPES = {Program.ADULT: 4, Program.KIDS: 12}

DEFAULT_BELT = "white"
DEFAULT_STRIPES = 0


def belts_for(program: Program) -> tuple[str, ...]:
    return _BELTS[Program(program)]


def ordinal(program: Program, belt: str) -> int:
    """Position of ``belt`` within the program's sequence.

    Raises:
        UnknownBeltError: If the belt is not part of the program's taxonomy.
    """
    belts = belts_for(program)
    try:
        return belts.index(belt)
    except ValueError:
        raise UnknownBeltError(
            f"Belt '{belt}' is not part of the {Program(program).value} program"
        ) from None


def max_stripes(program: Program) -> int:
    return _MAX_STRIPES[Program(program)]


def is_valid(program: Program, belt: str, stripes: int) -> bool:
    if belt not in belts_for(program):
        return False
    if isinstance(stripes, bool) or not isinstance(stripes, int):
        return False
    return 0 <= stripes <= max_stripes(program)


@dataclass(frozen=True, slots=True)
class Rank:
    """A belt and stripe count, tagged with the program it belongs to."""

    program: Program
    belt: str
    stripes: int

    @classmethod
    def create(cls, program: Program, belt: str, stripes: int) -> Rank:
        """Build a validated rank.

        Raises:
            InvalidRankError: If the belt or stripe count is out of range for the program.
        """
        program = Program(program)
        if belt not in belts_for(program):
            raise InvalidRankError(
                f"Belt '{belt}' is not valid for the {program.value} program"
            )
        if not is_valid(program, belt, stripes):
            raise InvalidRankError(
                f"Stripes must be between 0 and {max_stripes(program)} "
                f"for the {program.value} program"
            )
        return cls(program=program, belt=belt, stripes=stripes)

    @classmethod
    def default(cls, program: Program) -> Rank:
        return cls(program=Program(program), belt=DEFAULT_BELT, stripes=DEFAULT_STRIPES)

    @property
    def ordinal(self) -> int:
        return ordinal(self.program, self.belt)

    def _sort_key(self) -> tuple[int, int]:
        return self.ordinal, self.stripes

    def _check_comparable(self, other: Rank) -> None:
        if self.program is not other.program:
            raise IncomparableRankError(
                f"Cannot compare a {self.program.value} rank with a {other.program.value} rank"
            )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        self._check_comparable(other)
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        self._check_comparable(other)
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        self._check_comparable(other)
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        self._check_comparable(other)
        return self._sort_key() >= other._sort_key()


def is_advancement(current: Rank, new: Rank) -> bool:
    """True if ``new`` is a higher belt, or the same belt with more stripes."""
    return new > current
