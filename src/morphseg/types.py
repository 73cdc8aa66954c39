from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

# connection class shared by the begin and end anchors
BOUNDARY_ID = 0

OOV_DICTIONARY_ID = -1
OOV_WORD_ID = -1


class SplitMode(str, Enum):
    """
    granularity of a segmentation: A is the finest, C the coarsest
    """
    A = "A"
    B = "B"
    C = "C"

    @classmethod
    def of(cls, mode: Union["SplitMode", str]) -> "SplitMode":
        if isinstance(mode, SplitMode):
            return mode
        try:
            return cls(str(mode).upper())
        except ValueError:
            raise ValueError(f"unknown split mode: {mode!r} (expected A, B or C)") from None


@dataclass(frozen=True)
class CandidateEntry:
    surface: str
    left_id: int
    right_id: int
    cost: int
    pos_id: int
    dictionary_form: str
    normalized_form: str
    reading: str = ""
    dictionary_id: int = 0
    word_id: int = OOV_WORD_ID
    a_split: Tuple[int, ...] = ()
    b_split: Tuple[int, ...] = ()

    @property
    def is_oov(self) -> bool:
        return self.dictionary_id < 0

    def split_for(self, mode: SplitMode) -> Tuple[int, ...]:
        field = _SPLIT_FIELDS.get(mode)
        if field is None:
            return ()
        return getattr(self, field)


# C units are what the lattice produces, so only A and B carry tables
_SPLIT_FIELDS = {
    SplitMode.A: "a_split",
    SplitMode.B: "b_split",
}


@dataclass(frozen=True)
class LatticeNode:
    begin: int
    end: int
    # None for the begin/end anchors
    entry: Optional[CandidateEntry] = None

    @property
    def is_anchor(self) -> bool:
        return self.entry is None

    @property
    def left_id(self) -> int:
        return BOUNDARY_ID if self.entry is None else self.entry.left_id

    @property
    def right_id(self) -> int:
        return BOUNDARY_ID if self.entry is None else self.entry.right_id

    @property
    def cost(self) -> int:
        return 0 if self.entry is None else self.entry.cost
