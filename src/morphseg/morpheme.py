from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .dict.grammar import PosTable
from .lattice import Lattice
from .types import CandidateEntry, SplitMode
from .viterbi import ViterbiResult

if TYPE_CHECKING:
    from .split import SplitResolver


class Morpheme:
    """
    A segment of analyzed text and the dictionary data behind it.

    Read-only. ``begin()``/``end()`` are character offsets into the text that
    was passed to ``Analyzer.analyze``, and ``surface()`` is always that exact
    slice; spelling normalization only shows up in ``normalized_form()``.
    """
    __slots__ = ("_text", "_begin", "_end", "_entry", "_mode", "_pos_table", "_resolver")

    def __init__(
        self,
        text: str,
        begin: int,
        end: int,
        entry: CandidateEntry,
        mode: SplitMode,
        pos_table: PosTable,
        resolver: Optional["SplitResolver"] = None,
    ) -> None:
        self._text = text
        self._begin = begin
        self._end = end
        self._entry = entry
        self._mode = mode
        self._pos_table = pos_table
        self._resolver = resolver

    def begin(self) -> int:
        return self._begin

    def end(self) -> int:
        return self._end

    def surface(self) -> str:
        return self._text[self._begin:self._end]

    def part_of_speech(self) -> List[str]:
        return list(self._pos_table.tags(self._entry.pos_id))

    def part_of_speech_id(self) -> int:
        return self._entry.pos_id

    def dictionary_form(self) -> str:
        return self._entry.dictionary_form

    def normalized_form(self) -> str:
        return self._entry.normalized_form

    def reading_form(self) -> str:
        """Reading of the morpheme, empty for OOV."""
        if self._entry.is_oov:
            return ""
        return self._entry.reading

    def split(self, mode: Union[SplitMode, str]) -> List["Morpheme"]:
        """Re-segment this morpheme in another split mode.

        Returns ``[self]`` when ``mode`` is the mode this morpheme was produced
        for or when there is nothing finer to split into.
        """
        mode = SplitMode.of(mode)
        if self._resolver is None:
            return [self]
        return self._resolver.split(self, mode)

    def is_oov(self) -> bool:
        return self._entry.is_oov

    def word_id(self) -> int:
        """Word id inside its dictionary; undefined (-1) for OOV."""
        return self._entry.word_id

    def dictionary_id(self) -> int:
        """0 for the system dictionary, positive for user dictionaries, negative for OOV."""
        return self._entry.dictionary_id

    @property
    def split_mode(self) -> SplitMode:
        return self._mode

    @property
    def entry(self) -> CandidateEntry:
        return self._entry

    @property
    def source_text(self) -> str:
        # the whole analyzed text, not just this morpheme's span
        return self._text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "begin": self._begin,
            "end": self._end,
            "surface": self.surface(),
            "part_of_speech": self.part_of_speech(),
            "part_of_speech_id": self.part_of_speech_id(),
            "dictionary_form": self.dictionary_form(),
            "normalized_form": self.normalized_form(),
            "reading_form": self.reading_form(),
            "is_oov": self.is_oov(),
            "word_id": self.word_id(),
            "dictionary_id": self.dictionary_id(),
        }

    def _key(self):
        return (self._begin, self._end, self.surface(), self._entry, self._mode)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Morpheme):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __len__(self) -> int:
        return self._end - self._begin

    def __repr__(self) -> str:
        return f"<Morpheme {self.surface()!r} [{self._begin}, {self._end}) {self._mode.value}>"


def materialize(
    lattice: Lattice,
    result: ViterbiResult,
    pos_table: PosTable,
    mode: SplitMode,
    resolver: Optional["SplitResolver"] = None,
    text: Optional[str] = None,
    offset: int = 0,
) -> List[Morpheme]:
    """
    turn a path into morphemes, skipping the anchors
    `text`/`offset` place a lattice built over a slice back into the full text
    """
    full_text = lattice.text if text is None else text
    out: List[Morpheme] = []
    for idx in result.node_ids:
        node = lattice.nodes[idx]
        if node.entry is None:
            continue
        out.append(Morpheme(
            full_text,
            node.begin + offset,
            node.end + offset,
            node.entry,
            mode,
            pos_table,
            resolver,
        ))
    return out
