from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from .dict.connection import ConnectionCostMatrix
from .dict.grammar import PosTable
from .dict.lexicon import LexiconSet
from .lattice import Lattice
from .morpheme import Morpheme, materialize
from .oov import OovProvider
from .types import CandidateEntry, SplitMode
from .viterbi import viterbi_search

logger = logging.getLogger(__name__)


class SplitView:
    """
    dictionary index restricted to the sub-words of one compound
    """
    def __init__(self, entries: Sequence[CandidateEntry]) -> None:
        seen: Dict[Tuple[int, int], None] = {}
        uniq: List[CandidateEntry] = []
        for e in entries:
            key = (e.dictionary_id, e.word_id)
            if key in seen:
                continue
            seen[key] = None
            uniq.append(e)
        self.entries: Tuple[CandidateEntry, ...] = tuple(uniq)

    def lookup(self, text: str, position: int) -> Iterator[CandidateEntry]:
        for e in self.entries:
            if text.startswith(e.surface, position):
                yield e


class SplitResolver:
    """
    re-segment a morpheme at another granularity by running the lattice and
    the path search again over its span, with only the sub-words its entry
    lists for that mode as dictionary
    """
    def __init__(
        self,
        lexicons: LexiconSet,
        conn: ConnectionCostMatrix,
        oov: OovProvider,
        pos_table: PosTable,
    ) -> None:
        self.lexicons = lexicons
        self.conn = conn
        self.oov = oov
        self.pos_table = pos_table

    def split(self, morpheme: Morpheme, mode: SplitMode) -> List[Morpheme]:
        if mode == morpheme.split_mode or morpheme.is_oov():
            return [morpheme]
        return self.resegment(morpheme, mode)

    def resegment(self, morpheme: Morpheme, mode: SplitMode) -> List[Morpheme]:
        """
        like split() but also applies when `mode` is the morpheme's own mode;
        the analyzer uses this to go from the lattice's C units to A/B units
        """
        word_ids = morpheme.entry.split_for(mode)
        if not word_ids:
            return [morpheme]

        entries: List[CandidateEntry] = []
        for word_id in word_ids:
            try:
                entries.append(self.lexicons.entry(morpheme.dictionary_id(), word_id))
            except KeyError:
                logger.warning("split of %r (mode %s) names unknown word id %d; ignored",
                               morpheme.surface(), mode.value, word_id)

        surface = morpheme.surface()
        lattice = Lattice.build(surface, SplitView(entries), self.oov)
        result = viterbi_search(lattice, self.conn)
        return materialize(
            lattice,
            result,
            self.pos_table,
            mode,
            self,
            text=morpheme.source_text,
            offset=morpheme.begin(),
        )
