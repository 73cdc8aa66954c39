from __future__ import annotations
import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

from ..errors import DictionaryUnavailableError
from ..types import CandidateEntry
from .grammar import POS_DEPTH, PosTable

logger = logging.getLogger(__name__)

# surface,left_id,right_id,cost,pos1..pos6,dictionary_form,normalized_form,reading,a_split,b_split
CSV_COLUMNS = 4 + POS_DEPTH + 5


class DictionaryIndex(Protocol):
    def lookup(self, text: str, position: int) -> Iterable[CandidateEntry]:
        ...


class TrieNode:
    __slots__ = ("children", "entries")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.entries: List[CandidateEntry] = []


class Trie:
    def __init__(self) -> None:
        self.root = TrieNode()

    def insert(self, key: str, entry: CandidateEntry) -> None:
        node = self.root
        for ch in key:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = TrieNode()
                node.children[ch] = nxt
            node = nxt
        node.entries.append(entry)

    def common_prefix_search(self, text: str, start: int, max_len: int) -> Iterator[Tuple[int, CandidateEntry]]:
        node = self.root
        end = start
        for _ in range(max_len):
            if end >= len(text):
                break
            node = node.children.get(text[end])
            if node is None:
                break
            end += 1
            for e in node.entries:
                yield end, e


def _parse_split(field: str) -> Tuple[int, ...]:
    field = field.strip()
    if not field or field == "*":
        return ()
    return tuple(int(p) for p in field.split("/"))


class Lexicon:
    """
    one dictionary (system or user) held in a trie
    entries come from a CSV source file, from add(), or both (CSV first)
    """
    def __init__(
        self,
        pos_table: PosTable,
        dictionary_id: int = 0,
        max_word_len: int = 32,
        csv_path: Optional[Path] = None,
    ) -> None:
        self.pos_table = pos_table
        self.dictionary_id = dictionary_id
        self.max_word_len = max_word_len
        self.csv_path = csv_path
        self.trie = Trie()
        self._entries: List[CandidateEntry] = []
        self._loaded = csv_path is None

    @classmethod
    def from_csv(
        cls,
        csv_path: Path,
        pos_table: PosTable,
        dictionary_id: int = 0,
        max_word_len: int = 32,
    ) -> "Lexicon":
        return cls(pos_table, dictionary_id=dictionary_id, max_word_len=max_word_len, csv_path=Path(csv_path))

    def add(
        self,
        surface: str,
        left_id: int,
        right_id: int,
        cost: int,
        pos: Sequence[str],
        dictionary_form: Optional[str] = None,
        normalized_form: Optional[str] = None,
        reading: str = "",
        a_split: Sequence[int] = (),
        b_split: Sequence[int] = (),
    ) -> int:
        """register an entry and return its word id"""
        if not surface:
            raise ValueError("surface must not be empty")
        self.load()
        word_id = len(self._entries)
        entry = CandidateEntry(
            surface=surface,
            left_id=int(left_id),
            right_id=int(right_id),
            cost=int(cost),
            pos_id=self.pos_table.intern(pos),
            dictionary_form=dictionary_form or surface,
            normalized_form=normalized_form or surface,
            reading=reading,
            dictionary_id=self.dictionary_id,
            word_id=word_id,
            a_split=tuple(a_split),
            b_split=tuple(b_split),
        )
        self._entries.append(entry)
        self.trie.insert(surface, entry)
        return word_id

    def load(self) -> None:
        if self._loaded:
            return
        assert self.csv_path is not None
        # flip first so add() below does not recurse into load()
        self._loaded = True
        skipped = 0
        try:
            with self.csv_path.open("r", encoding="utf-8", newline="") as f:
                for line_no, row in enumerate(csv.reader(f), start=1):
                    if not row or row[0].startswith("#"):
                        continue
                    if len(row) != CSV_COLUMNS:
                        logger.warning("%s:%d: expected %d columns, got %d; skipped",
                                       self.csv_path, line_no, CSV_COLUMNS, len(row))
                        skipped += 1
                        continue
                    if not row[0]:
                        logger.warning("%s:%d: empty surface; skipped", self.csv_path, line_no)
                        skipped += 1
                        continue
                    try:
                        left_id, right_id, cost = int(row[1]), int(row[2]), int(row[3])
                        a_split = _parse_split(row[4 + POS_DEPTH + 3])
                        b_split = _parse_split(row[4 + POS_DEPTH + 4])
                    except ValueError:
                        logger.warning("%s:%d: malformed number; skipped", self.csv_path, line_no)
                        skipped += 1
                        continue
                    dictionary_form, normalized_form, reading = row[4 + POS_DEPTH:4 + POS_DEPTH + 3]
                    self.add(
                        row[0],
                        left_id,
                        right_id,
                        cost,
                        row[4:4 + POS_DEPTH],
                        dictionary_form=None if dictionary_form == "*" else dictionary_form,
                        normalized_form=None if normalized_form == "*" else normalized_form,
                        reading="" if reading == "*" else reading,
                        a_split=a_split,
                        b_split=b_split,
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            self._loaded = False
            self.trie = Trie()
            self._entries = []
            raise DictionaryUnavailableError(f"cannot read lexicon {self.csv_path}: {e}") from e
        logger.debug("loaded %d entries from %s (%d rows skipped)", len(self._entries), self.csv_path, skipped)

    def lookup(self, text: str, position: int) -> Iterator[CandidateEntry]:
        """
        yield every entry whose surface matches text at `position`, shortest first
        """
        self.load()
        for _, entry in self.trie.common_prefix_search(text, position, self.max_word_len):
            yield entry

    def entry(self, word_id: int) -> CandidateEntry:
        self.load()
        if 0 <= word_id < len(self._entries):
            return self._entries[word_id]
        raise KeyError(f"unknown word id {word_id} in dictionary {self.dictionary_id}")

    def __len__(self) -> int:
        self.load()
        return len(self._entries)


class LexiconSet:
    """
    the system lexicon (dictionary id 0) chained with user lexicons (ids >= 1)
    """
    def __init__(self, system: Lexicon, *users: Lexicon) -> None:
        if system.dictionary_id != 0:
            raise ValueError("system lexicon must have dictionary id 0")
        self.system = system
        self.users: Tuple[Lexicon, ...] = tuple(users)
        self._by_id: Dict[int, Lexicon] = {0: system}
        for lex in self.users:
            if lex.dictionary_id <= 0 or lex.dictionary_id in self._by_id:
                raise ValueError(f"user lexicon needs a unique positive dictionary id, got {lex.dictionary_id}")
            if lex.pos_table is not system.pos_table:
                raise ValueError("user lexicons must share the system part-of-speech table")
            self._by_id[lex.dictionary_id] = lex

    @property
    def pos_table(self) -> PosTable:
        return self.system.pos_table

    def load(self) -> None:
        for lex in self._by_id.values():
            lex.load()

    def lookup(self, text: str, position: int) -> Iterator[CandidateEntry]:
        yield from self.system.lookup(text, position)
        for lex in self.users:
            yield from lex.lookup(text, position)

    def entry(self, dictionary_id: int, word_id: int) -> CandidateEntry:
        lex = self._by_id.get(dictionary_id)
        if lex is None:
            raise KeyError(f"unknown dictionary id {dictionary_id}")
        return lex.entry(word_id)
