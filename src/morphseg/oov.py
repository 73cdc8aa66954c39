from __future__ import annotations
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from .dict.charclasses import DEFAULT_CATEGORY, CharClassifier
from .dict.grammar import PosTable
from .errors import DictionaryUnavailableError
from .types import OOV_DICTIONARY_ID, OOV_WORD_ID, CandidateEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OovRule:
    category: str
    left_id: int
    right_id: int
    cost: int
    pos_id: int


class OovProvider:
    """
    one-character candidates for positions the dictionary does not cover

    Rules are looked up by character category; they come from an unk.def
    (CATEGORY,left_id,right_id,cost,pos1..pos6) or from add_rule(). A category
    without a rule uses DEFAULT, and without DEFAULT a built-in rule with
    connection ids 0, cost 0 and `default_pos`. The configured penalty is added
    on top of the rule cost so dictionary words win wherever they exist.
    """
    def __init__(
        self,
        pos_table: PosTable,
        penalty: int = 10000,
        default_pos: Sequence[str] = ("UNK",),
        classifier: Optional[CharClassifier] = None,
        unk_def_path: Optional[Path] = None,
    ) -> None:
        self.pos_table = pos_table
        self.penalty = penalty
        self.classifier = classifier or CharClassifier()
        self.unk_def_path = unk_def_path
        self.rules: Dict[str, OovRule] = {}
        self.fallback = OovRule(DEFAULT_CATEGORY, 0, 0, 0, pos_table.intern(default_pos))
        self._loaded = unk_def_path is None

    def add_rule(self, category: str, left_id: int, right_id: int, cost: int, pos: Sequence[str]) -> OovRule:
        rule = OovRule(category, int(left_id), int(right_id), int(cost), self.pos_table.intern(pos))
        # first rule per category wins, as in unk.def
        return self.rules.setdefault(category, rule)

    def load(self) -> None:
        if self._loaded:
            return
        assert self.unk_def_path is not None
        try:
            with self.unk_def_path.open("r", encoding="utf-8", newline="") as f:
                for line_no, row in enumerate(csv.reader(f), start=1):
                    if not row or row[0].startswith("#"):
                        continue
                    if len(row) < 5:
                        logger.warning("%s:%d: too few columns; skipped", self.unk_def_path, line_no)
                        continue
                    try:
                        left_id, right_id, cost = int(row[1]), int(row[2]), int(row[3])
                    except ValueError:
                        logger.warning("%s:%d: malformed number; skipped", self.unk_def_path, line_no)
                        continue
                    self.add_rule(row[0], left_id, right_id, cost, row[4:])
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DictionaryUnavailableError(f"cannot read {self.unk_def_path}: {e}") from e
        self._loaded = True
        logger.debug("loaded %d OOV rules from %s", len(self.rules), self.unk_def_path)

    def rule_for(self, ch: str) -> OovRule:
        self.load()
        category = self.classifier.category_of(ch)
        rule = self.rules.get(category) or self.rules.get(DEFAULT_CATEGORY)
        return rule or self.fallback

    def candidate(self, text: str, position: int) -> CandidateEntry:
        ch = text[position]
        rule = self.rule_for(ch)
        return CandidateEntry(
            surface=ch,
            left_id=rule.left_id,
            right_id=rule.right_id,
            cost=rule.cost + self.penalty,
            pos_id=rule.pos_id,
            dictionary_form=ch,
            normalized_form=ch,
            reading="",
            dictionary_id=OOV_DICTIONARY_ID,
            word_id=OOV_WORD_ID,
        )
