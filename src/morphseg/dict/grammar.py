from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

POS_DEPTH = 6


class PosTable:
    """
    intern part-of-speech tag tuples to small integer ids
    shared by every lexicon and the OOV provider of one analyzer
    """
    def __init__(self) -> None:
        self._tags: List[Tuple[str, ...]] = []
        self._ids: Dict[Tuple[str, ...], int] = {}

    @staticmethod
    def normalize(tags: Sequence[str]) -> Tuple[str, ...]:
        # pad/trim to a fixed depth, "*" marks an unused slot
        parts = [t.strip() or "*" for t in tags][:POS_DEPTH]
        parts.extend("*" for _ in range(POS_DEPTH - len(parts)))
        return tuple(parts)

    def intern(self, tags: Sequence[str]) -> int:
        key = self.normalize(tags)
        pos_id = self._ids.get(key)
        if pos_id is None:
            pos_id = len(self._tags)
            self._tags.append(key)
            self._ids[key] = pos_id
        return pos_id

    def tags(self, pos_id: int) -> Tuple[str, ...]:
        if 0 <= pos_id < len(self._tags):
            return self._tags[pos_id]
        raise KeyError(f"unknown part-of-speech id: {pos_id}")

    def __len__(self) -> int:
        return len(self._tags)
