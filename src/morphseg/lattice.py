from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

from .dict.lexicon import DictionaryIndex
from .errors import NoPathError
from .oov import OovProvider
from .types import LatticeNode

logger = logging.getLogger(__name__)

BEGIN_ANCHOR = 0


@dataclass
class Lattice:
    text: str
    # arena; node ids below index into it. 0 is the begin anchor, the last node the end anchor
    nodes: List[LatticeNode]
    # by_begin[i] / by_end[i] = ids of nodes that begin / end at i
    by_begin: List[List[int]]
    by_end: List[List[int]]

    @classmethod
    def build(
        cls,
        text: str,
        index: DictionaryIndex,
        oov: OovProvider,
    ) -> "Lattice":
        n = len(text)
        nodes: List[LatticeNode] = []
        by_begin: List[List[int]] = [[] for _ in range(n + 1)]
        by_end: List[List[int]] = [[] for _ in range(n + 1)]

        def add(node: LatticeNode, anchor: str = "") -> None:
            idx = len(nodes)
            nodes.append(node)
            # the begin anchor only ends at 0, the end anchor only begins at n
            if anchor != "begin":
                by_begin[node.begin].append(idx)
            if anchor != "end":
                by_end[node.end].append(idx)

        add(LatticeNode(0, 0), anchor="begin")
        for i in range(n):
            found = False
            for entry in index.lookup(text, i):
                end = i + len(entry.surface)
                if end <= i or end > n:
                    logger.warning("dropping candidate %r at %d: span [%d, %d) outside text of length %d",
                                   entry.surface, i, i, end, n)
                    continue
                add(LatticeNode(i, end, entry))
                found = True
            if not found:
                # OOV fallback keeps every position reachable
                add(LatticeNode(i, i + 1, oov.candidate(text, i)))
        add(LatticeNode(n, n), anchor="end")

        dead = [i for i in range(n) if not by_begin[i]]
        if dead:
            raise NoPathError(f"lattice has no node beginning at positions {dead}")
        logger.debug("built lattice: %d chars, %d nodes", n, len(nodes))
        return cls(text=text, nodes=nodes, by_begin=by_begin, by_end=by_end)

    @property
    def end_anchor(self) -> int:
        return len(self.nodes) - 1

    def candidates_from(self, begin: int) -> List[LatticeNode]:
        if begin < 0 or begin >= len(self.by_begin):
            return []
        return [self.nodes[i] for i in self.by_begin[begin]]

    def __len__(self) -> int:
        return len(self.nodes)
