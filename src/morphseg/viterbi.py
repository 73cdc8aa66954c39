from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional

from .dict.connection import ConnectionCostMatrix
from .errors import NoPathError
from .lattice import BEGIN_ANCHOR, Lattice

logger = logging.getLogger(__name__)

INF = 10**18


@dataclass
class ViterbiResult:
    # lattice node ids from the begin anchor to the end anchor, both included
    node_ids: List[int]
    total_cost: int


def viterbi_search(
    lattice: Lattice,
    conn: ConnectionCostMatrix,
) -> ViterbiResult:
    """
    minimum-cost path through the lattice

    Node ids are visited in arena order, which groups nodes by increasing begin
    position, so every predecessor (a node ending where this one begins) is
    final before it is read. Ties keep the first predecessor in arena order,
    i.e. the candidate the dictionary supplied first.
    """
    nodes = lattice.nodes
    best_cost: List[int] = [INF] * len(nodes)
    best_prev: List[Optional[int]] = [None] * len(nodes)
    best_cost[BEGIN_ANCHOR] = 0

    for idx in range(BEGIN_ANCHOR + 1, len(nodes)):
        node = nodes[idx]
        best = INF
        best_prev_idx: Optional[int] = None
        for pidx in lattice.by_end[node.begin]:
            prev_cost = best_cost[pidx]
            if prev_cost >= INF:
                continue
            cand = prev_cost + conn.cost(nodes[pidx].right_id, node.left_id)
            if cand < best:
                best = cand
                best_prev_idx = pidx
        if best_prev_idx is not None:
            best_cost[idx] = best + node.cost
            best_prev[idx] = best_prev_idx

    end = lattice.end_anchor
    if best_cost[end] >= INF:
        unreachable = [p for p, ids in enumerate(lattice.by_end) if ids and all(best_cost[i] >= INF for i in ids)]
        logger.error("no path through lattice for %r; unreachable end positions: %s", lattice.text, unreachable)
        raise NoPathError(f"end of text ({len(lattice.text)}) is unreachable")

    # reconstruct best path
    path: List[int] = []
    cur: Optional[int] = end
    while cur is not None:
        path.append(cur)
        cur = best_prev[cur]
    path.reverse()
    return ViterbiResult(path, int(best_cost[end]))
