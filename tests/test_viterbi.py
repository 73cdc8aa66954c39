import numpy as np

from morphseg.dict import ConnectionCostMatrix, Lexicon
from morphseg.lattice import Lattice
from morphseg.oov import OovProvider
from morphseg.viterbi import viterbi_search

from conftest import NOUN, VERB


def _surfaces(lat, res):
    return [lat.nodes[i].entry.surface for i in res.node_ids[1:-1]]


def test_picks_cheapest_segmentation(pos_table):
    lex = Lexicon(pos_table)
    lex.add("a", 0, 0, 10, NOUN)
    lex.add("b", 0, 0, 10, NOUN)
    lex.add("c", 0, 0, 10, NOUN)
    lex.add("ab", 0, 0, 50, NOUN)
    lex.add("bc", 0, 0, 5, NOUN)
    lat = Lattice.build("abc", lex, OovProvider(pos_table))
    res = viterbi_search(lat, ConnectionCostMatrix.zeros())

    assert _surfaces(lat, res) == ["a", "bc"]
    assert res.total_cost == 15


def test_connection_costs_change_the_winner(pos_table):
    # ids: 0 boundary, 1 noun, 2 verb
    lex = Lexicon(pos_table)
    lex.add("a", 1, 1, 10, NOUN)
    lex.add("b", 1, 1, 10, NOUN)
    lex.add("ab", 2, 2, 30, VERB)
    lat = Lattice.build("ab", lex, OovProvider(pos_table))

    flat = ConnectionCostMatrix.zeros(3, 3)
    assert _surfaces(lat, viterbi_search(lat, flat)) == ["a", "b"]

    costs = np.zeros((3, 3), dtype=np.int32)
    costs[1, 1] = 100  # noun after noun is expensive
    res = viterbi_search(lat, ConnectionCostMatrix.from_array(costs))
    assert _surfaces(lat, res) == ["ab"]
    assert res.total_cost == 30


def test_boundary_connection_costs_are_counted(pos_table):
    lex = Lexicon(pos_table)
    lex.add("x", 1, 2, 10, NOUN)
    costs = np.zeros((3, 3), dtype=np.int32)
    costs[0, 1] = 7   # begin -> x
    costs[2, 0] = 11  # x -> end
    lat = Lattice.build("x", lex, OovProvider(pos_table))
    assert viterbi_search(lat, ConnectionCostMatrix.from_array(costs)).total_cost == 28


def test_tie_prefers_candidate_supplied_first(pos_table):
    lex = Lexicon(pos_table)
    first = lex.add("ab", 0, 0, 10, NOUN, reading="first")
    lex.add("ab", 0, 0, 10, NOUN, reading="second")
    lat = Lattice.build("ab", lex, OovProvider(pos_table))
    res = viterbi_search(lat, ConnectionCostMatrix.zeros())
    (idx,) = res.node_ids[1:-1]
    assert lat.nodes[idx].entry.word_id == first


def test_tie_between_segmentations_is_stable(pos_table):
    # a+b and ab cost the same; the earlier node in the lattice wins every time
    lex = Lexicon(pos_table)
    lex.add("a", 0, 0, 5, NOUN)
    lex.add("ab", 0, 0, 10, NOUN)
    lex.add("b", 0, 0, 5, NOUN)
    lat = Lattice.build("ab", lex, OovProvider(pos_table))
    results = {tuple(_surfaces(lat, viterbi_search(lat, ConnectionCostMatrix.zeros()))) for _ in range(5)}
    assert results == {("ab",)}


def test_path_is_contiguous(pos_table):
    lex = Lexicon(pos_table)
    for w in ("th", "the", "he", "cat", "at", "ca"):
        lex.add(w, 0, 0, 10 * len(w), NOUN)
    text = "thecat"
    lat = Lattice.build(text, lex, OovProvider(pos_table))
    res = viterbi_search(lat, ConnectionCostMatrix.zeros())
    nodes = [lat.nodes[i] for i in res.node_ids]
    assert nodes[0].begin == 0 and nodes[-1].end == len(text)
    for a, b in zip(nodes, nodes[1:]):
        assert a.end == b.begin
