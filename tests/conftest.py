import numpy as np
import pytest

from morphseg.analyzer import Analyzer
from morphseg.dict import ConnectionCostMatrix, Lexicon, PosTable

NOUN = ("noun", "common", "*", "*", "*", "*")
VERB = ("verb", "general", "*", "*", "*", "*")
AUX = ("auxiliary", "*", "*", "*", "*", "*")

LEX_HEADER = "# surface,left,right,cost,pos1-6,dictionary_form,normalized_form,reading,a_split,b_split\n"


def write_dict(root, lex_rows, matrix="1 1\n0 0 0\n", char_def=None, unk_def=None):
    root.mkdir(parents=True, exist_ok=True)
    (root / "lex.csv").write_text(LEX_HEADER + "".join(r + "\n" for r in lex_rows), encoding="utf-8")
    (root / "matrix.def").write_text(matrix, encoding="utf-8")
    if char_def is not None:
        (root / "char.def").write_text(char_def, encoding="utf-8")
    if unk_def is not None:
        (root / "unk.def").write_text(unk_def, encoding="utf-8")
    return root


@pytest.fixture
def pos_table():
    return PosTable()


@pytest.fixture
def make_analyzer():
    def _make(lexicon, costs=None, **kwargs):
        if costs is None:
            conn = ConnectionCostMatrix.zeros()
        else:
            conn = ConnectionCostMatrix.from_array(np.asarray(costs))
        return Analyzer(lexicon, conn, **kwargs)
    return _make


@pytest.fixture
def compound_lexicon(pos_table):
    # "cannot" is one C unit; A mode splits it into "can" + "not"
    lex = Lexicon(pos_table)
    can = lex.add("can", 0, 0, 300, AUX, reading="kan")
    not_ = lex.add("not", 0, 0, 300, AUX, reading="not")
    lex.add("cannot", 0, 0, 400, AUX, reading="kannot", a_split=(can, not_))
    lex.add("go", 0, 0, 200, VERB, reading="go")
    return lex
