from __future__ import annotations
import logging
import re
from typing import List, Optional, Union

from .config import AnalyzerConfig, DictConfig
from .dict import CharClassifier, ConnectionCostMatrix, Lexicon, LexiconSet, PosTable
from .errors import DictionaryUnavailableError, InvalidInputError
from .lattice import Lattice
from .morpheme import Morpheme, materialize
from .oov import OovProvider
from .split import SplitResolver
from .types import SplitMode
from .viterbi import viterbi_search

logger = logging.getLogger(__name__)

REQUIRED_DICT_FILES = ("lex.csv", "matrix.def")

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def dict_files_present(cfg: DictConfig = DictConfig()) -> bool:
    install_dir = cfg.install_dir
    return all((install_dir / name).exists() for name in REQUIRED_DICT_FILES)


def _validate(text: object) -> str:
    if not isinstance(text, str):
        raise InvalidInputError(f"text must be str, got {type(text).__name__}")
    m = _LONE_SURROGATE.search(text)
    if m is not None:
        raise InvalidInputError(f"unpaired surrogate U+{ord(m.group()):04X} at offset {m.start()}")
    return text


class Analyzer:
    """
    Segment text into morphemes.

    The lexicons, connection matrix and OOV provider are loaded once here and
    only read afterwards, so one Analyzer can serve several threads; every
    ``analyze`` call builds its own lattice.
    """
    def __init__(
        self,
        lexicons: Union[LexiconSet, Lexicon],
        conn: ConnectionCostMatrix,
        oov: Optional[OovProvider] = None,
        cfg: AnalyzerConfig = AnalyzerConfig(),
    ) -> None:
        if isinstance(lexicons, Lexicon):
            lexicons = LexiconSet(lexicons)
        self.cfg = cfg
        self.lexicons = lexicons
        self.pos_table: PosTable = lexicons.pos_table
        self.conn = conn
        self.oov = oov or OovProvider(self.pos_table, penalty=cfg.oov_penalty, default_pos=cfg.oov_pos)
        if self.oov.pos_table is not self.pos_table:
            raise ValueError("OOV provider must share the lexicons' part-of-speech table")

        self.lexicons.load()
        self.conn.load()
        self.oov.load()
        self.resolver = SplitResolver(self.lexicons, self.conn, self.oov, self.pos_table)

    @classmethod
    def from_config(
        cls,
        dict_cfg: DictConfig = DictConfig(),
        cfg: AnalyzerConfig = AnalyzerConfig(),
    ) -> "Analyzer":
        if not dict_files_present(dict_cfg):
            missing = [name for name in REQUIRED_DICT_FILES if not (dict_cfg.install_dir / name).exists()]
            raise DictionaryUnavailableError(
                f"dictionary files missing under {dict_cfg.install_dir}: {', '.join(missing)}"
            )
        pos_table = PosTable()
        system = Lexicon.from_csv(dict_cfg.lex_csv, pos_table, max_word_len=cfg.max_word_len)
        users = [
            Lexicon.from_csv(path, pos_table, dictionary_id=i, max_word_len=cfg.max_word_len)
            for i, path in enumerate(dict_cfg.user_lexicons, start=1)
        ]
        classifier = CharClassifier(dict_cfg.char_def if dict_cfg.char_def.exists() else None)
        oov = OovProvider(
            pos_table,
            penalty=cfg.oov_penalty,
            default_pos=cfg.oov_pos,
            classifier=classifier,
            unk_def_path=dict_cfg.unk_def if dict_cfg.unk_def.exists() else None,
        )
        logger.info("loading dictionary from %s", dict_cfg.install_dir)
        return cls(LexiconSet(system, *users), ConnectionCostMatrix(dict_cfg.matrix_def), oov, cfg)

    def analyze(self, text: str, mode: Union[SplitMode, str, None] = None) -> List[Morpheme]:
        """
        Segment ``text``; ``mode`` defaults to ``cfg.default_mode``.

        Either returns morphemes covering the whole text or raises; there are
        no partial results.
        """
        text = _validate(text)
        mode = self.cfg.default_mode if mode is None else SplitMode.of(mode)
        if not text:
            return []

        lattice = Lattice.build(text, self.lexicons, self.oov)
        result = viterbi_search(lattice, self.conn)
        # the lattice yields C units; finer modes go through each entry's split table
        morphs = materialize(lattice, result, self.pos_table, mode, self.resolver)
        if mode is not SplitMode.C:
            out: List[Morpheme] = []
            for m in morphs:
                out.extend(self.resolver.resegment(m, mode))
            morphs = out
        logger.debug("analyzed %d chars into %d morphemes (mode %s, cost %d)",
                     len(text), len(morphs), mode.value, result.total_cost)
        return morphs
