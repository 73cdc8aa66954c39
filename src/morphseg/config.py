from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
from platformdirs import user_data_dir

from .types import SplitMode


@dataclass(frozen=True)
class DictConfig:
    name: str = "system"
    root_dir: Path = Path(user_data_dir("morphseg", "morphseg")) / "dicts"
    # extra lexicon csv files, dictionary ids 1, 2, ... in this order
    user_lexicons: Tuple[Path, ...] = ()

    @property
    def install_dir(self) -> Path:
        return self.root_dir / self.name

    @property
    def lex_csv(self) -> Path:
        return self.install_dir / "lex.csv"

    @property
    def matrix_def(self) -> Path:
        return self.install_dir / "matrix.def"

    @property
    def char_def(self) -> Path:
        return self.install_dir / "char.def"

    @property
    def unk_def(self) -> Path:
        return self.install_dir / "unk.def"


@dataclass(frozen=True)
class AnalyzerConfig:
    max_word_len: int = 32
    # added to every OOV candidate; keep it above any dictionary word cost
    oov_penalty: int = 10000
    oov_pos: Tuple[str, ...] = ("UNK", "*", "*", "*", "*", "*")
    default_mode: SplitMode = SplitMode.C
