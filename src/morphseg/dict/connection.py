from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, TextIO, Tuple
import numpy as np

from ..errors import DictionaryUnavailableError

logger = logging.getLogger(__name__)


def _read_header(f: TextIO) -> Tuple[int, int]:
    header = ""
    while header.strip() == "":
        header = f.readline()
        if header == "":
            raise DictionaryUnavailableError("matrix.def is empty")
    try:
        a_str, b_str = header.split()
        a, b = int(a_str), int(b_str)
    except ValueError:
        raise DictionaryUnavailableError(f"matrix.def header is malformed: {header.strip()!r}") from None
    if a < 0 or b < 0:
        raise DictionaryUnavailableError(f"matrix.def header has negative sizes: {header.strip()!r}")
    return a, b


class ConnectionCostMatrix:
    """
    connection costs between adjacent nodes, exposed as cost(prev_right_id, next_left_id)
    loaded lazily from a mecab matrix.def (header "right_size left_size",
    rows "right left cost"), or wrapped around an in-memory array
    """
    def __init__(self, matrix_def_path: Optional[Path] = None) -> None:
        self.matrix_def_path = matrix_def_path
        self.right_size = 0
        self.left_size = 0
        self.mat: np.ndarray | None = None

    @classmethod
    def from_array(cls, costs) -> "ConnectionCostMatrix":
        mat = np.asarray(costs, dtype=np.int32)
        if mat.ndim != 2:
            raise ValueError(f"connection costs must be a 2-d array, got shape {mat.shape}")
        conn = cls()
        conn.mat = mat
        conn.right_size, conn.left_size = mat.shape
        return conn

    @classmethod
    def zeros(cls, right_size: int = 1, left_size: int = 1) -> "ConnectionCostMatrix":
        return cls.from_array(np.zeros((right_size, left_size), dtype=np.int32))

    def _read(self, f: TextIO) -> np.ndarray:
        right_size, left_size = _read_header(f)
        mat = np.zeros((right_size, left_size), dtype=np.int32)
        line_no = 1
        for line in f:
            line_no += 1
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            p = s.split()
            if len(p) != 3:
                continue
            try:
                r, l, c = int(p[0]), int(p[1]), int(p[2])
            except ValueError:
                raise DictionaryUnavailableError(f"matrix.def line {line_no} is not numeric: {s!r}") from None
            if not (0 <= r < right_size and 0 <= l < left_size):
                raise DictionaryUnavailableError(
                    f"matrix.def index out of bounds at line {line_no}: "
                    f"(r={r}, l={l}) not in (right={right_size}, left={left_size})"
                )
            mat[r, l] = c
        # set sizes only after successful load
        self.right_size = right_size
        self.left_size = left_size
        return mat

    def load(self) -> None:
        if self.mat is not None:
            return
        if self.matrix_def_path is None:
            raise DictionaryUnavailableError("no matrix.def path and no in-memory costs")
        try:
            with self.matrix_def_path.open("r", encoding="utf-8", errors="ignore") as f:
                self.mat = self._read(f)
        except OSError as e:
            raise DictionaryUnavailableError(f"cannot read {self.matrix_def_path}: {e}") from e
        logger.debug("loaded %dx%d connection matrix from %s",
                     self.right_size, self.left_size, self.matrix_def_path)

    def cost(self, prev_right_id: int, next_left_id: int) -> int:
        self.load()
        assert self.mat is not None
        if 0 <= prev_right_id < self.right_size and 0 <= next_left_id < self.left_size:
            return int(self.mat[prev_right_id, next_left_id])
        # graceful degradation for oor IDs
        return 0
