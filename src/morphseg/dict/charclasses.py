from __future__ import annotations
import logging
import unicodedata
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..errors import DictionaryUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "DEFAULT"

# used when no char.def is given; keyed by the first letter of the unicode general category
_UNICODE_CATEGORY = {
    "L": "ALPHA",
    "N": "NUMERIC",
    "Z": "SPACE",
    "P": "SYMBOL",
    "S": "SYMBOL",
}


class CharClassifier:
    """
    map a character to a category name
    with a mecab char.def, ranges decide (first matching range wins);
    without one, the unicode general category does
    """
    def __init__(self, char_def_path: Optional[Path] = None) -> None:
        self.char_def_path = char_def_path
        self.names: List[str] = []
        # (start_cp, end_cp_inclusive, category)
        self._ranges: List[Tuple[int, int, str]] = []
        self._loaded = char_def_path is None

    def load(self) -> None:
        if self._loaded:
            return
        assert self.char_def_path is not None
        try:
            raw = self.char_def_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            raise DictionaryUnavailableError(f"cannot read {self.char_def_path}: {e}") from e

        # two kinds of lines:
        # 1) CATEGORY invoke group length
        # 2) 0xXXXX[..0xYYYY] CATEGORY [COMPAT...]
        names: Dict[str, None] = {}
        for line in raw.splitlines():
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            if parts[0].startswith("0x"):
                if len(parts) < 2:
                    continue
                r = parts[0]
                try:
                    if ".." in r:
                        a, b = r.split("..")
                        start, end = int(a, 16), int(b, 16)
                    else:
                        start = end = int(r, 16)
                except ValueError:
                    logger.warning("%s: bad code point range %r; skipped", self.char_def_path, r)
                    continue
                self._ranges.append((start, end, parts[1]))
                continue
            if len(parts) >= 4:
                names[parts[0]] = None

        names.setdefault(DEFAULT_CATEGORY, None)
        self.names = list(names)
        self._loaded = True
        logger.debug("loaded %d categories, %d ranges from %s",
                     len(self.names), len(self._ranges), self.char_def_path)

    def category_of(self, ch: str) -> str:
        self.load()
        if self.char_def_path is None:
            return _UNICODE_CATEGORY.get(unicodedata.category(ch)[0], DEFAULT_CATEGORY)
        cp = ord(ch)
        for a, b, name in self._ranges:
            if a <= cp <= b:
                return name
        return DEFAULT_CATEGORY
