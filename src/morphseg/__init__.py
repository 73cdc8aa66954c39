from .errors import AnalyzerError, DictionaryUnavailableError, InvalidInputError, NoPathError
from .types import SplitMode

__all__ = [
    "Analyzer",
    "Morpheme",
    "SplitMode",
    "AnalyzerError",
    "DictionaryUnavailableError",
    "InvalidInputError",
    "NoPathError",
]


def __getattr__(name: str):
    # keep numpy out of `import morphseg` until an analyzer is needed
    if name == "Analyzer":
        from .analyzer import Analyzer
        return Analyzer
    if name == "Morpheme":
        from .morpheme import Morpheme
        return Morpheme
    raise AttributeError(name)
