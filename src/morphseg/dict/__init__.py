from .grammar import PosTable
from .lexicon import DictionaryIndex, Lexicon, LexiconSet
from .connection import ConnectionCostMatrix
from .charclasses import CharClassifier

__all__ = [
    "PosTable",
    "DictionaryIndex",
    "Lexicon",
    "LexiconSet",
    "ConnectionCostMatrix",
    "CharClassifier",
]
